"""
Quality Tier Classifier
========================

Maps an entropy estimate to a :class:`QualityTier` through an ascending
table of upper-bound cutoffs. The last entry is unbounded, so the table
partitions ``[0, inf)`` with no gaps and no overlaps; a value belongs to
the first entry whose cutoff is greater than or equal to it.

The default table uses the bands published for KeePass password quality
(64, 80, 112 and 128 bits). A table is validated once, when it is
built; classification against a valid table cannot fail.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Union

from gauge.core.models import QualityTier


# Sentinel cutoff for the top tier
UNBOUNDED = None


class ConfigurationError(ValueError):
    """Raised when a cutoff table or tier setting is invalid."""


class TierCutoff(NamedTuple):
    """One table row: values up to and including *cutoff* map to *tier*."""

    cutoff: Optional[Real]
    tier: QualityTier


class CutoffTable:
    """Validated ascending cutoff table.

    Usage::

        table = CutoffTable.from_cutoffs([64, 80, 112, 128])
        table.classify(70)        # QualityTier.WEAK

    Raises:
        ConfigurationError: On construction, if the table is empty, not
            strictly ascending, has a negative or non-numeric cutoff,
            names an unknown tier, or does not end with exactly one
            unbounded entry.
    """

    def __init__(self, entries: Iterable[tuple[Optional[Real], Union[QualityTier, str]]]) -> None:
        try:
            items = list(entries)
        except TypeError as exc:
            raise ConfigurationError(f"Cutoff table must be a sequence of pairs: {exc}") from exc

        rows: list[TierCutoff] = []
        for entry in items:
            try:
                cutoff, tier = entry
                if isinstance(cutoff, float) and cutoff == math.inf:
                    cutoff = UNBOUNDED
                rows.append(TierCutoff(cutoff, QualityTier(tier)))
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"Invalid cutoff table entry {entry!r}: {exc}") from exc
        self._entries: tuple[TierCutoff, ...] = tuple(rows)
        self._validate()

    @classmethod
    def from_cutoffs(
        cls,
        cutoffs: Sequence[Real],
        tiers: Optional[Sequence[Union[QualityTier, str]]] = None,
    ) -> CutoffTable:
        """Build a table from finite ascending cutoffs.

        The tiers are assigned in order and the last tier gets the
        unbounded cutoff, so *tiers* must be one longer than *cutoffs*.

        Args:
            cutoffs: Finite upper bounds, strictly ascending.
            tiers: Tiers to assign; defaults to every :class:`QualityTier`
                weakest first.

        Returns:
            A validated CutoffTable.
        """
        try:
            cutoffs = list(cutoffs)
        except TypeError as exc:
            raise ConfigurationError(f"Cutoffs must be a sequence of numbers: {exc}") from exc
        tier_list = list(tiers) if tiers is not None else list(QualityTier)
        if len(tier_list) != len(cutoffs) + 1:
            raise ConfigurationError(
                f"{len(tier_list)} tiers need {len(tier_list) - 1} finite cutoffs, "
                f"got {len(cutoffs)}"
            )
        bounds: list[Optional[Real]] = [*cutoffs, UNBOUNDED]
        return cls(zip(bounds, tier_list))

    def _validate(self) -> None:
        if not self._entries:
            raise ConfigurationError("Cutoff table is empty")

        previous: Optional[Real] = None
        for position, (cutoff, _tier) in enumerate(self._entries):
            is_last = position == len(self._entries) - 1
            if cutoff is UNBOUNDED:
                if not is_last:
                    raise ConfigurationError(
                        f"Unbounded cutoff at position {position} must be the last entry"
                    )
                continue
            if isinstance(cutoff, bool) or not isinstance(cutoff, Real) or math.isnan(cutoff):
                raise ConfigurationError(f"Cutoff {cutoff!r} is not a number")
            if cutoff < 0:
                raise ConfigurationError(f"Cutoff {cutoff} is negative")
            if previous is not None and cutoff <= previous:
                raise ConfigurationError(
                    f"Cutoffs must be strictly ascending: {cutoff} follows {previous}"
                )
            if is_last:
                raise ConfigurationError(
                    "The last cutoff must be unbounded so every value has a tier"
                )
            previous = cutoff

    # ------------------------------------------------------------------ #
    #  Classification
    # ------------------------------------------------------------------ #

    def classify(self, bits: Real) -> QualityTier:
        """Return the tier of the first cutoff greater than or equal to *bits*."""
        for cutoff, tier in self._entries:
            if cutoff is UNBOUNDED or bits <= cutoff:
                return tier
        return self._entries[-1].tier

    def bounds(self) -> list[tuple[int, Optional[Real], QualityTier]]:
        """Inclusive ``(lower, upper, tier)`` ranges for display.

        Bits are whole numbers, so each range starts one above the
        previous cutoff.
        """
        ranges: list[tuple[int, Optional[Real], QualityTier]] = []
        lower = 0
        for cutoff, tier in self._entries:
            ranges.append((lower, cutoff, tier))
            if cutoff is not UNBOUNDED:
                lower = int(cutoff) + 1
        return ranges

    @property
    def tiers(self) -> list[QualityTier]:
        return [entry.tier for entry in self._entries]

    def __iter__(self) -> Iterator[TierCutoff]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CutoffTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        rows = ", ".join(
            f"{'inf' if cutoff is UNBOUNDED else cutoff}:{tier.value}"
            for cutoff, tier in self._entries
        )
        return f"CutoffTable({rows})"


DEFAULT_TABLE = CutoffTable([
    (64, QualityTier.VERY_WEAK),
    (80, QualityTier.WEAK),
    (112, QualityTier.MODERATE),
    (128, QualityTier.STRONG),
    (UNBOUNDED, QualityTier.VERY_STRONG),
])


def classify(
    bits: Real,
    table: Union[CutoffTable, Iterable[tuple[Optional[Real], Union[QualityTier, str]]]] = DEFAULT_TABLE,
) -> QualityTier:
    """Classify *bits* against *table*.

    A raw sequence of ``(cutoff, tier)`` pairs is validated into a
    :class:`CutoffTable` first, so a bad table raises
    :class:`ConfigurationError` before any lookup.
    """
    if not isinstance(table, CutoffTable):
        table = CutoffTable(table)
    return table.classify(bits)
