"""
Tests for gauge.analyzers.tiers.

Covers the default cutoff table boundaries, table validation and the
helpers built on top of the table.
"""

from __future__ import annotations

import math

import pytest

from gauge import DEFAULT_TABLE, ConfigurationError, CutoffTable, QualityTier, classify
from gauge.analyzers.tiers import UNBOUNDED


class TestDefaultTable:
    """Cutoffs are inclusive upper bounds."""

    @pytest.mark.parametrize(
        ("bits", "tier"),
        [
            (0, QualityTier.VERY_WEAK),
            (64, QualityTier.VERY_WEAK),
            (65, QualityTier.WEAK),
            (80, QualityTier.WEAK),
            (81, QualityTier.MODERATE),
            (112, QualityTier.MODERATE),
            (113, QualityTier.STRONG),
            (128, QualityTier.STRONG),
            (129, QualityTier.VERY_STRONG),
            (10_000, QualityTier.VERY_STRONG),
        ],
    )
    def test_classify(self, bits, tier):
        assert classify(bits) is tier
        assert DEFAULT_TABLE.classify(bits) is tier

    def test_bounds(self):
        assert DEFAULT_TABLE.bounds() == [
            (0, 64, QualityTier.VERY_WEAK),
            (65, 80, QualityTier.WEAK),
            (81, 112, QualityTier.MODERATE),
            (113, 128, QualityTier.STRONG),
            (129, UNBOUNDED, QualityTier.VERY_STRONG),
        ]

    def test_tiers_weakest_first(self):
        assert DEFAULT_TABLE.tiers == list(QualityTier)
        assert len(DEFAULT_TABLE) == 5

    def test_from_cutoffs_matches_default(self):
        table = CutoffTable.from_cutoffs([64, 80, 112, 128])
        assert table == DEFAULT_TABLE
        assert hash(table) == hash(DEFAULT_TABLE)


class TestCustomTables:
    """Caller-supplied tables."""

    def test_raw_pairs(self):
        table = [(10, "weak"), (UNBOUNDED, "strong")]
        assert classify(10, table) is QualityTier.WEAK
        assert classify(11, table) is QualityTier.STRONG

    def test_infinity_is_unbounded(self):
        table = CutoffTable([(20, QualityTier.WEAK), (math.inf, QualityTier.STRONG)])
        assert list(table)[-1].cutoff is UNBOUNDED
        assert table.classify(1_000_000) is QualityTier.STRONG

    def test_single_unbounded_entry(self):
        table = CutoffTable([(UNBOUNDED, QualityTier.MODERATE)])
        assert table.classify(0) is QualityTier.MODERATE

    def test_from_cutoffs_with_tiers(self):
        table = CutoffTable.from_cutoffs([40], tiers=["weak", "strong"])
        assert table.classify(40) is QualityTier.WEAK
        assert table.classify(41) is QualityTier.STRONG

    def test_repr(self):
        assert repr(CutoffTable.from_cutoffs([40], tiers=["weak", "strong"])) == (
            "CutoffTable(40:weak, inf:strong)"
        )


class TestValidation:
    """Invalid tables fail at construction, never during lookup."""

    @pytest.mark.parametrize(
        "entries",
        [
            [],
            [(80, "very_weak"), (64, "weak"), (UNBOUNDED, "strong")],
            [(64, "very_weak"), (64, "weak"), (UNBOUNDED, "strong")],
            [(64, "weak"), (80, "strong")],
            [(UNBOUNDED, "weak"), (64, "strong")],
            [(-1, "weak"), (UNBOUNDED, "strong")],
            [(math.nan, "weak"), (UNBOUNDED, "strong")],
            [(True, "weak"), (UNBOUNDED, "strong")],
            [("64", "weak"), (UNBOUNDED, "strong")],
            [(64, "mediocre"), (UNBOUNDED, "strong")],
            [(64,), (UNBOUNDED, "strong")],
        ],
    )
    def test_invalid_table(self, entries):
        with pytest.raises(ConfigurationError):
            CutoffTable(entries)

    def test_not_iterable(self):
        with pytest.raises(ConfigurationError):
            CutoffTable(64)

    def test_classify_validates_raw_table(self):
        with pytest.raises(ConfigurationError):
            classify(10, [])

    def test_from_cutoffs_count_mismatch(self):
        with pytest.raises(ConfigurationError):
            CutoffTable.from_cutoffs([64, 80])

    def test_from_cutoffs_not_a_list(self):
        with pytest.raises(ConfigurationError):
            CutoffTable.from_cutoffs(64)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
