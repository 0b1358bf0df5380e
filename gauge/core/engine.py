"""
Gauge Assessment Engine
========================

Facade over the estimator and the tier classifier. The engine turns a
:class:`GaugeConfig` into a configured :class:`PatternDetector`,
:class:`QualityEstimator` and :class:`CutoffTable`, scores single
passwords and audits lists of labelled credentials.

Each password is scored by an independent call; nothing is cached and no
password text is retained or logged.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional

from shared.config import GaugeConfig
from shared.logger import GaugeLogger
from shared.models import Finding, ScanResult, Severity

from gauge.analyzers.estimator import QualityEstimator
from gauge.analyzers.patterns import PatternDetector
from gauge.analyzers.tiers import ConfigurationError, CutoffTable
from gauge.core.models import AuditEntry, PasswordAssessment, QualityTier


_TIER_SEVERITY: dict[QualityTier, Severity] = {
    QualityTier.VERY_WEAK: Severity.HIGH,
    QualityTier.WEAK: Severity.MEDIUM,
    QualityTier.MODERATE: Severity.LOW,
    QualityTier.STRONG: Severity.INFO,
    QualityTier.VERY_STRONG: Severity.INFO,
}

_TIER_ADVICE: dict[QualityTier, str] = {
    QualityTier.VERY_WEAK: "Replace this password now with a long, randomly generated one.",
    QualityTier.WEAK: "Replace this password with a longer one that avoids common patterns.",
    QualityTier.MODERATE: "Consider lengthening this password or generating a random one.",
    QualityTier.STRONG: "No action needed.",
    QualityTier.VERY_STRONG: "No action needed.",
}


# Finding titles are capped by shared.models.Finding
_MAX_TITLE = 256


def mask_password(password: str) -> str:
    """Mask a password for display.

    Passwords of up to four characters are fully masked; longer ones
    keep the first and last character when it is printable. Surrogates
    and control characters are always masked.
    """
    if len(password) <= 4:
        return "*" * len(password)
    return _edge(password[0]) + "*" * (len(password) - 2) + _edge(password[-1])


def _edge(ch: str) -> str:
    return ch if ch.isprintable() and not ch.isspace() else "*"


def _finding_title(label: str) -> str:
    title = label.strip() or "(unlabelled)"
    if len(title) > _MAX_TITLE:
        title = title[: _MAX_TITLE - 3] + "..."
    return title


class GaugeEngine:
    """Scores passwords according to a Gauge configuration.

    Usage::

        engine = GaugeEngine()
        assessment = engine.assess("Tr0ub4dor&3xQ9")
        result = engine.audit([("mail", "hunter2"), ("bank", "Xk#9...")])

    Attributes:
        config: Gauge configuration instance.
        table: Cutoff table built from ``config.gauge.cutoffs``.
        flag_threshold: Tiers at or below this one are reported by audits.

    Raises:
        ConfigurationError: If the configured cutoffs or the
            ``flag_at_or_below`` tier are invalid.
    """

    def __init__(self, config: Optional[GaugeConfig] = None) -> None:
        self.config = config or GaugeConfig()
        settings = self.config.gauge
        global_settings = self.config.global_settings

        self.logger = GaugeLogger(
            "engine",
            log_level="DEBUG" if global_settings.debug else global_settings.log_level,
            log_file=global_settings.log_file or None,
            json_logs=global_settings.log_json,
        )

        self.table = CutoffTable.from_cutoffs(settings.cutoffs)
        try:
            self.flag_threshold = QualityTier(settings.flag_at_or_below)
        except ValueError as exc:
            raise ConfigurationError(
                f"Unknown tier for flag_at_or_below: {settings.flag_at_or_below!r}"
            ) from exc

        self._estimator = QualityEstimator(
            PatternDetector(
                min_word_length=settings.min_word_length,
                max_sequence_step=settings.max_sequence_step,
            )
        )
        self.logger.debug("Engine ready", cutoffs=list(settings.cutoffs))

    # ------------------------------------------------------------------ #
    #  Single Password
    # ------------------------------------------------------------------ #

    def estimate_bits(self, password: str) -> int:
        """Entropy estimate of *password* in whole bits."""
        return self._estimator.estimate_bits(password)

    def classify(self, bits: int) -> QualityTier:
        """Tier of *bits* under the configured cutoff table."""
        return self.table.classify(bits)

    def assess(self, password: str) -> PasswordAssessment:
        """Estimate and classify a single password.

        Args:
            password: Password text, already resolved by the caller.

        Returns:
            PasswordAssessment with a masked password, never the text.
        """
        breakdown = self._estimator.explain(password)
        tier = self.table.classify(breakdown.bits)
        self.logger.debug(
            "Assessed %d-character password: %d bits, %s",
            breakdown.length,
            breakdown.bits,
            tier.value,
        )
        return PasswordAssessment(
            password_masked=mask_password(password),
            length=breakdown.length,
            bits=breakdown.bits,
            tier=tier,
            breakdown=breakdown,
        )

    def is_flagged(self, tier: QualityTier) -> bool:
        """Whether *tier* is at or below the configured flag threshold."""
        return tier.rank <= self.flag_threshold.rank

    # ------------------------------------------------------------------ #
    #  Credential Audit
    # ------------------------------------------------------------------ #

    def audit(self, entries: Iterable[tuple[str, str]], target: str = "<entries>") -> ScanResult:
        """Score every ``(label, password)`` pair independently.

        Entries at or below the flag threshold produce one finding each,
        with a severity derived from the tier. ``metadata`` holds the
        per-entry rows (masked) and the count of entries per tier.

        Args:
            entries: Iterable of ``(label, password)`` pairs.
            target: Name of the audited source for the result.

        Returns:
            Finalised ScanResult.
        """
        result = ScanResult(tool_name="gauge", target=target)
        rows: list[AuditEntry] = []
        counts: Counter[str] = Counter()

        with self.logger.operation("audit"), self.logger.timed(f"audit of {target}"):
            for label, password in entries:
                bits = self._estimator.estimate_bits(password)
                tier = self.table.classify(bits)
                counts[tier.value] += 1
                rows.append(AuditEntry(
                    label=label,
                    password_masked=mask_password(password),
                    length=len(password),
                    bits=bits,
                    tier=tier,
                ))

                if self.is_flagged(tier):
                    result.add_finding(Finding(
                        severity=_TIER_SEVERITY[tier],
                        title=_finding_title(label),
                        description=(
                            f"Password quality is {tier.label.lower()} "
                            f"({bits} bits, {len(password)} characters)."
                        ),
                        evidence={"bits": bits, "tier": tier.value, "length": len(password)},
                        recommendation=_TIER_ADVICE[tier],
                    ))

            self.logger.info(
                "Audited %d entries, %d flagged",
                len(rows),
                result.finding_count,
                tier_counts=dict(counts),
            )

        result.metadata = {
            "entries": [row.model_dump(mode="json") for row in rows],
            "tier_counts": {tier.value: counts.get(tier.value, 0) for tier in self.table.tiers},
            "flag_at_or_below": self.flag_threshold.value,
        }
        return result.finalize(
            f"Audited {len(rows)} entries from {target}: "
            f"{result.finding_count} at or below {self.flag_threshold.label.lower()}."
        )
