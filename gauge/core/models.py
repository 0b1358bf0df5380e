"""
Gauge Core Data Models
=======================

Enumerations and Pydantic models for the Gauge password quality
estimator. These models carry the results of entropy estimation and
tier classification to the engine, the CLI output layer and JSON
serialisation.

None of the models stores the password itself: assessments carry a
masked rendering and the length only.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class QualityTier(str, enum.Enum):
    """Ordered password quality tier.

    Members are declared weakest first; :attr:`rank` exposes that order
    because the string values do not sort meaningfully.
    """

    VERY_WEAK = "very_weak"
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    VERY_STRONG = "very_strong"

    @property
    def rank(self) -> int:
        """Position of the tier, 0 for VERY_WEAK."""
        return list(QualityTier).index(self)

    @property
    def label(self) -> str:
        """Human-readable tier name, e.g. ``"Very Weak"``."""
        return self.value.replace("_", " ").title()


class CharClass(str, enum.Enum):
    """Character classes used to size the brute-force alphabet."""

    LOWER = "lower"
    UPPER = "upper"
    DIGIT = "digit"
    SYMBOL = "symbol"
    WHITESPACE = "whitespace"
    OTHER = "other"


# ===================================================================== #
#  Estimation Models
# ===================================================================== #


class PatternMatch(BaseModel):
    """A low-entropy structure found inside a password.

    Attributes:
        kind: Pattern family ("repeat", "sequence", "keyboard",
            "dictionary", "year", "repetition", "mirror", "case_swap").
        start: Index of the first character covered.
        end: Index one past the last character covered.
        bits: Estimated cost of guessing the covered span, in bits.
        detail: Short description that does not reveal the characters.
    """

    kind: str
    start: int
    end: int
    bits: float = 0.0
    detail: str = ""

    @property
    def length(self) -> int:
        return self.end - self.start


class EstimateBreakdown(BaseModel):
    """How an entropy estimate was reached.

    Attributes:
        length: Password length in characters.
        pool_size: Sum of the pool sizes of the classes present.
        char_classes: Character classes present, in declaration order.
        pool_bits: Character-pool estimate before flooring.
        structural_bits: Cheapest pattern-aware segmentation cost.
        matches: Patterns chosen by the cheapest segmentation.
        bits: Reported estimate, ``floor(min(pool, structural))``.
    """

    length: int = 0
    pool_size: int = 0
    char_classes: list[CharClass] = Field(default_factory=list)
    pool_bits: float = 0.0
    structural_bits: float = 0.0
    matches: list[PatternMatch] = Field(default_factory=list)
    bits: int = 0


class PasswordAssessment(BaseModel):
    """Estimate plus tier for a single password.

    Attributes:
        password_masked: Masked rendering safe for display.
        length: Password length in characters.
        bits: Estimated entropy in bits.
        tier: Quality tier under the active cutoff table.
        breakdown: Details of the estimate.
    """

    password_masked: str = ""
    length: int = 0
    bits: int = 0
    tier: QualityTier = QualityTier.VERY_WEAK
    breakdown: EstimateBreakdown = Field(default_factory=EstimateBreakdown)


class AuditEntry(BaseModel):
    """One row of a credential list audit."""

    label: str
    password_masked: str = ""
    length: int = 0
    bits: int = 0
    tier: QualityTier = QualityTier.VERY_WEAK
