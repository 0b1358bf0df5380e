"""
Gauge -- Password Quality Estimator
====================================

Estimates the entropy of a password in bits and classifies the estimate
into an ordered quality tier (very weak to very strong).

Modules:
    - gauge.analyzers.estimator: Pattern-aware entropy estimator
    - gauge.analyzers.patterns: Low-entropy pattern detection
    - gauge.analyzers.tiers: Cutoff table and tier classification
    - gauge.core.engine: Configuration-driven assessment facade
    - gauge.core.models: Pydantic data models
    - gauge.output: Console output
    - gauge.cli: Click-based command-line interface

Usage::

    from gauge import classify, estimate_bits

    tier = classify(estimate_bits("Tr0ub4dor&3xQ9"))

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from gauge.analyzers.estimator import QualityEstimator, estimate_bits
from gauge.analyzers.tiers import DEFAULT_TABLE, ConfigurationError, CutoffTable, classify
from gauge.core.models import QualityTier

__version__ = "1.0.0"
__tool_name__ = "gauge"

__all__ = [
    "QualityEstimator",
    "estimate_bits",
    "DEFAULT_TABLE",
    "ConfigurationError",
    "CutoffTable",
    "classify",
    "QualityTier",
]
