"""
Gauge Analyzers
================

Entropy estimation and tier classification for the Gauge password
quality estimator. Both are pure functions of their input and safe to
call concurrently.
"""

from gauge.analyzers.estimator import QualityEstimator, estimate_bits
from gauge.analyzers.patterns import PatternDetector
from gauge.analyzers.tiers import (
    DEFAULT_TABLE,
    UNBOUNDED,
    ConfigurationError,
    CutoffTable,
    TierCutoff,
    classify,
)

__all__ = [
    "QualityEstimator",
    "estimate_bits",
    "PatternDetector",
    "DEFAULT_TABLE",
    "UNBOUNDED",
    "ConfigurationError",
    "CutoffTable",
    "TierCutoff",
    "classify",
]
