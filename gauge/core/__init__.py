"""
Gauge Core Module
==================

Data models for the Gauge password quality estimator. The engine facade
lives in :mod:`gauge.core.engine`.
"""

from gauge.core.models import (
    AuditEntry,
    CharClass,
    EstimateBreakdown,
    PasswordAssessment,
    PatternMatch,
    QualityTier,
)

__all__ = [
    "AuditEntry",
    "CharClass",
    "EstimateBreakdown",
    "PasswordAssessment",
    "PatternMatch",
    "QualityTier",
]
