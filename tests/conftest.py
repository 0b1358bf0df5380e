"""
Shared fixtures for Gauge tests.

Provides a default estimator and engine, a Click test runner and a
helper that writes TOML configuration files into a temporary directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

from gauge.analyzers.estimator import QualityEstimator
from gauge.analyzers.patterns import PatternDetector
from gauge.core.engine import GaugeEngine
from shared.config import GaugeConfig


# =============================================================================
# TEST DATA
# =============================================================================

# Nine characters from four classes with no detectable pattern: 76 bits
WEAK_PASSWORD = "Xk9#mQ2$v"

STRONG_PASSWORD = "Tr0ub4dor&3xQ9"


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def estimator() -> QualityEstimator:
    return QualityEstimator()


@pytest.fixture
def detector() -> PatternDetector:
    return PatternDetector()


@pytest.fixture
def engine() -> GaugeEngine:
    """Engine built from the default configuration."""
    return GaugeEngine(GaugeConfig())


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a function that writes *text* to a config.toml and returns its path."""

    def _write(text: str) -> Path:
        path = tmp_path / "config.toml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
