"""
Gauge Output Module
====================

Console display for Gauge results.
"""

from gauge.output.console import TIER_COLOURS, GaugeConsoleOutput

__all__ = [
    "TIER_COLOURS",
    "GaugeConsoleOutput",
]
