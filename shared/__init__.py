"""
Gauge Shared Module
===================

Configuration, logging, console and result models shared by the Gauge
engine and CLI.
"""

from shared.config import GaugeConfig

__all__ = ["GaugeConfig"]
