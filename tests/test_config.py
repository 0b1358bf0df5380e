"""
Tests for shared.config.
"""

from __future__ import annotations

import pytest

from shared.config import GaugeConfig, GaugeSettings, GlobalConfig


class TestGaugeConfig:
    """TOML loading with defaults for missing keys."""

    def test_defaults(self):
        config = GaugeConfig()
        assert config.gauge.cutoffs == [64, 80, 112, 128]
        assert config.gauge.flag_at_or_below == "moderate"
        assert config.global_settings.log_level == "INFO"
        assert config.global_settings.log_file == ""

    def test_load_file(self, write_config):
        path = write_config(
            '[global]\nlog_level = "WARNING"\nlog_json = true\n\n'
            "[gauge]\ncutoffs = [40, 60, 90, 120]\nmin_word_length = 5\n"
        )
        config = GaugeConfig.load(path)
        assert config.global_settings.log_level == "WARNING"
        assert config.global_settings.log_json is True
        assert config.gauge.cutoffs == [40, 60, 90, 120]
        assert config.gauge.min_word_length == 5
        assert config.gauge.max_sequence_step == 5

    def test_unknown_keys_ignored(self, write_config):
        path = write_config('[gauge]\ncolour = "red"\n\n[extras]\nanything = 1\n')
        config = GaugeConfig.load(path)
        assert config.gauge == GaugeSettings()
        assert config.global_settings == GlobalConfig()

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            GaugeConfig.load(tmp_path / "absent.toml")

