"""
Tests for shared.logger, shared.models and shared.console.
"""

from __future__ import annotations

import json
import logging

import pytest

from shared.console import GaugeConsole
from shared.logger import GaugeLogger
from shared.models import Finding, ScanResult, Severity


class TestGaugeLogger:
    """File logging and record enrichment."""

    @pytest.fixture
    def file_logger(self, tmp_path):
        path = tmp_path / "logs" / "gauge.log"
        log = GaugeLogger("test", log_file=path, json_logs=True, console_output=False)
        yield log, path
        for handler in log.underlying.handlers:
            handler.close()

    def test_json_lines(self, file_logger):
        log, path = file_logger
        with log.operation("audit"):
            log.info("Scored %d entries", 3, flagged=1)

        record = json.loads(path.read_text(encoding="utf-8").splitlines()[-1])
        assert record["message"] == "Scored 3 entries"
        assert record["level"] == "INFO"
        assert record["logger"] == "gauge.test"
        assert record["component"] == "test"
        assert record["operation"] == "audit"
        assert record["extra"] == {"flagged": 1}

    def test_operation_scope_restored(self, file_logger):
        log, path = file_logger
        with log.operation("audit"):
            pass
        log.warning("outside")

        record = json.loads(path.read_text(encoding="utf-8").splitlines()[-1])
        assert "operation" not in record

    def test_level_filtering(self, tmp_path):
        path = tmp_path / "gauge.log"
        log = GaugeLogger("filter", log_level="WARNING", log_file=path, console_output=False)
        log.info("hidden")
        log.error("shown")
        for handler in log.underlying.handlers:
            handler.close()

        text = path.read_text(encoding="utf-8")
        assert "hidden" not in text
        assert "shown" in text

    def test_reinstantiation_replaces_handlers(self):
        GaugeLogger("dup")
        log = GaugeLogger("dup")
        assert len(log.underlying.handlers) == 1
        assert log.underlying.level == logging.INFO
        assert log.component == "dup"


class TestScanResult:
    """Findings aggregation."""

    def test_evidence_coerced_to_json(self):
        finding = Finding(
            severity=Severity.HIGH,
            title="mail",
            description="Password quality is very weak.",
            evidence={"bits": 3},
        )
        assert json.loads(finding.evidence) == {"bits": 3}

    def test_counts_and_summary(self):
        result = ScanResult(tool_name="gauge", target="creds.txt")
        assert result.duration_seconds is None

        result.add_finding(Finding(severity=Severity.LOW, title="a", description="x"))
        result.add_finding(Finding(severity=Severity.HIGH, title="b", description="y"))
        result.finalize()

        assert result.finding_count == 2
        assert result.severity_counts["HIGH"] == 1
        assert result.severity_counts["CRITICAL"] == 0
        assert result.duration_seconds >= 0
        assert result.summary == "Audit complete. Findings: 2 (HIGH: 1, LOW: 1)"

    def test_explicit_summary(self):
        result = ScanResult(tool_name="gauge", target="x").finalize("done")
        assert result.summary == "done"


class TestGaugeConsole:
    """Recorded console output."""

    def test_messages_are_not_markup(self):
        console = GaugeConsole(record=True)
        console.error("bad [red]value[/red]")
        text = console.rich.export_text()
        assert "bad [red]value[/red]" in text

    def test_empty_findings(self):
        console = GaugeConsole(record=True)
        console.findings_table([])
        assert "No weak passwords found." in console.rich.export_text()
