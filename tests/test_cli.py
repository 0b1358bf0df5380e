"""
Tests for gauge.cli.

Runs the Click group in-process with CliRunner. JSON tests parse stdout
only; log records go to stderr.
"""

from __future__ import annotations

import json

from gauge.cli import _read_entries, cli

from tests.conftest import STRONG_PASSWORD, WEAK_PASSWORD


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestEstimate:
    def test_json(self, runner):
        data = _json(runner.invoke(cli, ["-q", "-o", "json", "estimate", "dragon"]))
        assert data["bits"] == 3
        assert data["tier"] == "very_weak"
        assert data["password_masked"] == "d****n"
        assert data["breakdown"]["matches"][0]["kind"] == "dictionary"

    def test_json_never_echoes_password(self, runner):
        result = runner.invoke(cli, ["-o", "json", "estimate", "dragon"])
        assert result.exit_code == 0
        assert "dragon" not in result.stdout

    def test_console(self, runner):
        result = runner.invoke(cli, ["estimate", STRONG_PASSWORD])
        assert result.exit_code == 0
        assert "STRONG" in result.stdout
        assert "119 bits" in result.stdout
        assert STRONG_PASSWORD not in result.stdout

    def test_quiet_still_shows_result(self, runner):
        result = runner.invoke(cli, ["-q", "estimate", "dragon"])
        assert result.exit_code == 0
        assert "VERY WEAK" in result.stdout
        assert "3 bits" in result.stdout
        assert "Version:" not in result.stdout

    def test_surrogate_password(self, runner):
        data = _json(runner.invoke(cli, ["-q", "-o", "json", "estimate", "\udcffabcdef\udcfe"]))
        assert data["password_masked"] == "********"
        assert data["length"] == 8


class TestClassify:
    def test_json(self, runner):
        data = _json(runner.invoke(cli, ["-q", "-o", "json", "classify", "65"]))
        assert data == {"bits": 65, "tier": "weak"}

    def test_console(self, runner):
        result = runner.invoke(cli, ["-q", "classify", "129"])
        assert result.exit_code == 0
        assert "VERY STRONG" in result.stdout

    def test_negative_bits_rejected(self, runner):
        result = runner.invoke(cli, ["-q", "classify", "--", "-1"])
        assert result.exit_code == 2


class TestTiers:
    def test_json(self, runner):
        data = _json(runner.invoke(cli, ["-q", "-o", "json", "tiers"]))
        assert [row["tier"] for row in data] == [
            "very_weak", "weak", "moderate", "strong", "very_strong",
        ]
        assert data[0] == {"tier": "very_weak", "min_bits": 0, "max_bits": 64}
        assert data[-1] == {"tier": "very_strong", "min_bits": 129, "max_bits": None}

    def test_custom_config(self, runner, write_config):
        path = write_config("[gauge]\ncutoffs = [10, 20, 30, 40]\n")
        data = _json(runner.invoke(cli, ["-q", "-c", str(path), "-o", "json", "tiers"]))
        assert data[1] == {"tier": "weak", "min_bits": 11, "max_bits": 20}

    def test_console(self, runner):
        result = runner.invoke(cli, ["-q", "tiers"])
        assert result.exit_code == 0
        assert "129+" in result.stdout
        assert "VERY WEAK" in result.stdout


class TestAudit:
    CREDS = f"mail\tpassword\nbank\t{STRONG_PASSWORD}\n\nvpn\t{WEAK_PASSWORD}\n"

    def test_json_from_stdin(self, runner):
        data = _json(runner.invoke(cli, ["-q", "-o", "json", "audit", "-"], input=self.CREDS))
        assert [f["title"] for f in data["findings"]] == ["mail", "vpn"]
        assert len(data["metadata"]["entries"]) == 3
        assert data["metadata"]["tier_counts"]["strong"] == 1

    def test_passwords_never_printed(self, runner):
        for output in ("console", "json"):
            result = runner.invoke(cli, ["-o", output, "audit", "-"], input=self.CREDS)
            assert result.exit_code == 0
            assert STRONG_PASSWORD not in result.output
            assert WEAK_PASSWORD not in result.output

    def test_file_and_delimiter(self, runner, tmp_path):
        creds = tmp_path / "creds.csv"
        creds.write_text(f"mail,password\n{STRONG_PASSWORD}\n", encoding="utf-8")
        data = _json(runner.invoke(
            cli, ["-q", "-o", "json", "audit", "-d", ",", str(creds)],
        ))
        labels = [row["label"] for row in data["metadata"]["entries"]]
        assert labels == ["mail", "line 2"]
        assert data["target"] == str(creds)

    def test_strict_exit_status(self, runner):
        result = runner.invoke(cli, ["-q", "audit", "--strict", "-"], input="password\n")
        assert result.exit_code == 1

        result = runner.invoke(cli, ["-q", "audit", "--strict", "-"], input=f"{STRONG_PASSWORD}\n")
        assert result.exit_code == 0

    def test_quiet_drops_summary_line(self, runner):
        result = runner.invoke(cli, ["-q", "audit", "-"], input=self.CREDS)
        assert result.exit_code == 0
        assert "mail" in result.stdout
        assert "INFO:" not in result.stdout

        result = runner.invoke(cli, ["audit", "-"], input=self.CREDS)
        assert "INFO:" in result.stdout

    def test_invalid_utf8_file(self, runner, tmp_path):
        creds = tmp_path / "creds.txt"
        creds.write_bytes(b"mail\tpass\xffword\n")

        result = runner.invoke(cli, ["-o", "json", "audit", str(creds)])
        assert result.exit_code == 2
        assert result.stdout == ""
        assert "not valid UTF-8" in result.stderr

        result = runner.invoke(cli, ["audit", str(creds)])
        assert result.exit_code == 2
        assert "UTF-8" in result.stdout

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["-q", "audit", str(tmp_path / "absent.txt")])
        assert result.exit_code == 2


class TestErrors:
    def test_invalid_cutoffs(self, runner, write_config):
        path = write_config("[gauge]\ncutoffs = [80, 64, 112, 128]\n")
        result = runner.invoke(cli, ["-c", str(path), "tiers"])
        assert result.exit_code == 2
        assert "ascending" in result.output

    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli, ["-c", str(tmp_path / "absent.toml"), "tiers"])
        assert result.exit_code == 2
        assert "not found" in result.output

    def test_json_mode_reports_on_stderr(self, runner, write_config):
        path = write_config('[gauge]\nflag_at_or_below = "mediocre"\n')
        result = runner.invoke(cli, ["-c", str(path), "-o", "json", "tiers"])
        assert result.exit_code == 2
        assert result.stdout == ""
        assert "mediocre" in result.stderr


class TestReadEntries:
    def test_labels_and_whitespace(self):
        lines = ["mail\t pass word \n", "\n", "bare\r\n"]
        assert list(_read_entries(lines, "\t")) == [
            ("mail", " pass word "),
            ("line 3", "bare"),
        ]
