"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path

import orjson
from typer.testing import CliRunner

from dirtygate.cli.app import app

runner = CliRunner()


class TestCLI:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "gate" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "dirtygate" in result.output

    def test_gate_help(self) -> None:
        result = runner.invoke(app, ["gate", "--help"])
        assert result.exit_code == 0
        assert "--stats" in result.output


class TestGateCLI:
    def test_gate_passes(self, stats_file, config_file) -> None:
        stats = stats_file({"total_read_records": 100, "total_error_records": 10})
        config = config_file("error-limit:\n  record: 10\n")
        result = runner.invoke(app, ["gate", "-s", stats, "-c", config])
        assert result.exit_code == 0
        assert "PASSED" in result.output

    def test_gate_fails_with_exit_2(self, stats_file, config_file) -> None:
        stats = stats_file({"total_read_records": 100, "total_error_records": 11})
        config = config_file("error-limit:\n  percentage: 0.1\n")
        result = runner.invoke(app, ["gate", "-s", stats, "-c", config])
        assert result.exit_code == 2
        assert "FAILED" in result.output

    def test_gate_without_limits_passes(self, stats_file) -> None:
        stats = stats_file({"total_read_records": 10, "total_error_records": 10})
        result = runner.invoke(app, ["gate", "-s", stats])
        assert result.exit_code == 0
        assert "not configured" in result.output

    def test_option_overrides_config(self, stats_file, config_file) -> None:
        stats = stats_file({"total_read_records": 100, "total_error_records": 5})
        config = config_file("error-limit:\n  record: 10\n")
        result = runner.invoke(app, ["gate", "-s", stats, "-c", config, "--record-limit", "4"])
        assert result.exit_code == 2

    def test_percentage_option(self, stats_file) -> None:
        stats = stats_file({"read_succeed_records": 90, "read_failed_records": 10})
        result = runner.invoke(app, ["gate", "-s", stats, "--percentage-limit", "0.1"])
        assert result.exit_code == 0

    def test_invalid_config_exit_1(self, stats_file, config_file) -> None:
        stats = stats_file({"total_read_records": 1, "total_error_records": 0})
        config = config_file("error-limit:\n  percentage: 1.5\n")
        result = runner.invoke(app, ["gate", "-s", stats, "-c", config])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_stats_exit_1(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["gate", "-s", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_integer_key_config_handled(self, stats_file, config_file) -> None:
        stats = stats_file({"total_read_records": 1, "total_error_records": 0})
        config = config_file("1: one\njob: {}\n")
        result = runner.invoke(app, ["gate", "-s", stats, "-c", config])
        assert result.exit_code == 0

    def test_undecodable_config_exit_1(self, stats_file, tmp_path: Path) -> None:
        stats = stats_file({"total_read_records": 1, "total_error_records": 0})
        config = tmp_path / "job.yml"
        config.write_bytes(b"error-limit:\n  record: \xff\xfe\n")
        result = runner.invoke(app, ["gate", "-s", stats, "-c", str(config)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_mixed_stats_keys_exit_1(self, stats_file) -> None:
        stats = stats_file({"read_succeed_records": 10, "total_error_records": 5})
        result = runner.invoke(app, ["gate", "-s", stats, "--record-limit", "0"])
        assert result.exit_code == 1

    def test_percentage_display_is_formatted(self, stats_file) -> None:
        stats = stats_file({"total_read_records": 100, "total_error_records": 11})
        result = runner.invoke(app, ["gate", "-s", stats, "--percentage-limit", "0.1"])
        assert result.exit_code == 2
        assert "percentage_limit: 0.110000 (limit: 0.100000)" in result.output
        assert "0.11000000000000001" not in result.output

    def test_gate_writes_output(self, stats_file, tmp_path: Path) -> None:
        stats = stats_file({"total_read_records": 100, "total_error_records": 3})
        out = tmp_path / "result.json"
        result = runner.invoke(app, ["gate", "-s", stats, "--record-limit", "2", "-o", str(out)])
        assert result.exit_code == 2
        data = orjson.loads(out.read_bytes())
        assert data["passed"] is False
        failed = [c for c in data["checks"] if not c["passed"]]
        assert failed[0]["threshold"] == 2
        assert failed[0]["observed"] == 3

    def test_verbose_flag(self, stats_file) -> None:
        stats = stats_file({"total_read_records": 1, "total_error_records": 0})
        result = runner.invoke(app, ["--verbose", "gate", "-s", stats, "--record-limit", "0"])
        assert result.exit_code == 0
