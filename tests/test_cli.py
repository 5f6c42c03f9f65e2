"""Tests for the click command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from loan_amortizer.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestScheduleCommand:
    """loan-amortizer schedule."""

    def test_prints_terms_summary_and_rows(self, runner: CliRunner, reference_args: list) -> None:
        result = runner.invoke(cli, ["schedule", *reference_args])

        assert result.exit_code == 0, result.output
        assert "Principal          : 145000.00" in result.output
        assert "Installment        : 717.5636" in result.output
        assert "Total paid" in result.output
        assert "\n1\t145000.00\t8610.76\t6235.00\t2375.76\t142624.24\n" in result.output
        assert "\n30\t" in result.output

    def test_truncates_long_schedules(self, runner: CliRunner, reference_args: list) -> None:
        result = runner.invoke(
            cli, ["schedule", *reference_args], env={"LOAN_AMORTIZER_MAX_ROWS": "5"}
        )

        assert result.exit_code == 0, result.output
        assert "Schedule has 31 rows; showing first 5 rows." in result.output
        assert "\n4\t" in result.output
        assert "\n5\t" not in result.output

    def test_export_json(self, runner: CliRunner, reference_args: list, tmp_path: Path) -> None:
        path = tmp_path / "loan.json"
        result = runner.invoke(cli, ["schedule", *reference_args, "--output", str(path)])

        assert result.exit_code == 0, result.output
        assert f"Schedule exported to {path}" in result.output
        record = json.loads(path.read_text(encoding="utf-8"))
        assert record["principal"] == 145000.0
        assert len(record["payments"]) == 31

    def test_export_csv(self, runner: CliRunner, reference_args: list, tmp_path: Path) -> None:
        path = tmp_path / "loan.csv"
        result = runner.invoke(cli, ["schedule", *reference_args, "--output", str(path)])

        assert result.exit_code == 0, result.output
        assert len(path.read_text(encoding="utf-8").splitlines()) == 32

    def test_unsupported_output(self, runner: CliRunner, reference_args: list, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["schedule", *reference_args, "--output", str(tmp_path / "x.txt")])
        assert result.exit_code == 2
        assert "Unsupported output format" in result.output

    def test_down_payment_exceeds_price(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schedule", "-p", "1000", "-d", "2000", "-r", "5", "-y", "10"])
        assert result.exit_code == 1
        assert "down payment exceeds price" in result.output

    def test_non_positive_rate(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schedule", "-p", "1000", "-r", "0", "-y", "10"])
        assert result.exit_code == 1
        assert "non-positive rate" in result.output

    def test_rate_too_large(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schedule", "-p", "1000", "-r", "1e200", "-y", "10"])
        assert result.exit_code == 1
        assert "balance out of range" in result.output

    def test_invalid_amount(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schedule", "-p", "lots", "-r", "5", "-y", "10"])
        assert result.exit_code == 2
        assert "Invalid numeric value" in result.output

    def test_years_out_of_range(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schedule", "-p", "1000", "-r", "5", "-y", "256"])
        assert result.exit_code == 2

    def test_zero_years(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schedule", "-p", "1000", "-r", "5", "-y", "0"])
        assert result.exit_code == 0, result.output
        assert "\n0\t1000.00\t0.00\t0.00\t0.00\t1000.00" in result.output


class TestSummaryCommand:
    """loan-amortizer summary."""

    def test_prints_summary(self, runner: CliRunner, reference_args: list) -> None:
        result = runner.invoke(cli, ["summary", *reference_args])

        assert result.exit_code == 0, result.output
        assert "Principal financed : 145000.00" in result.output
        assert "Remaining balance  : 4877.58" in result.output
        assert "Year\t" not in result.output

    def test_export(self, runner: CliRunner, reference_args: list, tmp_path: Path) -> None:
        path = tmp_path / "summary.json"
        result = runner.invoke(cli, ["summary", *reference_args, "--output", str(path)])

        assert result.exit_code == 0, result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["years"] == 30

    def test_export_requires_json(self, runner: CliRunner, reference_args: list, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["summary", *reference_args, "--output", str(tmp_path / "s.csv")])
        assert result.exit_code == 2


class TestShowCommand:
    """loan-amortizer show."""

    def test_show_exported_file(self, runner: CliRunner, reference_args: list, tmp_path: Path) -> None:
        path = tmp_path / "loan.json"
        runner.invoke(cli, ["schedule", *reference_args, "--output", str(path)])

        result = runner.invoke(cli, ["show", str(path)])

        assert result.exit_code == 0, result.output
        assert "Installment        : 717.5636" in result.output
        assert "\n30\t" in result.output

    def test_rejects_unknown_fields(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"asking_price": 1, "extra": 2}), encoding="utf-8")

        result = runner.invoke(cli, ["show", str(path)])

        assert result.exit_code == 1
        assert "Unknown field" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["show", str(tmp_path / "missing.json")])
        assert result.exit_code == 2


class TestGlobalOptions:
    """Options on the command group."""

    def test_log_level_option(self, runner: CliRunner, reference_args: list) -> None:
        result = runner.invoke(cli, ["--log-level", "debug", "summary", *reference_args])
        assert result.exit_code == 0, result.output

    def test_invalid_environment(self, runner: CliRunner, reference_args: list) -> None:
        result = runner.invoke(
            cli, ["summary", *reference_args], env={"LOAN_AMORTIZER_MAX_ROWS": "many"}
        )
        assert result.exit_code == 1
        assert "LOAN_AMORTIZER_MAX_ROWS" in result.output
