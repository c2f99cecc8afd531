"""
CLI tests: drive ``scripts.cli.main.main`` with argv lists and read stdout.

Every run pins ``--today`` so initial statuses are deterministic.
"""

import pytest

from scripts.cli.main import build_parser, main

TODAY = ["--today", "2025-03-15"]


def _line_for(output: str, period_id: str) -> str:
    return next(line for line in output.splitlines() if line.strip().startswith(period_id))


class TestShow:

    def test_default_calendar(self, capsys):
        assert main([*TODAY, "show"]) == 0
        out = capsys.readouterr().out
        assert "FY2025  (2025-01-01 to 2025-12-31, Monthly)" in out
        assert "FY2027" in out
        assert "Open" in _line_for(out, "MAR-FY2025")
        assert "Adjustment" in _line_for(out, "ADJ-FY2025")

    def test_single_fiscal_year(self, capsys):
        assert main([*TODAY, "show", "--fiscal-year", "FY2026"]) == 0
        out = capsys.readouterr().out
        assert "FY2026" in out
        assert "FY2025  (" not in out

    def test_config_file(self, capsys, tmp_path):
        path = tmp_path / "calendar.yaml"
        path.write_text("calendar:\n  startMonth: July\n  startYear: 2024\n  frequency: Quarterly\n")
        assert main([*TODAY, "--config", str(path), "show"]) == 0
        out = capsys.readouterr().out
        assert "FY2025  (2024-07-01 to 2025-06-30, Quarterly)" in out
        assert "Open" in _line_for(out, "Q3-FY2025")


class TestConfigure:

    def test_explicit_fields(self, capsys):
        argv = [*TODAY, "configure", "--start-month", "April",
                "--start-year", "2024", "--frequency", "Quarterly"]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert "FY2025  (2024-04-01 to 2025-03-31, Quarterly)" in out
        assert "Open" in _line_for(out, "Q4-FY2025")

    def test_missing_year_is_an_error(self, capsys):
        assert main([*TODAY, "configure", "--start-month", "April"]) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_unknown_month_is_an_error(self, capsys):
        argv = [*TODAY, "configure", "--start-month", "Smarch", "--start-year", "2025"]
        assert main(argv) == 1
        assert "start_month" in capsys.readouterr().err


class TestActions:

    def test_subledger_actions(self, capsys):
        assert main([*TODAY, "actions", "MAR-FY2025", "--subledger", "GL"]) == 0
        out = capsys.readouterr().out
        assert "MAR-FY2025 (General Ledger)" in out
        assert "- Close" in out
        assert "- Hard Close" in out
        assert "- Reopen" not in out

    def test_no_actions(self, capsys):
        assert main([*TODAY, "actions", "APR-FY2025"]) == 0
        assert "No actions available." in capsys.readouterr().out

    def test_unknown_period(self, capsys):
        assert main([*TODAY, "actions", "MAR-FY1999"]) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_unknown_subledger(self, capsys):
        assert main([*TODAY, "actions", "MAR-FY2025", "--subledger", "Payroll"]) == 1
        assert "ERROR" in capsys.readouterr().err


class TestPerform:

    def test_close_cascades(self, capsys):
        assert main([*TODAY, "perform", "FY2025", "MAR-FY2025", "Close", "--subledger", "GL"]) == 0
        out = capsys.readouterr().out
        assert "General Ledger" in out
        assert "Open -> Closed" in out
        assert out.count("(cascade)") == 2

    def test_rejected_action(self, capsys):
        assert main([*TODAY, "perform", "FY2025", "APR-FY2025", "Open", "--subledger", "GL"]) == 1
        out = capsys.readouterr().out
        assert "FAILED [RULE_VIOLATION]" in out

    def test_invalid_action(self, capsys):
        assert main([*TODAY, "perform", "FY2025", "MAR-FY2025", "Archive"]) == 1
        assert "FAILED [INVALID_ARGUMENT]" in capsys.readouterr().out


class TestFileDatabase:

    def test_state_persists_between_runs(self, capsys, tmp_path):
        db = ["--db", f"sqlite:///{tmp_path / 'fiscal.db'}"]

        assert main([*db, *TODAY, "perform", "FY2025", "MAR-FY2025", "Close"]) == 0
        assert main([*db, *TODAY, "perform", "FY2025", "APR-FY2025", "Open"]) == 0
        capsys.readouterr()

        assert main([*db, *TODAY, "show", "--fiscal-year", "FY2025"]) == 0
        out = capsys.readouterr().out
        assert "Closed" in _line_for(out, "MAR-FY2025")
        assert "Open" in _line_for(out, "APR-FY2025")

    def test_configure_resets_statuses(self, capsys, tmp_path):
        db = ["--db", f"sqlite:///{tmp_path / 'fiscal.db'}"]

        assert main([*db, *TODAY, "perform", "FY2025", "MAR-FY2025", "Close"]) == 0
        assert main([*db, *TODAY, "configure"]) == 0
        capsys.readouterr()

        assert main([*db, *TODAY, "show"]) == 0
        assert "Open" in _line_for(capsys.readouterr().out, "MAR-FY2025")


class TestParser:

    def test_bad_today_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--today", "15/03/2025", "show"])
        assert exc_info.value.code == 2
        assert "not an ISO date" in capsys.readouterr().err

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
