"""CLI views: fiscal calendar table, action lists, action results."""

from fiscal_kernel.domain.dtos import ActionResult, FiscalYearInfo
from fiscal_kernel.domain.values import PeriodAction, SubledgerName
from scripts.cli.config import W


def _fmt_date(value) -> str:
    return value.isoformat() if value is not None else "-"


def show_calendar(fiscal_years: tuple[FiscalYearInfo, ...], fiscal_year_id: str | None = None):
    """Print each fiscal year with its periods and subledger statuses."""
    if not fiscal_years:
        print("\n  No fiscal calendar configured.\n")
        return

    for fy in fiscal_years:
        if fiscal_year_id is not None and fy.fiscal_year_id != fiscal_year_id:
            continue
        print()
        print("=" * W)
        title = f"{fy.name}  ({fy.start_date} to {fy.end_date}, {fy.frequency.value})"
        print(f"  {title}".center(W))
        print(f"  Overall: {fy.overall_status.value}".center(W))
        print("=" * W)
        header = "  ".join(f"{sl.short_code:<11}" for sl in SubledgerName)
        print(f"  {'Period':<12} {'Start':<10} {'End':<10}  {header}  Overall")
        print(f"  {'-' * 12} {'-' * 10} {'-' * 10}  {'-' * 37}  {'-' * 11}")
        for period in fy.periods:
            statuses = "  ".join(
                f"{period.status_of(sl).value:<11}" for sl in SubledgerName
            )
            print(
                f"  {period.period_id:<12} {_fmt_date(period.start_date):<10} "
                f"{_fmt_date(period.end_date):<10}  {statuses}  "
                f"{period.overall_status.value}"
            )
    print()


def show_actions(period_id: str, subledger: SubledgerName | None, actions: tuple[PeriodAction, ...]):
    target = subledger.value if subledger is not None else "whole period"
    print(f"\n  {period_id} ({target}):")
    if not actions:
        print("    No actions available.")
    for action in actions:
        print(f"    - {action.value}")
    print()


def show_result(result: ActionResult):
    if not result.success:
        print(f"\n  FAILED [{result.error_code}]: {result.error_message}\n")
        return
    print()
    for change in result.new_statuses:
        marker = "  (cascade)" if change.cascaded else ""
        print(
            f"  {change.period_id}  {change.subledger.value:<20} "
            f"{change.previous_status.value} -> {change.new_status.value}{marker}"
        )
    print()
