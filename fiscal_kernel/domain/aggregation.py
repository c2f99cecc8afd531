"""
StatusAggregator -- derived period and fiscal-year statuses.

Overall statuses are never stored.  They are recomputed from the current
subledger statuses on every read, so they cannot drift from the data.

Rule (applied to a period's three subledgers, and to a year's regular
periods' overall statuses):
    all Hard Closed                  -> Hard Closed
    all in {Closed, Hard Closed}     -> Closed
    any Open                         -> Open
    otherwise                        -> Future

The Adjustment period reports its General Ledger status as its overall
status; its AP/AR are frozen at Future and carry no information.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from fiscal_kernel.domain.values import CLOSED_STATUSES, PeriodStatus, SubledgerName

if TYPE_CHECKING:
    from fiscal_kernel.domain.dtos import FiscalYearInfo, PeriodInfo


def aggregate_statuses(statuses: Iterable[PeriodStatus]) -> PeriodStatus:
    """Fold a collection of statuses into one overall status."""
    values = list(statuses)
    if not values:
        return PeriodStatus.FUTURE
    if all(s is PeriodStatus.HARD_CLOSED for s in values):
        return PeriodStatus.HARD_CLOSED
    if all(s in CLOSED_STATUSES for s in values):
        return PeriodStatus.CLOSED
    if any(s is PeriodStatus.OPEN for s in values):
        return PeriodStatus.OPEN
    return PeriodStatus.FUTURE


def overall_period_status(period: PeriodInfo) -> PeriodStatus:
    if period.is_adjustment:
        return period.statuses[SubledgerName.GENERAL_LEDGER]
    return aggregate_statuses(period.statuses[sl] for sl in SubledgerName)


def overall_fiscal_year_status(fiscal_year: FiscalYearInfo) -> PeriodStatus:
    return aggregate_statuses(
        overall_period_status(p) for p in fiscal_year.regular_periods
    )
