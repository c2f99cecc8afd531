"""
Data Transfer Objects for the fiscal period kernel.

Frozen snapshots passed between the store, the pure rule layer, and the
collaborator-facing service.  ORM rows never leave the store; everything
above it works on these.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Iterable, Mapping

from fiscal_kernel.domain.aggregation import overall_fiscal_year_status, overall_period_status
from fiscal_kernel.domain.values import (
    Frequency,
    PeriodAction,
    PeriodStatus,
    SubledgerName,
)


@dataclass(frozen=True)
class PeriodInfo:
    """
    Immutable snapshot of one period and its subledger statuses.

    Contract:
        ``period_id`` is the period's public id (``MAR-FY2025``, ``Q1-FY2025``,
        ``ADJ-FY2025``) and is unique across the generated calendar.
        ``code`` is the positional code (``FY2025-P3``).  Adjustment periods
        have no dates.
    """

    period_id: str
    code: str
    name: str
    fiscal_year_id: str
    position: int
    start_date: date | None
    end_date: date | None
    is_adjustment: bool
    statuses: Mapping[SubledgerName, PeriodStatus] = field(hash=False)

    def status_of(self, subledger: SubledgerName) -> PeriodStatus:
        return self.statuses[subledger]

    def with_statuses(
        self, updates: Mapping[SubledgerName, PeriodStatus]
    ) -> PeriodInfo:
        """Return a copy with some subledger statuses replaced."""
        merged = dict(self.statuses)
        merged.update(updates)
        return replace(self, statuses=merged)

    def matches(self, key: str) -> bool:
        """True if ``key`` is this period's id or code."""
        return key in (self.period_id, self.code)

    @property
    def overall_status(self) -> PeriodStatus:
        return overall_period_status(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.period_id,
            "code": self.code,
            "name": self.name,
            "position": self.position,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "isAdjustment": self.is_adjustment,
            "subledgerStatuses": {
                sl.value: self.statuses[sl].value for sl in SubledgerName
            },
            "overallStatus": self.overall_status.value,
        }


@dataclass(frozen=True)
class FiscalYearInfo:
    """
    Immutable snapshot of a fiscal year.

    Guarantees:
        - ``periods`` holds the regular periods in chronological order
          followed by exactly one Adjustment period.
    """

    fiscal_year_id: str
    name: str
    start_date: date
    end_date: date
    frequency: Frequency
    periods: tuple[PeriodInfo, ...]

    @property
    def regular_periods(self) -> tuple[PeriodInfo, ...]:
        return tuple(p for p in self.periods if not p.is_adjustment)

    @property
    def adjustment_period(self) -> PeriodInfo:
        for p in self.periods:
            if p.is_adjustment:
                return p
        raise LookupError(f"{self.fiscal_year_id} has no adjustment period")

    @property
    def overall_status(self) -> PeriodStatus:
        return overall_fiscal_year_status(self)

    def find_period(self, key: str) -> PeriodInfo | None:
        """Look up a period by id or code."""
        for p in self.periods:
            if p.matches(key):
                return p
        return None

    def previous_regular(self, period: PeriodInfo) -> PeriodInfo | None:
        """The immediately preceding regular period, or None for period 1."""
        regular = self.regular_periods
        for index, p in enumerate(regular):
            if p.period_id == period.period_id:
                return regular[index - 1] if index > 0 else None
        return None

    def next_regular(self, period: PeriodInfo) -> PeriodInfo | None:
        """The immediately following regular period, or None for the last."""
        regular = self.regular_periods
        for index, p in enumerate(regular):
            if p.period_id == period.period_id:
                return regular[index + 1] if index + 1 < len(regular) else None
        return None

    def with_period(self, period: PeriodInfo) -> FiscalYearInfo:
        """Return a copy with one period snapshot replaced."""
        return replace(
            self,
            periods=tuple(
                period if p.period_id == period.period_id else p for p in self.periods
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.fiscal_year_id,
            "name": self.name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "frequency": self.frequency.value,
            "overallStatus": self.overall_status.value,
            "periods": [p.to_dict() for p in self.periods],
        }


@dataclass(frozen=True)
class StatusChange:
    """One subledger status written by a transition."""

    period_id: str
    subledger: SubledgerName
    previous_status: PeriodStatus
    new_status: PeriodStatus
    cascaded: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "periodId": self.period_id,
            "subledger": self.subledger.value,
            "previousStatus": self.previous_status.value,
            "newStatus": self.new_status.value,
            "cascaded": self.cascaded,
        }


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of a committed transition.

    ``subledger`` is the subledger the action targeted (General Ledger for
    whole-period actions); ``changes`` lists the primary change first,
    followed by cascaded changes.
    """

    fiscal_year_id: str
    period_id: str
    subledger: SubledgerName
    action: PeriodAction
    whole_period: bool
    new_status: PeriodStatus
    changes: tuple[StatusChange, ...]

    @property
    def cascaded_changes(self) -> tuple[StatusChange, ...]:
        return tuple(c for c in self.changes if c.cascaded)


@dataclass(frozen=True)
class ActionResult:
    """
    Collaborator-facing result of ``perform_action``.

    Errors are carried as data: ``success`` is False and ``error_code`` /
    ``error_message`` describe the failure.
    """

    success: bool
    new_statuses: tuple[StatusChange, ...] = ()
    error_code: str | None = None
    error_message: str | None = None
    details: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, changes: Iterable[StatusChange]) -> ActionResult:
        return cls(success=True, new_statuses=tuple(changes))

    @classmethod
    def failed(
        cls, code: str, message: str, details: Mapping[str, Any] | None = None
    ) -> ActionResult:
        return cls(
            success=False,
            error_code=code,
            error_message=message,
            details=dict(details or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "newStatuses": [c.to_dict() for c in self.new_statuses],
        }
        if not self.success:
            payload["errorCode"] = self.error_code
            payload["errorMessage"] = self.error_message
        return payload
