"""
Transition rules -- the single legality predicate for status changes.

Responsibility:
    Decide whether an action may be applied to a subledger of a period,
    given a snapshot of its fiscal year, and compute the full set of status
    changes (primary + cascades) an allowed action produces.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  ActionAdvisor and
    TransitionExecutor both call ``evaluate_transition``; neither carries
    its own copy of the rules, so what is offered is exactly what is allowed.

Invariants enforced:
    - Hard Closed is terminal.
    - Regular GL may leave Future, Close or Hard Close only when the previous
      regular period's GL is Closed/Hard Closed (period 1 exempt).
    - A subledger may Reopen only while the next regular period's same
      subledger is not Closed/Hard Closed; a regular GL may not Reopen while
      the Adjustment period's GL is Open.
    - Adjustment GL may Open only when every regular GL is Closed/Hard Closed.
    - Adjustment AP/AR are frozen at Future.

Cascades (regular periods only):
    - GL -> Closed/Hard Closed: AP/AR not already Closed/Hard Closed -> Closed.
    - GL Future -> Open: AP/AR currently Future -> Open.
    - Whole-period Hard Close additionally hard-closes AP/AR.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fiscal_kernel.domain.dtos import FiscalYearInfo, PeriodInfo, StatusChange
from fiscal_kernel.domain.values import (
    CLOSED_STATUSES,
    DEPENDENT_SUBLEDGERS,
    PeriodAction,
    PeriodStatus,
    SubledgerName,
)
from fiscal_kernel.exceptions import (
    InvalidTransitionError,
    RuleViolationError,
    SubledgerHardClosedError,
)

GL = SubledgerName.GENERAL_LEDGER

RULE_PREVIOUS_PERIOD_CLOSED = (
    "General Ledger in the previous regular period must be 'Closed' or "
    "'Hard Closed' first"
)
RULE_ALL_REGULAR_CLOSED = (
    "General Ledger for all regular periods in the fiscal year must be "
    "'Closed' or 'Hard Closed' first"
)
RULE_NEXT_PERIOD_NOT_CLOSED = (
    "the same subledger in the next regular period must not be 'Closed' or "
    "'Hard Closed'"
)
RULE_ADJUSTMENT_NOT_OPEN = (
    "General Ledger of the adjustment period must not be 'Open'"
)


class CheckOutcome(str, Enum):
    ALLOWED = "allowed"
    HARD_CLOSED = "hard_closed"
    NOT_APPLICABLE = "not_applicable"
    RULE_VIOLATION = "rule_violation"


@dataclass(frozen=True)
class TransitionCheck:
    """Verdict of ``evaluate_transition`` for one (period, subledger, action)."""

    period_id: str
    subledger: SubledgerName
    action: PeriodAction
    current_status: PeriodStatus
    outcome: CheckOutcome
    reason: str = ""
    blocking_period_id: str | None = None
    blocking_subledger: SubledgerName | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is CheckOutcome.ALLOWED

    def raise_if_rejected(self) -> None:
        """Raise the typed exception matching a rejected verdict."""
        if self.outcome is CheckOutcome.ALLOWED:
            return
        if self.outcome is CheckOutcome.HARD_CLOSED:
            raise SubledgerHardClosedError(
                self.period_id, self.subledger.value, self.action.value
            )
        if self.outcome is CheckOutcome.NOT_APPLICABLE:
            raise InvalidTransitionError(
                self.period_id,
                self.subledger.value,
                self.current_status.value,
                self.action.value,
                reason=self.reason or None,
            )
        if self.outcome is CheckOutcome.RULE_VIOLATION:
            raise RuleViolationError(
                period_id=self.period_id,
                subledger=self.subledger.value,
                action=self.action.value,
                blocking_period_id=self.blocking_period_id or "",
                blocking_subledger=(
                    self.blocking_subledger.value if self.blocking_subledger else ""
                ),
                rule=self.reason,
            )
        raise ValueError(f"Unhandled check outcome: {self.outcome!r}")


def evaluate_transition(
    fiscal_year: FiscalYearInfo,
    period: PeriodInfo,
    subledger: SubledgerName | None,
    action: PeriodAction,
) -> TransitionCheck:
    """
    Decide whether ``action`` may be applied.

    A ``None`` subledger is a whole-period request and is judged on the
    General Ledger, which drives the period.
    """
    target = subledger or GL
    status = period.status_of(target)

    if status is PeriodStatus.HARD_CLOSED:
        return _verdict(period, target, action, status, CheckOutcome.HARD_CLOSED)
    if period.is_adjustment:
        return _evaluate_adjustment(fiscal_year, period, target, action, status)
    return _evaluate_regular(fiscal_year, period, target, action, status)


def available_actions(
    fiscal_year: FiscalYearInfo,
    period: PeriodInfo,
    subledger: SubledgerName | None = None,
) -> tuple[PeriodAction, ...]:
    """Every action ``evaluate_transition`` allows, in presentation order."""
    return tuple(
        action
        for action in PeriodAction
        if evaluate_transition(fiscal_year, period, subledger, action).allowed
    )


def plan_transition(
    fiscal_year: FiscalYearInfo,
    period: PeriodInfo,
    subledger: SubledgerName | None,
    action: PeriodAction,
) -> tuple[StatusChange, ...]:
    """
    Compute every status change an action produces.

    Raises the typed rejection if the action is not allowed, so a plan is
    never built from an illegal request.  The primary change comes first.
    """
    evaluate_transition(fiscal_year, period, subledger, action).raise_if_rejected()

    target = subledger or GL
    working = dict(period.statuses)
    changes: list[StatusChange] = []

    def write(sl: SubledgerName, new_status: PeriodStatus, cascaded: bool) -> None:
        changes.append(
            StatusChange(
                period_id=period.period_id,
                subledger=sl,
                previous_status=working[sl],
                new_status=new_status,
                cascaded=cascaded,
            )
        )
        working[sl] = new_status

    previous = working[target]
    write(target, action.target_status, cascaded=False)

    if target is GL and not period.is_adjustment:
        if subledger is None and action is PeriodAction.HARD_CLOSE:
            # One change per subledger, straight to Hard Closed.
            for sl in DEPENDENT_SUBLEDGERS:
                if working[sl] is not PeriodStatus.HARD_CLOSED:
                    write(sl, PeriodStatus.HARD_CLOSED, cascaded=True)
        else:
            for sl, new_status in cascade_targets(previous, action.target_status, working):
                write(sl, new_status, cascaded=True)

    return tuple(changes)


def cascade_targets(
    gl_before: PeriodStatus,
    gl_after: PeriodStatus,
    statuses: dict[SubledgerName, PeriodStatus],
) -> list[tuple[SubledgerName, PeriodStatus]]:
    """AP/AR updates implied by a regular-period GL change."""
    updates: list[tuple[SubledgerName, PeriodStatus]] = []
    for sl in DEPENDENT_SUBLEDGERS:
        current = statuses[sl]
        if gl_after in CLOSED_STATUSES:
            if current not in CLOSED_STATUSES:
                updates.append((sl, PeriodStatus.CLOSED))
        elif gl_after is PeriodStatus.OPEN and gl_before is PeriodStatus.FUTURE:
            if current is PeriodStatus.FUTURE:
                updates.append((sl, PeriodStatus.OPEN))
    return updates


# ---------------------------------------------------------------------------
# Regular periods
# ---------------------------------------------------------------------------


def _evaluate_regular(
    fiscal_year: FiscalYearInfo,
    period: PeriodInfo,
    subledger: SubledgerName,
    action: PeriodAction,
    status: PeriodStatus,
) -> TransitionCheck:
    # The sequential-close rule outranks status applicability: closing GL
    # out of order is reported as the rule it breaks.
    if subledger is GL and action in (PeriodAction.CLOSE, PeriodAction.HARD_CLOSE):
        check = _require_previous_closed(fiscal_year, period, subledger, action, status)
        if not check.allowed:
            return check

    if status is PeriodStatus.FUTURE:
        if action is not PeriodAction.OPEN:
            return _not_applicable(period, subledger, action, status)
        if subledger is GL:
            return _require_previous_closed(fiscal_year, period, subledger, action, status)
        return _verdict(period, subledger, action, status, CheckOutcome.ALLOWED)

    if status is PeriodStatus.OPEN:
        if action in (PeriodAction.CLOSE, PeriodAction.HARD_CLOSE):
            return _verdict(period, subledger, action, status, CheckOutcome.ALLOWED)
        return _not_applicable(period, subledger, action, status)

    if status is PeriodStatus.CLOSED:
        if action is PeriodAction.HARD_CLOSE:
            return _verdict(period, subledger, action, status, CheckOutcome.ALLOWED)
        if action is PeriodAction.REOPEN:
            return _require_reopenable(fiscal_year, period, subledger, action, status)
        return _not_applicable(period, subledger, action, status)

    if status is PeriodStatus.ADJUSTMENT:
        return _not_applicable(
            period, subledger, action, status,
            reason="'Adjustment' is not a valid status for a regular period",
        )

    if status is PeriodStatus.HARD_CLOSED:
        return _verdict(period, subledger, action, status, CheckOutcome.HARD_CLOSED)

    raise ValueError(f"Unhandled period status: {status!r}")


def _require_previous_closed(
    fiscal_year: FiscalYearInfo,
    period: PeriodInfo,
    subledger: SubledgerName,
    action: PeriodAction,
    status: PeriodStatus,
) -> TransitionCheck:
    previous = fiscal_year.previous_regular(period)
    if previous is not None and previous.status_of(GL) not in CLOSED_STATUSES:
        return _violation(
            period, subledger, action, status,
            RULE_PREVIOUS_PERIOD_CLOSED, previous, GL,
        )
    return _verdict(period, subledger, action, status, CheckOutcome.ALLOWED)


def _require_reopenable(
    fiscal_year: FiscalYearInfo,
    period: PeriodInfo,
    subledger: SubledgerName,
    action: PeriodAction,
    status: PeriodStatus,
) -> TransitionCheck:
    following = fiscal_year.next_regular(period)
    if following is not None and following.status_of(subledger) in CLOSED_STATUSES:
        return _violation(
            period, subledger, action, status,
            RULE_NEXT_PERIOD_NOT_CLOSED, following, subledger,
        )
    if subledger is GL:
        adjustment = fiscal_year.adjustment_period
        if adjustment.status_of(GL) is PeriodStatus.OPEN:
            return _violation(
                period, subledger, action, status,
                RULE_ADJUSTMENT_NOT_OPEN, adjustment, GL,
            )
    return _verdict(period, subledger, action, status, CheckOutcome.ALLOWED)


# ---------------------------------------------------------------------------
# Adjustment period
# ---------------------------------------------------------------------------


def _evaluate_adjustment(
    fiscal_year: FiscalYearInfo,
    period: PeriodInfo,
    subledger: SubledgerName,
    action: PeriodAction,
    status: PeriodStatus,
) -> TransitionCheck:
    if subledger is not GL:
        return _not_applicable(
            period, subledger, action, status,
            reason="only the General Ledger of an adjustment period is actionable",
        )

    if status in (PeriodStatus.ADJUSTMENT, PeriodStatus.FUTURE, PeriodStatus.CLOSED):
        if action is not PeriodAction.OPEN:
            return _not_applicable(period, subledger, action, status)
        for regular in fiscal_year.regular_periods:
            if regular.status_of(GL) not in CLOSED_STATUSES:
                return _violation(
                    period, subledger, action, status,
                    RULE_ALL_REGULAR_CLOSED, regular, GL,
                )
        return _verdict(period, subledger, action, status, CheckOutcome.ALLOWED)

    if status is PeriodStatus.OPEN:
        if action in (PeriodAction.CLOSE, PeriodAction.HARD_CLOSE):
            return _verdict(period, subledger, action, status, CheckOutcome.ALLOWED)
        return _not_applicable(period, subledger, action, status)

    if status is PeriodStatus.HARD_CLOSED:
        return _verdict(period, subledger, action, status, CheckOutcome.HARD_CLOSED)

    raise ValueError(f"Unhandled period status: {status!r}")


# ---------------------------------------------------------------------------
# Verdict constructors
# ---------------------------------------------------------------------------


def _verdict(
    period: PeriodInfo,
    subledger: SubledgerName,
    action: PeriodAction,
    status: PeriodStatus,
    outcome: CheckOutcome,
) -> TransitionCheck:
    return TransitionCheck(
        period_id=period.period_id,
        subledger=subledger,
        action=action,
        current_status=status,
        outcome=outcome,
    )


def _not_applicable(
    period: PeriodInfo,
    subledger: SubledgerName,
    action: PeriodAction,
    status: PeriodStatus,
    reason: str = "",
) -> TransitionCheck:
    return TransitionCheck(
        period_id=period.period_id,
        subledger=subledger,
        action=action,
        current_status=status,
        outcome=CheckOutcome.NOT_APPLICABLE,
        reason=reason,
    )


def _violation(
    period: PeriodInfo,
    subledger: SubledgerName,
    action: PeriodAction,
    status: PeriodStatus,
    rule: str,
    blocking_period: PeriodInfo,
    blocking_subledger: SubledgerName,
) -> TransitionCheck:
    return TransitionCheck(
        period_id=period.period_id,
        subledger=subledger,
        action=action,
        current_status=status,
        outcome=CheckOutcome.RULE_VIOLATION,
        reason=rule,
        blocking_period_id=blocking_period.period_id,
        blocking_subledger=blocking_subledger,
    )
