"""
Typed exception hierarchy for the fiscal period kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Period control errors are shown to users ("March cannot close until
February is closed") and returned to collaborators as structured results.
Callers must never parse message strings to decide what went wrong, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (period, subledger, blocking period)

Example:
    try:
        executor.execute("FY2025", "APR-FY2025", SubledgerName.GENERAL_LEDGER,
                         PeriodAction.OPEN)
    except RuleViolationError as e:
        explain(e.blocking_period_id, e.blocking_subledger)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    FiscalCalendarError (base)
    |
    +-- ConfigurationError
    |
    +-- NotFoundError
    |   +-- FiscalYearNotFoundError
    |   +-- PeriodNotFoundError
    |
    +-- TransitionError
        +-- InvalidTransitionError
        |   +-- SubledgerHardClosedError
        +-- RuleViolationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Configuration   | CONFIGURATION_ERROR         | Bad month, year, frequency or missing key
----------------|-----------------------------|-----------------------------------------
Lookup          | FISCAL_YEAR_NOT_FOUND       | Unknown fiscal year id
                | PERIOD_NOT_FOUND            | Unknown period id / code
----------------|-----------------------------|-----------------------------------------
Transition      | INVALID_TRANSITION          | Action not applicable from current status
                | SUBLEDGER_HARD_CLOSED       | Subledger is Hard Closed (terminal)
                | RULE_VIOLATION              | Sequencing precondition unmet
"""

from __future__ import annotations


class FiscalCalendarError(Exception):
    """
    Base exception for all fiscal calendar errors.

    All subclasses define a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "FISCAL_CALENDAR_ERROR"


# Configuration


class ConfigurationError(FiscalCalendarError):
    """Calendar configuration is invalid; no calendar was produced."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid calendar configuration {field}={value!r}: {reason}")


# Lookup


class NotFoundError(FiscalCalendarError):
    """Base exception for unknown fiscal years and periods."""

    code: str = "NOT_FOUND"


class FiscalYearNotFoundError(NotFoundError):
    """No fiscal year with the given id exists in the store."""

    code: str = "FISCAL_YEAR_NOT_FOUND"

    def __init__(self, fiscal_year_id: str):
        self.fiscal_year_id = fiscal_year_id
        super().__init__(f"Fiscal year not found: {fiscal_year_id}")


class PeriodNotFoundError(NotFoundError):
    """No period with the given id exists (in the given fiscal year)."""

    code: str = "PERIOD_NOT_FOUND"

    def __init__(self, period_id: str, fiscal_year_id: str | None = None):
        self.period_id = period_id
        self.fiscal_year_id = fiscal_year_id
        where = f" in {fiscal_year_id}" if fiscal_year_id else ""
        super().__init__(f"Period not found: {period_id}{where}")


# Transitions


class TransitionError(FiscalCalendarError):
    """Base exception for rejected status transitions."""

    code: str = "TRANSITION_ERROR"


class InvalidTransitionError(TransitionError):
    """The action cannot be applied to the subledger's current status."""

    code: str = "INVALID_TRANSITION"

    def __init__(
        self,
        period_id: str,
        subledger: str,
        current_status: str,
        action: str,
        reason: str | None = None,
    ):
        self.period_id = period_id
        self.subledger = subledger
        self.current_status = current_status
        self.action = action
        self.reason = reason
        message = (
            f"Cannot perform '{action}' on {subledger} for period "
            f"\"{period_id}\" (current status: {current_status})"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SubledgerHardClosedError(InvalidTransitionError):
    """The subledger is Hard Closed; no further action is ever permitted."""

    code: str = "SUBLEDGER_HARD_CLOSED"

    def __init__(self, period_id: str, subledger: str, action: str):
        super().__init__(
            period_id,
            subledger,
            "Hard Closed",
            action,
            reason="hard closed subledgers cannot be modified",
        )


class RuleViolationError(TransitionError):
    """
    A sequencing rule blocks the action.

    Always names the blocking period and subledger so the caller can tell
    the user which period must be dealt with first.
    """

    code: str = "RULE_VIOLATION"

    def __init__(
        self,
        period_id: str,
        subledger: str,
        action: str,
        blocking_period_id: str,
        blocking_subledger: str,
        rule: str,
    ):
        self.period_id = period_id
        self.subledger = subledger
        self.action = action
        self.blocking_period_id = blocking_period_id
        self.blocking_subledger = blocking_subledger
        self.rule = rule
        super().__init__(
            f"Cannot perform '{action}' on {subledger} for period "
            f"\"{period_id}\". Rule: {rule} "
            f"(blocked by {blocking_subledger} in \"{blocking_period_id}\")"
        )
