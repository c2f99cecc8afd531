"""
Fiscal period kernel.

Generates a three-year fiscal calendar and controls, period by period and
subledger by subledger, the Open / Close / Hard Close / Reopen lifecycle.

Typical use:

    from fiscal_kernel import CalendarConfig, FiscalCalendarService

    service = FiscalCalendarService()
    service.configure(CalendarConfig("January", 2025, "Monthly"))
    service.get_available_actions("MAR-FY2025", "GL")
    service.perform_action("FY2025", "MAR-FY2025", "GL", "Close")
"""

from fiscal_kernel.domain import (
    ActionResult,
    CalendarConfig,
    DeterministicClock,
    FiscalYearInfo,
    Frequency,
    PeriodAction,
    PeriodInfo,
    PeriodStatus,
    StatusChange,
    SubledgerName,
    SystemClock,
    TransitionResult,
)
from fiscal_kernel.exceptions import (
    ConfigurationError,
    FiscalCalendarError,
    FiscalYearNotFoundError,
    InvalidTransitionError,
    NotFoundError,
    PeriodNotFoundError,
    RuleViolationError,
    SubledgerHardClosedError,
    TransitionError,
)
from fiscal_kernel.services import (
    ActionAdvisor,
    FiscalCalendarService,
    PeriodStatusStore,
    TransitionExecutor,
)

__all__ = [
    "ActionAdvisor",
    "ActionResult",
    "CalendarConfig",
    "ConfigurationError",
    "DeterministicClock",
    "FiscalCalendarError",
    "FiscalCalendarService",
    "FiscalYearInfo",
    "FiscalYearNotFoundError",
    "Frequency",
    "InvalidTransitionError",
    "NotFoundError",
    "PeriodAction",
    "PeriodInfo",
    "PeriodNotFoundError",
    "PeriodStatus",
    "PeriodStatusStore",
    "RuleViolationError",
    "StatusChange",
    "SubledgerHardClosedError",
    "SubledgerName",
    "SystemClock",
    "TransitionError",
    "TransitionExecutor",
    "TransitionResult",
]
