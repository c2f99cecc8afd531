"""
Pure domain layer: values, DTOs, calendar generation, aggregation and the
transition rules.  Nothing here touches the database or the system clock.
"""

from fiscal_kernel.domain.aggregation import (
    aggregate_statuses,
    overall_fiscal_year_status,
    overall_period_status,
)
from fiscal_kernel.domain.calendar import (
    FISCAL_YEAR_HORIZON,
    CalendarConfig,
    generate_calendar,
)
from fiscal_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from fiscal_kernel.domain.dtos import (
    ActionResult,
    FiscalYearInfo,
    PeriodInfo,
    StatusChange,
    TransitionResult,
)
from fiscal_kernel.domain.transition_rules import (
    CheckOutcome,
    TransitionCheck,
    available_actions,
    evaluate_transition,
    plan_transition,
)
from fiscal_kernel.domain.values import (
    CLOSED_STATUSES,
    DEPENDENT_SUBLEDGERS,
    Frequency,
    PeriodAction,
    PeriodStatus,
    SubledgerName,
)

__all__ = [
    "ActionResult",
    "CLOSED_STATUSES",
    "CalendarConfig",
    "CheckOutcome",
    "Clock",
    "DEPENDENT_SUBLEDGERS",
    "DeterministicClock",
    "FISCAL_YEAR_HORIZON",
    "FiscalYearInfo",
    "Frequency",
    "PeriodAction",
    "PeriodInfo",
    "PeriodStatus",
    "StatusChange",
    "SubledgerName",
    "SystemClock",
    "TransitionCheck",
    "TransitionResult",
    "aggregate_statuses",
    "available_actions",
    "evaluate_transition",
    "generate_calendar",
    "overall_fiscal_year_status",
    "overall_period_status",
    "plan_transition",
]
