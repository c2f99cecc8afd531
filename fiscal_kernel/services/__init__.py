"""Store-backed services: the status store, advisor, executor and facade."""

from fiscal_kernel.services.action_advisor import ActionAdvisor
from fiscal_kernel.services.fiscal_calendar_service import (
    INVALID_ARGUMENT,
    FiscalCalendarService,
)
from fiscal_kernel.services.period_status_store import (
    PeriodStatusStore,
    StoreTransaction,
)
from fiscal_kernel.services.transition_executor import TransitionExecutor

__all__ = [
    "ActionAdvisor",
    "FiscalCalendarService",
    "INVALID_ARGUMENT",
    "PeriodStatusStore",
    "StoreTransaction",
    "TransitionExecutor",
]
