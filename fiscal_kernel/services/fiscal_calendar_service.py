"""
FiscalCalendarService -- collaborator-facing facade.

Responsibility:
    The single entry point for editors, forms and scripts: configure the
    calendar, list fiscal years, ask for available actions, perform an
    action.  ``perform_action`` never raises for a domain failure; typed
    errors become unsuccessful ``ActionResult`` objects.

Architecture position:
    Kernel > Services -- composes CalendarGenerator, PeriodStatusStore,
    ActionAdvisor and TransitionExecutor.  Configuration files are parsed by
    ``fiscal_config``; this module only accepts ``CalendarConfig``.

Failure modes:
    - configure(): ConfigurationError propagates; the previous calendar is
      left untouched.
    - get_available_actions(): unknown periods and unparsable subledgers
      yield the empty action set (logged at WARNING).
    - perform_action(): returns ActionResult.failed(...) with the error's
      ``code`` (or INVALID_ARGUMENT for unparsable strings).
"""

from __future__ import annotations

from typing import Any

from fiscal_kernel.domain.calendar import CalendarConfig, generate_calendar
from fiscal_kernel.domain.clock import Clock
from fiscal_kernel.domain.dtos import ActionResult, FiscalYearInfo
from fiscal_kernel.domain.values import PeriodAction, SubledgerName
from fiscal_kernel.exceptions import FiscalCalendarError, RuleViolationError
from fiscal_kernel.logging_config import get_logger
from fiscal_kernel.services.action_advisor import ActionAdvisor
from fiscal_kernel.services.base import BaseService
from fiscal_kernel.services.period_status_store import PeriodStatusStore
from fiscal_kernel.services.transition_executor import TransitionExecutor

logger = get_logger("services.fiscal_calendar")

INVALID_ARGUMENT = "INVALID_ARGUMENT"


class FiscalCalendarService(BaseService):
    """
    Facade over the fiscal period kernel.

    Contract:
        Accepts enum members or their string forms for subledgers and
        actions.  Returns DTOs only.

    Non-goals:
        - Does NOT ask the user to confirm actions; that is the caller's job.
        - Does NOT migrate statuses when the calendar is reconfigured.
    """

    def __init__(
        self,
        store: PeriodStatusStore | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(store or PeriodStatusStore(), clock)
        self._advisor = ActionAdvisor(self._store, self._clock)
        self._executor = TransitionExecutor(self._store, self._clock)

    @property
    def advisor(self) -> ActionAdvisor:
        return self._advisor

    @property
    def executor(self) -> TransitionExecutor:
        return self._executor

    def configure(self, config: CalendarConfig) -> tuple[FiscalYearInfo, ...]:
        """
        Generate a calendar from ``config`` and replace the stored one.

        Raises:
            ConfigurationError: invalid month, year or frequency.  Nothing
                is replaced.
        """
        today = self._clock.today()
        fiscal_years = generate_calendar(config, today)
        logger.info(
            "calendar_generated",
            extra={
                "start_month": config.start_month,
                "start_year": config.start_year,
                "frequency": fiscal_years[0].frequency.value,
                "today": today,
            },
        )
        self._store.replace_calendar(fiscal_years)
        return self._store.snapshot()

    def list_fiscal_years(self) -> tuple[FiscalYearInfo, ...]:
        return self._store.snapshot()

    def get_available_actions(
        self,
        period_id: str,
        subledger: SubledgerName | str | None = None,
    ) -> tuple[PeriodAction, ...]:
        """
        Actions the executor would accept now, in presentation order.

        Never raises for a domain failure: an unknown period or an
        unparsable subledger has no available actions.  The failure is
        logged as ``actions_query_failed``.  Use ``advisor`` directly to
        get the typed error instead.
        """
        try:
            parsed = SubledgerName.parse(subledger) if subledger is not None else None
            return self._advisor.available_actions(period_id, parsed)
        except (FiscalCalendarError, ValueError) as exc:
            logger.warning(
                "actions_query_failed",
                extra={
                    "period_id": period_id,
                    "error_code": getattr(exc, "code", INVALID_ARGUMENT),
                    "reason": str(exc),
                },
            )
            return ()

    def perform_action(
        self,
        fiscal_year_id: str,
        period_id: str,
        subledger: SubledgerName | str | None,
        action: PeriodAction | str,
    ) -> ActionResult:
        """
        Perform an action and report the outcome as data.

        Returns:
            ``ActionResult.ok(changes)`` on success; otherwise
            ``ActionResult.failed(code, message, details)``.
        """
        try:
            parsed_subledger = (
                SubledgerName.parse(subledger) if subledger is not None else None
            )
            parsed_action = PeriodAction.parse(action)
        except ValueError as exc:
            return ActionResult.failed(INVALID_ARGUMENT, str(exc))

        try:
            result = self._executor.execute(
                fiscal_year_id, period_id, parsed_subledger, parsed_action
            )
        except FiscalCalendarError as exc:
            return ActionResult.failed(exc.code, str(exc), _error_details(exc))

        return ActionResult.ok(result.changes)


def _error_details(exc: FiscalCalendarError) -> dict[str, Any]:
    details = {
        key: value
        for key, value in vars(exc).items()
        if not key.startswith("_") and value is not None
    }
    if isinstance(exc, RuleViolationError):
        details["blocking"] = f"{exc.blocking_subledger} in {exc.blocking_period_id}"
    return details
