"""
ActionAdvisor -- read-only query for the legal action set.

Responsibility:
    Given a period (and optionally a subledger), return the actions the
    TransitionExecutor would accept against the current store state.

Architecture position:
    Kernel > Services -- read path.  Delegates every decision to
    ``fiscal_kernel.domain.transition_rules``; the executor calls the same
    predicate, so an offered action is exactly an accepted one.

Invariants enforced:
    - Never writes.  A Hard Closed subledger yields the empty action set.
"""

from __future__ import annotations

from fiscal_kernel.domain.transition_rules import (
    TransitionCheck,
    available_actions,
    evaluate_transition,
)
from fiscal_kernel.domain.values import PeriodAction, SubledgerName
from fiscal_kernel.logging_config import get_logger
from fiscal_kernel.services.base import BaseService

logger = get_logger("services.action_advisor")


class ActionAdvisor(BaseService):
    """Answers "what may I do to this period / subledger now?"."""

    def available_actions(
        self,
        period_id: str,
        subledger: SubledgerName | None = None,
        fiscal_year_id: str | None = None,
    ) -> tuple[PeriodAction, ...]:
        """
        Legal actions in presentation order (Open, Close, Hard Close, Reopen).

        A ``None`` subledger asks about the whole period, which is judged
        on the General Ledger.

        Raises:
            FiscalYearNotFoundError, PeriodNotFoundError: unknown ids.
        """
        with self._store.transaction() as tx:
            fiscal_year, period = tx.locate(fiscal_year_id, period_id)

        actions = available_actions(fiscal_year, period, subledger)
        logger.debug(
            "actions_evaluated",
            extra={
                "period_id": period.period_id,
                "subledger": subledger.value if subledger else None,
                "actions": [a.value for a in actions],
            },
        )
        return actions

    def explain(
        self,
        period_id: str,
        subledger: SubledgerName | None,
        action: PeriodAction,
        fiscal_year_id: str | None = None,
    ) -> TransitionCheck:
        """The full verdict for one action, including why it is refused."""
        with self._store.transaction() as tx:
            fiscal_year, period = tx.locate(fiscal_year_id, period_id)
        return evaluate_transition(fiscal_year, period, subledger, action)
