"""
TransitionExecutor -- validates and applies one status transition.

Responsibility:
    Locate the period, re-evaluate the requested action against the
    *current* store state, write the new status and its cascades, and
    return what changed.

Architecture position:
    Kernel > Services -- the only status writer.  Legality and cascades
    come from ``fiscal_kernel.domain.transition_rules``; this module adds
    the transaction, the critical section and the logging.

Invariants enforced:
    - Read, validate, write and cascade happen inside one
      ``store.transaction()``: one critical section, one commit.
    - A rejected or failed call leaves the store unchanged.
    - Hard Closed is terminal (rules + ORM guard).

Failure modes:
    - FiscalYearNotFoundError / PeriodNotFoundError: unknown ids.
    - SubledgerHardClosedError: target subledger is Hard Closed.
    - InvalidTransitionError: action not applicable from current status.
    - RuleViolationError: sequencing rule unmet; names the blocking period
      and subledger.

Audit relevance:
    Every applied transition is logged as ``transition_applied``, each
    cascaded change as ``transition_cascaded``; rejections are logged at
    WARNING as ``transition_rejected``.
"""

from __future__ import annotations

from fiscal_kernel.domain.dtos import TransitionResult
from fiscal_kernel.domain.transition_rules import (
    GL,
    evaluate_transition,
    plan_transition,
)
from fiscal_kernel.domain.values import PeriodAction, SubledgerName
from fiscal_kernel.exceptions import TransitionError
from fiscal_kernel.logging_config import LogContext, get_logger
from fiscal_kernel.services.base import BaseService

logger = get_logger("services.transition_executor")


class TransitionExecutor(BaseService):
    """
    Applies period actions to the store.

    Contract:
        ``execute()`` either commits the primary change plus its cascades
        and returns a ``TransitionResult``, or raises a typed error and
        writes nothing.
    """

    def execute(
        self,
        fiscal_year_id: str,
        period_id: str,
        subledger: SubledgerName | None,
        action: PeriodAction,
    ) -> TransitionResult:
        """
        Perform ``action`` on one subledger (or the whole period).

        Args:
            fiscal_year_id: Owning fiscal year, e.g. ``FY2025``.
            period_id: Period id or code, e.g. ``MAR-FY2025``.
            subledger: Target subledger; ``None`` acts on the whole period
                through its General Ledger.
            action: The requested action.

        Returns:
            TransitionResult listing the primary change first, then cascades.
        """
        with LogContext.bind(fiscal_year_id=fiscal_year_id, period_id=period_id):
            try:
                with self._store.transaction() as tx:
                    fiscal_year, period = tx.locate(fiscal_year_id, period_id)
                    check = evaluate_transition(fiscal_year, period, subledger, action)
                    check.raise_if_rejected()

                    changes = plan_transition(fiscal_year, period, subledger, action)
                    tx.write_statuses(
                        period.period_id, changes, action, self._clock.now()
                    )
            except TransitionError as exc:
                logger.warning(
                    "transition_rejected",
                    extra={
                        "subledger": subledger.value if subledger else None,
                        "action": action.value,
                        "error_code": exc.code,
                        "reason": str(exc),
                    },
                )
                raise

            primary = changes[0]
            logger.info(
                "transition_applied",
                extra={
                    "subledger": primary.subledger.value,
                    "action": action.value,
                    "whole_period": subledger is None,
                    "previous_status": primary.previous_status.value,
                    "new_status": primary.new_status.value,
                },
            )
            for change in changes[1:]:
                logger.info(
                    "transition_cascaded",
                    extra={
                        "subledger": change.subledger.value,
                        "previous_status": change.previous_status.value,
                        "new_status": change.new_status.value,
                    },
                )

        return TransitionResult(
            fiscal_year_id=fiscal_year.fiscal_year_id,
            period_id=period.period_id,
            subledger=subledger or GL,
            action=action,
            whole_period=subledger is None,
            new_status=primary.new_status,
            changes=changes,
        )
