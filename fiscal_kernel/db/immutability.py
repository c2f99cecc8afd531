"""
ORM-level guard for Hard Closed subledger statuses.

The transition rules already refuse every action on a Hard Closed subledger.
This listener enforces the same invariant at the persistence boundary, so a
status row that was Hard Closed can never be rewritten through the ORM,
whatever code path issues the UPDATE.

    session.flush()
         |
         v
    [before_update event] --> _check_subledger_status_immutability()
         |                              |
         v                              v
    SQL sent to database      SubledgerHardClosedError (flush aborted)

Deleting rows is not guarded: reconfiguring the calendar discards every
period, Hard Closed ones included.
"""

from sqlalchemy import event
from sqlalchemy.orm.attributes import get_history

from fiscal_kernel.exceptions import SubledgerHardClosedError
from fiscal_kernel.logging_config import get_logger

logger = get_logger("db.immutability")

_HARD_CLOSED = "Hard Closed"


def _check_subledger_status_immutability(mapper, connection, target):
    """Block any change to a status row whose stored status is Hard Closed."""
    from fiscal_kernel.models.fiscal_period import SubledgerStatusModel

    if not isinstance(target, SubledgerStatusModel):
        return

    history = get_history(target, "status")
    if history.deleted:
        old_status = history.deleted[0]
    else:
        old_status = target.status

    if old_status == _HARD_CLOSED and _has_changes(target):
        logger.error(
            "hard_closed_row_modified",
            extra={"period_id": target.period_ref, "subledger": target.subledger},
        )
        raise SubledgerHardClosedError(
            target.period_ref, target.subledger, target.last_action or "update"
        )


def _has_changes(target) -> bool:
    for attr in ("status", "last_action", "changed_at"):
        if get_history(target, attr).has_changes():
            return True
    return False


def register_immutability_listeners() -> None:
    """
    Register the Hard Closed guard on SubledgerStatusModel.

    Safe to call more than once; the listener is attached a single time.
    """
    from fiscal_kernel.models.fiscal_period import SubledgerStatusModel

    if not event.contains(
        SubledgerStatusModel, "before_update", _check_subledger_status_immutability
    ):
        event.listen(
            SubledgerStatusModel, "before_update", _check_subledger_status_immutability
        )
