"""
PeriodStatusStore -- the authoritative calendar and its mutable statuses.

Responsibility:
    Holds the generated fiscal years and every per-period, per-subledger
    status.  Exposes lookup by (fiscal_year_id, period_id), a full snapshot
    for reads, whole-calendar replacement, and the transactional scope the
    TransitionExecutor writes through.

Architecture position:
    Kernel > Services -- imperative shell.  The only module that opens
    sessions on the store's engine.  Everything it returns is a frozen DTO
    from ``fiscal_kernel.domain.dtos``.

Invariants enforced:
    - One critical section: every ``transaction()`` holds the store's
      re-entrant mutex for the whole read-validate-write sequence.
    - All-or-nothing: an exception inside ``transaction()`` rolls the
      session back, so a failed call leaves the store unchanged.
    - Status writes are checked against the row's current value; a stale
      plan is refused rather than applied.
    - A Hard Closed row is never updated (ORM listener, see db/immutability).

Failure modes:
    - FiscalYearNotFoundError / PeriodNotFoundError on unknown ids.
    - InvalidTransitionError if a planned change no longer matches the
      stored status.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, Iterator

from sqlalchemy import delete
from sqlalchemy.orm import Session

from fiscal_kernel.db.engine import (
    IN_MEMORY_URL,
    create_engine_from_url,
    create_session_factory,
    create_tables,
    session_scope,
)
from fiscal_kernel.db.immutability import register_immutability_listeners
from fiscal_kernel.domain.dtos import FiscalYearInfo, PeriodInfo, StatusChange
from fiscal_kernel.domain.values import PeriodAction, SubledgerName
from fiscal_kernel.exceptions import (
    FiscalYearNotFoundError,
    InvalidTransitionError,
    PeriodNotFoundError,
)
from fiscal_kernel.logging_config import get_logger
from fiscal_kernel.models.fiscal_period import (
    FiscalPeriodModel,
    FiscalYearModel,
    SubledgerStatusModel,
)
from fiscal_kernel.selectors.calendar_selector import CalendarSelector

logger = get_logger("services.period_status_store")


class StoreTransaction:
    """
    Read/write view of the store bound to one session.

    Only obtained from ``PeriodStatusStore.transaction()``; it must not be
    used after the ``with`` block exits.
    """

    def __init__(self, session: Session):
        self.session = session
        self._selector = CalendarSelector(session)

    # -- reads ---------------------------------------------------------------

    def list_fiscal_years(self) -> tuple[FiscalYearInfo, ...]:
        return self._selector.list_fiscal_years()

    def get_fiscal_year(self, fiscal_year_id: str) -> FiscalYearInfo:
        fiscal_year = self._selector.get_fiscal_year(fiscal_year_id)
        if fiscal_year is None:
            raise FiscalYearNotFoundError(fiscal_year_id)
        return fiscal_year

    def locate(
        self, fiscal_year_id: str | None, period_key: str
    ) -> tuple[FiscalYearInfo, PeriodInfo]:
        """
        Find a period by id or code.

        With ``fiscal_year_id`` the period must belong to that year; without
        it the owning year is looked up (period ids are unique across years).

        Raises:
            FiscalYearNotFoundError: ``fiscal_year_id`` is unknown.
            PeriodNotFoundError: no such period (in that year).
        """
        if fiscal_year_id is None:
            owner = self._selector.find_fiscal_year_id(period_key)
            if owner is None:
                raise PeriodNotFoundError(period_key)
            fiscal_year = self.get_fiscal_year(owner)
        else:
            fiscal_year = self.get_fiscal_year(fiscal_year_id)

        period = fiscal_year.find_period(period_key)
        if period is None:
            raise PeriodNotFoundError(period_key, fiscal_year.fiscal_year_id)
        return fiscal_year, period

    # -- writes --------------------------------------------------------------

    def write_statuses(
        self,
        period_id: str,
        changes: Iterable[StatusChange],
        action: PeriodAction,
        changed_at: datetime,
    ) -> None:
        """Apply planned status changes to one period's status rows."""
        rows = self._selector.get_status_rows(period_id)
        for change in changes:
            row = rows[change.subledger]
            if row.status != change.previous_status.value:
                raise InvalidTransitionError(
                    period_id,
                    change.subledger.value,
                    row.status,
                    action.value,
                    reason=f"expected status {change.previous_status.value}",
                )
            row.status = change.new_status.value
            row.last_action = action.value
            row.changed_at = changed_at
        self.session.flush()

    def replace_calendar(self, fiscal_years: Iterable[FiscalYearInfo]) -> int:
        """
        Discard every stored fiscal year and insert ``fiscal_years``.

        Returns:
            Number of periods written.
        """
        self.session.execute(delete(SubledgerStatusModel))
        self.session.execute(delete(FiscalPeriodModel))
        self.session.execute(delete(FiscalYearModel))

        period_count = 0
        for position, fiscal_year in enumerate(fiscal_years, start=1):
            fy_row = FiscalYearModel(
                fiscal_year_id=fiscal_year.fiscal_year_id,
                name=fiscal_year.name,
                start_date=fiscal_year.start_date,
                end_date=fiscal_year.end_date,
                frequency=fiscal_year.frequency.value,
                position=position,
            )
            for period in fiscal_year.periods:
                period_row = FiscalPeriodModel(
                    period_id=period.period_id,
                    code=period.code,
                    name=period.name,
                    position=period.position,
                    start_date=period.start_date,
                    end_date=period.end_date,
                    is_adjustment=period.is_adjustment,
                )
                period_row.statuses = [
                    SubledgerStatusModel(subledger=sl.value, status=period.statuses[sl].value)
                    for sl in SubledgerName
                ]
                fy_row.periods.append(period_row)
                period_count += 1
            self.session.add(fy_row)

        self.session.flush()
        return period_count


class PeriodStatusStore:
    """
    SQLAlchemy-backed store of fiscal years and subledger statuses.

    Contract:
        Every public read returns frozen DTO snapshots.  The only writers
        are ``replace_calendar`` and the TransitionExecutor (through
        ``transaction()``).

    Guarantees:
        - ``transaction()`` serializes callers behind one ``RLock``; nested
          use from the same thread is allowed.
        - Each store owns its own engine; two stores never share state
          unless they are given the same database URL.
    """

    def __init__(self, database_url: str = IN_MEMORY_URL, echo: bool = False):
        self._engine = create_engine_from_url(database_url, echo=echo)
        create_tables(self._engine)
        register_immutability_listeners()
        self._session_factory = create_session_factory(self._engine)
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """
        Critical section plus transactional scope.

        Commits on normal exit; rolls back and re-raises on exception.
        """
        with self._lock:
            with session_scope(self._session_factory) as session:
                yield StoreTransaction(session)

    def snapshot(self) -> tuple[FiscalYearInfo, ...]:
        """Every fiscal year with nested periods, in chronological order."""
        with self.transaction() as tx:
            return tx.list_fiscal_years()

    def get_fiscal_year(self, fiscal_year_id: str) -> FiscalYearInfo:
        with self.transaction() as tx:
            return tx.get_fiscal_year(fiscal_year_id)

    def get_period(self, fiscal_year_id: str | None, period_id: str) -> PeriodInfo:
        with self.transaction() as tx:
            return tx.locate(fiscal_year_id, period_id)[1]

    def is_empty(self) -> bool:
        return not self.snapshot()

    def replace_calendar(self, fiscal_years: Iterable[FiscalYearInfo]) -> None:
        """Replace the whole calendar atomically; prior statuses are discarded."""
        fiscal_years = tuple(fiscal_years)
        with self.transaction() as tx:
            period_count = tx.replace_calendar(fiscal_years)

        logger.info(
            "calendar_replaced",
            extra={
                "fiscal_years": [fy.fiscal_year_id for fy in fiscal_years],
                "period_count": period_count,
            },
        )

    def dispose(self) -> None:
        """Release pooled connections.  An in-memory database is lost."""
        self._engine.dispose()
