"""
Fiscal calendar query selector.

Read-only access to the stored calendar.  Rebuilds FiscalYearInfo /
PeriodInfo snapshots from the ORM rows so that callers above the store
never hold a live ORM object.

Key design decisions:
- Returns DTOs (frozen dataclasses), not ORM models
- Uses the caller's Session; a snapshot is consistent with that session's
  transaction
- Periods are ordered by position; fiscal years by position
"""

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from fiscal_kernel.domain.dtos import FiscalYearInfo, PeriodInfo
from fiscal_kernel.domain.values import Frequency, PeriodStatus, SubledgerName
from fiscal_kernel.models.fiscal_period import (
    FiscalPeriodModel,
    FiscalYearModel,
    SubledgerStatusModel,
)
from fiscal_kernel.selectors.base import BaseSelector


class CalendarSelector(BaseSelector[FiscalYearModel]):
    """Selector for fiscal years, periods and subledger statuses."""

    def __init__(self, session: Session):
        super().__init__(session)

    def _to_period_info(self, period: FiscalPeriodModel) -> PeriodInfo:
        """Convert a period row and its status rows to a PeriodInfo."""
        statuses = {
            SubledgerName(row.subledger): PeriodStatus(row.status)
            for row in period.statuses
        }
        return PeriodInfo(
            period_id=period.period_id,
            code=period.code,
            name=period.name,
            fiscal_year_id=period.fiscal_year_ref,
            position=period.position,
            start_date=period.start_date,
            end_date=period.end_date,
            is_adjustment=period.is_adjustment,
            statuses=statuses,
        )

    def _to_fiscal_year_info(self, fiscal_year: FiscalYearModel) -> FiscalYearInfo:
        return FiscalYearInfo(
            fiscal_year_id=fiscal_year.fiscal_year_id,
            name=fiscal_year.name,
            start_date=fiscal_year.start_date,
            end_date=fiscal_year.end_date,
            frequency=Frequency(fiscal_year.frequency),
            periods=tuple(self._to_period_info(p) for p in fiscal_year.periods),
        )

    def _fiscal_year_query(self):
        return select(FiscalYearModel).options(
            selectinload(FiscalYearModel.periods).selectinload(FiscalPeriodModel.statuses)
        )

    # =========================================================================
    # Calendar Queries
    # =========================================================================

    def list_fiscal_years(self) -> tuple[FiscalYearInfo, ...]:
        """All stored fiscal years in chronological order."""
        rows = self.session.execute(
            self._fiscal_year_query().order_by(FiscalYearModel.position)
        ).scalars().all()
        return tuple(self._to_fiscal_year_info(fy) for fy in rows)

    def get_fiscal_year(self, fiscal_year_id: str) -> FiscalYearInfo | None:
        """
        Get a fiscal year by id.

        Returns:
            FiscalYearInfo if found, None otherwise.
        """
        fiscal_year = self.session.execute(
            self._fiscal_year_query().where(
                FiscalYearModel.fiscal_year_id == fiscal_year_id
            )
        ).scalar_one_or_none()
        if fiscal_year is None:
            return None
        return self._to_fiscal_year_info(fiscal_year)

    def find_fiscal_year_id(self, period_key: str) -> str | None:
        """Fiscal year id owning the period with this id or code."""
        return self.session.execute(
            select(FiscalPeriodModel.fiscal_year_ref).where(
                (FiscalPeriodModel.period_id == period_key)
                | (FiscalPeriodModel.code == period_key)
            )
        ).scalar_one_or_none()

    def get_status_rows(self, period_id: str) -> dict[SubledgerName, SubledgerStatusModel]:
        """
        Status rows of one period keyed by subledger.

        Used by the store inside its own write transaction; the rows belong
        to the caller's session.
        """
        rows = self.session.execute(
            select(SubledgerStatusModel).where(SubledgerStatusModel.period_ref == period_id)
        ).scalars().all()
        return {SubledgerName(row.subledger): row for row in rows}
