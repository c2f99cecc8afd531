"""
Module: fiscal_kernel.models.fiscal_period
Responsibility: ORM persistence for fiscal years, their periods, and the
    per-subledger status of each period.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - fiscal_year_id, period_id and period code are unique across the store.
    - Exactly one status row per (period, subledger) (uq_subledger_status).
    - Statuses are persisted as PeriodStatus.value (display strings).
    - A Hard Closed status row never changes (ORM listener in
      db/immutability.py).

Failure modes:
    - IntegrityError on a duplicate period id / code or a second status row
      for the same (period, subledger).
    - SubledgerHardClosedError on UPDATE of a Hard Closed status row.
"""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fiscal_kernel.db.base import Base


class FiscalYearModel(Base):
    """
    A generated fiscal year.

    Guarantees:
        - ``periods`` is ordered by position: regular periods first, the
          Adjustment period last.
    """

    __tablename__ = "fiscal_years"

    fiscal_year_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(nullable=False)
    end_date: Mapped[date] = mapped_column(nullable=False)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    periods: Mapped[list["FiscalPeriodModel"]] = relationship(
        back_populates="fiscal_year",
        order_by="FiscalPeriodModel.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<FiscalYear {self.fiscal_year_id}: {self.start_date} to {self.end_date}>"


class FiscalPeriodModel(Base):
    """
    One regular or Adjustment period within a fiscal year.

    Adjustment periods have no dates (``start_date``/``end_date`` are NULL).
    """

    __tablename__ = "fiscal_periods"

    __table_args__ = (
        Index("idx_period_fiscal_year", "fiscal_year_ref", "position"),
    )

    period_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    fiscal_year_ref: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("fiscal_years.fiscal_year_id"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date | None] = mapped_column(nullable=True)
    end_date: Mapped[date | None] = mapped_column(nullable=True)
    is_adjustment: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    fiscal_year: Mapped[FiscalYearModel] = relationship(back_populates="periods")
    statuses: Mapped[list["SubledgerStatusModel"]] = relationship(
        back_populates="period",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<FiscalPeriod {self.period_id} ({self.code})>"


class SubledgerStatusModel(Base):
    """
    Status of one subledger in one period.

    ``last_action`` and ``changed_at`` record the most recent transition
    that wrote this row; both are NULL for generated statuses.
    """

    __tablename__ = "subledger_statuses"

    __table_args__ = (
        UniqueConstraint("period_ref", "subledger", name="uq_subledger_status"),
        Index("idx_subledger_status_period", "period_ref"),
    )

    period_ref: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("fiscal_periods.period_id"),
        nullable=False,
    )
    subledger: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    last_action: Mapped[str | None] = mapped_column(String(20), nullable=True)
    changed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    period: Mapped[FiscalPeriodModel] = relationship(back_populates="statuses")

    def __repr__(self) -> str:
        return f"<SubledgerStatus {self.period_ref} {self.subledger}: {self.status}>"
