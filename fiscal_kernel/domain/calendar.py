"""
CalendarGenerator -- configuration to fiscal years.

Responsibility:
    Build the three-year fiscal calendar from ``CalendarConfig`` and seed
    each period's initial subledger statuses from the evaluation date.

Architecture position:
    Kernel > Domain -- pure function, zero I/O.  The evaluation date is a
    parameter; the caller obtains it from an injected Clock.

Invariants enforced:
    - Exactly ``FISCAL_YEAR_HORIZON`` consecutive fiscal years.
    - Regular periods are contiguous, non-overlapping and cover the year.
    - Each year ends with exactly one dateless Adjustment period.
    - All-or-nothing: any invalid input raises ConfigurationError before a
      single period is built.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from fiscal_kernel.domain.dtos import FiscalYearInfo, PeriodInfo
from fiscal_kernel.domain.values import (
    DEPENDENT_SUBLEDGERS,
    Frequency,
    PeriodStatus,
    SubledgerName,
)
from fiscal_kernel.exceptions import ConfigurationError

FISCAL_YEAR_HORIZON = 3
MIN_START_YEAR = 1900
MAX_START_YEAR = 2100

MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class CalendarConfig:
    """Calendar definition supplied by the collaborator.

    Fields are kept as given; ``generate_calendar`` validates them.
    """

    start_month: str
    start_year: int
    frequency: Frequency | str = Frequency.MONTHLY


def parse_start_month(value: object) -> int:
    """Return the 1-based month number for an English month name.

    Raises:
        ConfigurationError: if ``value`` is not a month name.
    """
    if isinstance(value, str):
        wanted = value.strip().lower()
        for index, name in enumerate(MONTH_NAMES, start=1):
            if name.lower() == wanted:
                return index
    raise ConfigurationError("start_month", value, "not a recognized month name")


def validate_start_year(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError("start_year", value, "must be an integer")
    if not MIN_START_YEAR <= value <= MAX_START_YEAR:
        raise ConfigurationError(
            "start_year",
            value,
            f"must be between {MIN_START_YEAR} and {MAX_START_YEAR}",
        )
    return value


def parse_frequency(value: object) -> Frequency:
    try:
        return Frequency.parse(value)  # type: ignore[arg-type]
    except ValueError:
        raise ConfigurationError(
            "frequency", value, "must be Monthly or Quarterly"
        ) from None


def initial_status(start: date, end: date, today: date) -> PeriodStatus:
    """Status a regular period starts with, judged against ``today``."""
    if today > end:
        return PeriodStatus.CLOSED
    if today < start:
        return PeriodStatus.FUTURE
    return PeriodStatus.OPEN


def generate_calendar(config: CalendarConfig, today: date) -> tuple[FiscalYearInfo, ...]:
    """
    Generate the fiscal calendar.

    Args:
        config: Start month, start year and frequency.
        today: Evaluation date for initial statuses.

    Returns:
        ``FISCAL_YEAR_HORIZON`` fiscal years starting in ``config.start_year``.

    Raises:
        ConfigurationError: on an unrecognized month, out-of-range year, or
            unknown frequency.
    """
    month = parse_start_month(config.start_month)
    year = validate_start_year(config.start_year)
    frequency = parse_frequency(config.frequency)

    return tuple(
        _build_fiscal_year(year + offset, month, frequency, today)
        for offset in range(FISCAL_YEAR_HORIZON)
    )


def _build_fiscal_year(
    start_year: int, start_month: int, frequency: Frequency, today: date
) -> FiscalYearInfo:
    fy_start = date(start_year, start_month, 1)
    fy_end = _month_end(*_add_months(start_year, start_month, 11))
    label = f"FY{fy_end.year}"

    periods: list[PeriodInfo] = []
    step = frequency.months_per_period
    for index in range(frequency.periods_per_year):
        p_year, p_month = _add_months(start_year, start_month, index * step)
        p_start = date(p_year, p_month, 1)
        p_end = _month_end(*_add_months(p_year, p_month, step - 1))
        status = initial_status(p_start, p_end, today)

        if frequency is Frequency.MONTHLY:
            period_id = f"{MONTH_NAMES[p_month - 1][:3].upper()}-{label}"
            code = f"{label}-P{index + 1}"
            name = f"{MONTH_NAMES[p_month - 1]} {p_year}"
        else:
            period_id = f"Q{index + 1}-{label}"
            code = f"{label}-Q{index + 1}"
            name = f"Quarter {index + 1} {label}"

        periods.append(
            PeriodInfo(
                period_id=period_id,
                code=code,
                name=name,
                fiscal_year_id=label,
                position=index + 1,
                start_date=p_start,
                end_date=p_end,
                is_adjustment=False,
                statuses={sl: status for sl in SubledgerName},
            )
        )

    adjustment_statuses = {SubledgerName.GENERAL_LEDGER: PeriodStatus.ADJUSTMENT}
    adjustment_statuses.update({sl: PeriodStatus.FUTURE for sl in DEPENDENT_SUBLEDGERS})
    periods.append(
        PeriodInfo(
            period_id=f"ADJ-{label}",
            code=f"{label}-ADJ",
            name=f"Adjustment {label}",
            fiscal_year_id=label,
            position=frequency.periods_per_year + 1,
            start_date=None,
            end_date=None,
            is_adjustment=True,
            statuses=adjustment_statuses,
        )
    )

    return FiscalYearInfo(
        fiscal_year_id=label,
        name=label,
        start_date=fy_start,
        end_date=fy_end,
        frequency=frequency,
        periods=tuple(periods),
    )


def _add_months(year: int, month: int, count: int) -> tuple[int, int]:
    zero_based = (month - 1) + count
    return year + zero_based // 12, zero_based % 12 + 1


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])
