"""
Calendar generation tests.

Verifies:
- Three consecutive fiscal years, labelled by the calendar year they end in
- 12 monthly / 4 quarterly regular periods plus one dateless Adjustment period
- Contiguous, non-overlapping regular periods
- Initial statuses judged against the evaluation date
- Invalid configuration fails before anything is built
"""

from datetime import date, timedelta

import pytest

from fiscal_kernel.domain.calendar import (
    CalendarConfig,
    generate_calendar,
    initial_status,
    parse_start_month,
)
from fiscal_kernel.domain.values import Frequency, PeriodStatus, SubledgerName
from fiscal_kernel.exceptions import ConfigurationError

GL = SubledgerName.GENERAL_LEDGER
AP = SubledgerName.ACCOUNTS_PAYABLE
AR = SubledgerName.ACCOUNTS_RECEIVABLE

TODAY = date(2025, 3, 15)


class TestMonthlyCalendar:
    """January 2025, Monthly, evaluated on 2025-03-15."""

    @pytest.fixture
    def years(self):
        return generate_calendar(CalendarConfig("January", 2025, "Monthly"), TODAY)

    def test_three_consecutive_fiscal_years(self, years):
        assert [fy.fiscal_year_id for fy in years] == ["FY2025", "FY2026", "FY2027"]
        assert years[0].start_date == date(2025, 1, 1)
        assert years[0].end_date == date(2025, 12, 31)
        assert years[1].start_date == years[0].end_date + timedelta(days=1)

    def test_period_ids_and_adjustment_last(self, years):
        ids = [p.period_id for p in years[0].periods]
        assert ids == [
            "JAN-FY2025", "FEB-FY2025", "MAR-FY2025", "APR-FY2025",
            "MAY-FY2025", "JUN-FY2025", "JUL-FY2025", "AUG-FY2025",
            "SEP-FY2025", "OCT-FY2025", "NOV-FY2025", "DEC-FY2025",
            "ADJ-FY2025",
        ]

    def test_codes_names_and_positions(self, years):
        march = years[0].find_period("MAR-FY2025")
        assert march.code == "FY2025-P3"
        assert march.name == "March 2025"
        assert march.position == 3
        assert years[0].find_period("FY2025-P3") is march

    def test_february_leap_year_end(self, years):
        feb_2028 = generate_calendar(CalendarConfig("January", 2028, "Monthly"), TODAY)[0]
        assert feb_2028.find_period("FEB-FY2028").end_date == date(2028, 2, 29)
        assert years[0].find_period("FEB-FY2025").end_date == date(2025, 2, 28)

    def test_initial_statuses(self, years):
        fy = years[0]
        for period_id in ("JAN-FY2025", "FEB-FY2025"):
            assert set(fy.find_period(period_id).statuses.values()) == {PeriodStatus.CLOSED}
        assert set(fy.find_period("MAR-FY2025").statuses.values()) == {PeriodStatus.OPEN}
        for period in fy.regular_periods[3:]:
            assert set(period.statuses.values()) == {PeriodStatus.FUTURE}

    def test_adjustment_period_defaults(self, years):
        adj = years[0].adjustment_period
        assert adj.period_id == "ADJ-FY2025"
        assert adj.code == "FY2025-ADJ"
        assert adj.start_date is None and adj.end_date is None
        assert adj.statuses[GL] is PeriodStatus.ADJUSTMENT
        assert adj.statuses[AP] is PeriodStatus.FUTURE
        assert adj.statuses[AR] is PeriodStatus.FUTURE
        assert adj.position == 13

    def test_later_years_are_future(self, years):
        for fy in years[1:]:
            for period in fy.regular_periods:
                assert set(period.statuses.values()) == {PeriodStatus.FUTURE}


class TestQuarterlyCalendar:

    def test_four_quarters_plus_adjustment(self):
        fy = generate_calendar(CalendarConfig("January", 2025, "Quarterly"), TODAY)[0]
        assert [p.period_id for p in fy.periods] == [
            "Q1-FY2025", "Q2-FY2025", "Q3-FY2025", "Q4-FY2025", "ADJ-FY2025",
        ]
        q1 = fy.find_period("Q1-FY2025")
        assert (q1.start_date, q1.end_date) == (date(2025, 1, 1), date(2025, 3, 31))
        assert q1.code == "FY2025-Q1"
        assert q1.statuses[GL] is PeriodStatus.OPEN

    def test_legacy_445_is_quarterly(self):
        fy = generate_calendar(CalendarConfig("January", 2025, "4-4-5"), TODAY)[0]
        assert fy.frequency is Frequency.QUARTERLY
        assert len(fy.regular_periods) == 4


class TestNonJanuaryStart:

    def test_label_is_year_of_end_date(self):
        years = generate_calendar(CalendarConfig("July", 2024, "Monthly"), TODAY)
        assert [fy.fiscal_year_id for fy in years] == ["FY2025", "FY2026", "FY2027"]
        fy = years[0]
        assert fy.start_date == date(2024, 7, 1)
        assert fy.end_date == date(2025, 6, 30)
        assert fy.regular_periods[0].period_id == "JUL-FY2025"
        assert fy.regular_periods[-1].period_id == "JUN-FY2025"

    def test_period_names_use_calendar_year(self):
        fy = generate_calendar(CalendarConfig("October", 2024, "Monthly"), TODAY)[0]
        assert fy.find_period("DEC-FY2025").name == "December 2024"
        assert fy.find_period("JAN-FY2025").name == "January 2025"


class TestConfigurationErrors:

    @pytest.mark.parametrize("month", ["Janvier", "", "13", None])
    def test_unknown_month(self, month):
        with pytest.raises(ConfigurationError) as exc_info:
            generate_calendar(CalendarConfig(month, 2025, "Monthly"), TODAY)
        assert exc_info.value.field == "start_month"

    @pytest.mark.parametrize("year", [1899, 2101, True, "2025", 2025.0])
    def test_invalid_year(self, year):
        with pytest.raises(ConfigurationError) as exc_info:
            generate_calendar(CalendarConfig("January", year, "Monthly"), TODAY)
        assert exc_info.value.field == "start_year"

    def test_unknown_frequency(self):
        with pytest.raises(ConfigurationError) as exc_info:
            generate_calendar(CalendarConfig("January", 2025, "Weekly"), TODAY)
        assert exc_info.value.field == "frequency"
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_year_bounds_inclusive(self):
        assert generate_calendar(CalendarConfig("January", 1900, "Monthly"), TODAY)
        assert generate_calendar(CalendarConfig("January", 2100, "Quarterly"), TODAY)


class TestHelpers:

    def test_month_names_case_insensitive(self):
        assert parse_start_month("march") == 3
        assert parse_start_month("  DECEMBER ") == 12

    def test_initial_status_boundaries(self):
        start, end = date(2025, 3, 1), date(2025, 3, 31)
        assert initial_status(start, end, start) is PeriodStatus.OPEN
        assert initial_status(start, end, end) is PeriodStatus.OPEN
        assert initial_status(start, end, end + timedelta(days=1)) is PeriodStatus.CLOSED
        assert initial_status(start, end, start - timedelta(days=1)) is PeriodStatus.FUTURE
