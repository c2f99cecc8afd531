"""
Pytest fixtures for the fiscal period kernel test suite.

Provides:
- Structured logging configured once per session, with per-test capture
- A deterministic clock pinned to 2025-03-15
- A private in-memory PeriodStatusStore per test
- A FiscalCalendarService configured for January 2025, Monthly
"""

import json
import logging
from datetime import date
from io import StringIO

import pytest

from fiscal_kernel.domain.calendar import CalendarConfig
from fiscal_kernel.domain.clock import DeterministicClock
from fiscal_kernel.domain.values import Frequency, PeriodAction, PeriodStatus, SubledgerName
from fiscal_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from fiscal_kernel.services import (
    ActionAdvisor,
    FiscalCalendarService,
    PeriodStatusStore,
    TransitionExecutor,
)

TODAY = date(2025, 3, 15)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture fiscal_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, service):
            service.perform_action(...)
            logs = captured_logs()
            assert any(r["message"] == "transition_applied" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("fiscal_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Clock, config and store fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Clock frozen at noon UTC on 2025-03-15."""
    return DeterministicClock.on(TODAY)


@pytest.fixture
def monthly_config():
    return CalendarConfig("January", 2025, Frequency.MONTHLY)


@pytest.fixture
def quarterly_config():
    return CalendarConfig("January", 2025, Frequency.QUARTERLY)


@pytest.fixture
def store():
    """A private in-memory store, disposed after the test."""
    store = PeriodStatusStore()
    yield store
    store.dispose()


@pytest.fixture
def service(store, deterministic_clock, monthly_config) -> FiscalCalendarService:
    """Facade over ``store`` with the January 2025 monthly calendar loaded."""
    service = FiscalCalendarService(store, deterministic_clock)
    service.configure(monthly_config)
    return service


@pytest.fixture
def advisor(service) -> ActionAdvisor:
    return service.advisor


@pytest.fixture
def executor(service) -> TransitionExecutor:
    return service.executor


@pytest.fixture
def close_gl(executor, store):
    """Close the General Ledger of each named FY2025 period, in order.

    Future periods are opened first.
    """
    gl = SubledgerName.GENERAL_LEDGER

    def _close(*period_ids: str):
        for period_id in period_ids:
            if store.get_period("FY2025", period_id).status_of(gl) is PeriodStatus.FUTURE:
                executor.execute("FY2025", period_id, gl, PeriodAction.OPEN)
            executor.execute("FY2025", period_id, gl, PeriodAction.CLOSE)

    return _close
