"""
Fiscal calendar CLI -- operator script over FiscalCalendarService.

Configure the calendar, print statuses, list and perform period actions.
With the default in-memory database every invocation starts from the
packaged calendar; pass ``--db sqlite:///fiscal.db`` to keep state.

Entry point: python -m scripts.cli
"""

from scripts.cli.main import main

__all__ = ["main"]
