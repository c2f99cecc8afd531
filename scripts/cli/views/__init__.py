"""CLI views: calendar table, available actions, action results."""

from scripts.cli.views.calendar import show_actions, show_calendar, show_result

__all__ = [
    "show_actions",
    "show_calendar",
    "show_result",
]
