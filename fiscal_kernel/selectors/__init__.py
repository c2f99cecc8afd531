"""Read-only query selectors."""

from fiscal_kernel.selectors.base import BaseSelector
from fiscal_kernel.selectors.calendar_selector import CalendarSelector

__all__ = ["BaseSelector", "CalendarSelector"]
