"""
Closed value sets for the period control lifecycle.

Every function that switches on one of these enums handles each member
explicitly; there is no "unknown status" fallthrough.
"""

from __future__ import annotations

from enum import Enum


class SubledgerName(str, Enum):
    """The fixed set of subledgers tracked in every period."""

    GENERAL_LEDGER = "General Ledger"
    ACCOUNTS_PAYABLE = "Accounts Payable"
    ACCOUNTS_RECEIVABLE = "Accounts Receivable"

    @property
    def short_code(self) -> str:
        return _SUBLEDGER_SHORT_CODES[self]

    @classmethod
    def parse(cls, value: "str | SubledgerName") -> SubledgerName:
        """Accept display names, identifier names or GL/AP/AR short codes.

        Raises:
            ValueError: if ``value`` names no subledger.
        """
        if isinstance(value, SubledgerName):
            return value
        key = _normalize(value)
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.name), member.short_code.lower()):
                return member
        raise ValueError(f"Unknown subledger: {value!r}")


_SUBLEDGER_SHORT_CODES = {
    SubledgerName.GENERAL_LEDGER: "GL",
    SubledgerName.ACCOUNTS_PAYABLE: "AP",
    SubledgerName.ACCOUNTS_RECEIVABLE: "AR",
}

# AP and AR, in display order.  These are the subledgers a GL transition
# cascades into.
DEPENDENT_SUBLEDGERS: tuple[SubledgerName, ...] = (
    SubledgerName.ACCOUNTS_PAYABLE,
    SubledgerName.ACCOUNTS_RECEIVABLE,
)


class PeriodStatus(str, Enum):
    """Status of one subledger in one period (also used for derived aggregates).

    ``ADJUSTMENT`` only ever appears as the initial General Ledger status of
    an Adjustment period.  ``HARD_CLOSED`` is terminal.
    """

    FUTURE = "Future"
    OPEN = "Open"
    CLOSED = "Closed"
    ADJUSTMENT = "Adjustment"
    HARD_CLOSED = "Hard Closed"

    @classmethod
    def parse(cls, value: "str | PeriodStatus") -> PeriodStatus:
        if isinstance(value, PeriodStatus):
            return value
        key = _normalize(value)
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.name)):
                return member
        raise ValueError(f"Unknown period status: {value!r}")


CLOSED_STATUSES = frozenset({PeriodStatus.CLOSED, PeriodStatus.HARD_CLOSED})


class PeriodAction(str, Enum):
    """User-requested transitions.  Declaration order is presentation order."""

    OPEN = "Open"
    CLOSE = "Close"
    HARD_CLOSE = "Hard Close"
    REOPEN = "Reopen"

    @property
    def target_status(self) -> PeriodStatus:
        """The status a successful action writes to its subledger."""
        return _ACTION_TARGETS[self]

    @classmethod
    def parse(cls, value: "str | PeriodAction") -> PeriodAction:
        if isinstance(value, PeriodAction):
            return value
        key = _normalize(value)
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.name)):
                return member
        raise ValueError(f"Unknown period action: {value!r}")


_ACTION_TARGETS = {
    PeriodAction.OPEN: PeriodStatus.OPEN,
    PeriodAction.CLOSE: PeriodStatus.CLOSED,
    PeriodAction.HARD_CLOSE: PeriodStatus.HARD_CLOSED,
    PeriodAction.REOPEN: PeriodStatus.OPEN,
}


class Frequency(str, Enum):
    """How a fiscal year is divided into regular periods."""

    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"

    @property
    def periods_per_year(self) -> int:
        return 12 if self is Frequency.MONTHLY else 4

    @property
    def months_per_period(self) -> int:
        return 12 // self.periods_per_year

    @classmethod
    def parse(cls, value: "str | Frequency") -> Frequency:
        """Parse a frequency name.  ``4-4-5`` is accepted for Quarterly."""
        if isinstance(value, Frequency):
            return value
        key = _normalize(value)
        if key == "445":
            return cls.QUARTERLY
        for member in cls:
            if key == _normalize(member.value):
                return member
        raise ValueError(f"Unknown period frequency: {value!r}")


def _normalize(value: str) -> str:
    return "".join(ch for ch in str(value).lower() if ch.isalnum())
