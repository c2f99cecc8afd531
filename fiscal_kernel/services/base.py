"""
BaseService -- abstract base for the kernel's store-backed services.

Responsibility:
    Provides the common constructor for services that operate on the
    PeriodStatusStore.  Services never open sessions themselves; every read
    and write goes through ``store.transaction()``, which owns the session,
    the commit/rollback and the store's critical section.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING

from fiscal_kernel.domain.clock import Clock, SystemClock

if TYPE_CHECKING:
    from fiscal_kernel.services.period_status_store import PeriodStatusStore


class BaseService(ABC):
    """
    Abstract base class for store-backed services.

    Contract:
        Accepts the shared ``PeriodStatusStore`` and an optional ``Clock``
        (defaults to ``SystemClock``).
    """

    def __init__(self, store: PeriodStatusStore, clock: Clock | None = None):
        self._store = store
        self._clock = clock or SystemClock()

    @property
    def store(self) -> PeriodStatusStore:
        return self._store
