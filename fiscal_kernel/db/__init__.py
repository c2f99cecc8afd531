"""Database layer - engine, base classes, and the Hard Closed guard."""

from fiscal_kernel.db.base import Base, UUIDString
from fiscal_kernel.db.engine import (
    IN_MEMORY_URL,
    create_engine_from_url,
    create_session_factory,
    create_tables,
    session_scope,
)
from fiscal_kernel.db.immutability import register_immutability_listeners

__all__ = [
    "Base",
    "UUIDString",
    "IN_MEMORY_URL",
    "create_engine_from_url",
    "create_session_factory",
    "create_tables",
    "session_scope",
    "register_immutability_listeners",
]
