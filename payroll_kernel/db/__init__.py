"""Database layer - engine, session scope, and declarative base classes."""

from payroll_kernel.db.base import Base, IdentityType, TrackedBase
from payroll_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    session_scope,
)

__all__ = [
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "session_scope",
    "create_tables",
    "drop_tables",
    "Base",
    "TrackedBase",
    "IdentityType",
]
