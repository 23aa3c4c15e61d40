"""
Common base for the write-side services.

A service is constructed around a caller-owned SQLAlchemy ``Session``.  It
adds, changes and deletes rows and flushes after each step so ids and
constraint errors surface immediately, but it never commits or rolls back:
the caller decides the transaction boundary (``session_scope()``, a script,
or the test fixture's outer transaction).
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from payroll_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """Holds the session; ``ModelType`` names the service's primary table."""

    def __init__(self, session: Session):
        self.session = session
