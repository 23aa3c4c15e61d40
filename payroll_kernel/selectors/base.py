"""
Module: payroll_kernel.selectors.base
Responsibility: Shared base for the read side.  Selectors run point lookups,
    full scans and filtered scans over agents, departments and payments, and
    hand back DTOs.
Architecture position: Kernel > Selectors.  Imports db/, models/ and domain/;
    never services/.

Invariants enforced:
    - No writes: a selector never adds, deletes, flushes or commits.
    - Multi-row results are ordered by primary key, which is insertion order.
    - Missing rows yield None or [] rather than an exception; only the
      entity-scoped statistics raise NotFound errors.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from payroll_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """Read-only view over one table, bound to the caller's session."""

    def __init__(self, session: Session):
        self.session = session
