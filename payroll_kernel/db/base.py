"""
Module: payroll_kernel.db.base
Responsibility: Declarative base for the agents, departments and payments
    tables.  Fixes the primary key convention and the Python -> SQL type map.
Architecture position: Kernel > DB, the bottom of the import graph.  Models
    import from here; this module imports nothing else from the kernel.

Invariants enforced:
    - Every table has an integer ``id`` assigned by the database on INSERT.
      Ids only grow, so ``ORDER BY id`` is insertion order and the selectors'
      scan order is deterministic.
    - Money is Decimal end to end.  Unannotated Decimal columns map to
      Numeric(38, 9); payment amounts narrow this to Numeric(12, 2).
    - TrackedBase stamps created_at / updated_at on the server side.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import BigInteger, Date, DateTime, Integer, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements an "INTEGER PRIMARY KEY" column.
IdentityType = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """Root of every kernel model: integer ``id`` plus the shared type map."""

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        datetime: DateTime(timezone=True),
        date: Date(),
        int: BigInteger,
    }

    id: Mapped[int] = mapped_column(
        IdentityType,
        primary_key=True,
        autoincrement=True,
    )


class TrackedBase(Base):
    """Adds row creation and last-modification timestamps."""

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
