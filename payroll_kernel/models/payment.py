"""
Module: payroll_kernel.models.payment
Responsibility: ORM persistence for payments made to agents.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - agent_id is never null and references a stored agent (FK).  It is set
      at creation and never changed by updates.
    - amount is stored as Numeric(12, 2); never float.

Failure modes:
    - IntegrityError if agent_id does not resolve (the ledger service checks
      first and raises AgentNotFoundError instead).
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import IdentityType, TrackedBase
from payroll_kernel.domain.values import PaymentType


class Payment(TrackedBase):
    """
    A single disbursement to one agent.

    Guarantees:
        - payment_type holds a PaymentType value.
        - condition_validated records the explicit approval flag that
          discretionary payment types require.
    """

    __tablename__ = "payments"

    __table_args__ = (
        Index("idx_payment_agent", "agent_id"),
        Index("idx_payment_type", "payment_type"),
        Index("idx_payment_date", "payment_date"),
    )

    payment_type: Mapped[PaymentType] = mapped_column(
        String(20),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )

    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    payment_date: Mapped[date] = mapped_column(nullable=False)

    condition_validated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    agent_id: Mapped[int] = mapped_column(
        IdentityType,
        ForeignKey("agents.id", name="fk_payment_agent"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Payment {self.id}: {self.payment_type} {self.amount} -> agent {self.agent_id}>"
