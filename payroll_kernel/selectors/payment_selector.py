"""
Module: payroll_kernel.selectors.payment_selector
Responsibility: Read-only queries over payments.
Architecture position: Kernel > Selectors.

Date ranges are inclusive on both ends.  A range whose start falls after its
end matches nothing; it is not an error.
"""

from datetime import date

from sqlalchemy import func, select

from payroll_kernel.domain.dtos import PaymentInfo
from payroll_kernel.domain.values import PaymentType
from payroll_kernel.models.payment import Payment
from payroll_kernel.selectors.base import BaseSelector


class PaymentSelector(BaseSelector[Payment]):
    """Point lookups and scans over the payments table."""

    def _list(self, stmt) -> list[PaymentInfo]:
        stmt = stmt.order_by(Payment.id)
        return [PaymentInfo.from_model(p) for p in self.session.execute(stmt).scalars()]

    def get(self, payment_id: int) -> PaymentInfo | None:
        payment = self.session.get(Payment, payment_id)
        return PaymentInfo.from_model(payment) if payment is not None else None

    def list_all(self) -> list[PaymentInfo]:
        return self._list(select(Payment))

    def list_by_agent(self, agent_id: int) -> list[PaymentInfo]:
        return self._list(select(Payment).where(Payment.agent_id == agent_id))

    def list_by_type(self, payment_type: PaymentType) -> list[PaymentInfo]:
        return self._list(
            select(Payment).where(
                Payment.payment_type == PaymentType(payment_type).value
            )
        )

    def list_by_agent_and_type(
        self,
        agent_id: int,
        payment_type: PaymentType,
    ) -> list[PaymentInfo]:
        return self._list(
            select(Payment).where(
                Payment.agent_id == agent_id,
                Payment.payment_type == PaymentType(payment_type).value,
            )
        )

    def list_by_date_range(self, start: date, end: date) -> list[PaymentInfo]:
        return self._list(
            select(Payment).where(Payment.payment_date.between(start, end))
        )

    def count_by_agent(self, agent_id: int) -> int:
        stmt = select(func.count(Payment.id)).where(Payment.agent_id == agent_id)
        return self.session.execute(stmt).scalar_one()
