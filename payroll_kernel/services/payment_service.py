"""
Service layer for the payment ledger.

Owns payment admissibility and payment CRUD.  Every write runs the same
three gates, in order, before anything is persisted:

    1. the owning agent exists,
    2. the amount is strictly positive and within the ceiling,
    3. the eligibility policy admits (agent role, payment type, condition).

Updates re-run the gates against the new values, resolving the owning agent
from the payment's stored agent_id (which never changes), so an update can
never record a payment that create_payment would have refused.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.dtos import PaymentInfo
from payroll_kernel.domain.eligibility import DEFAULT_POLICY, EligibilityPolicy
from payroll_kernel.domain.validation import parse_payment_type, validate_amount
from payroll_kernel.domain.values import MAX_PAYMENT_AMOUNT, PaymentType
from payroll_kernel.exceptions import (
    AgentNotFoundError,
    IneligiblePaymentError,
    PaymentNotFoundError,
)
from payroll_kernel.logging_config import get_logger
from payroll_kernel.models.agent import Agent
from payroll_kernel.models.payment import Payment
from payroll_kernel.selectors.payment_selector import PaymentSelector
from payroll_kernel.services.base import BaseService

logger = get_logger("services.payment")


class PaymentLedgerService(BaseService[Payment]):
    """
    Service for recording, amending and querying payments.

    Args:
        session: Caller-owned SQLAlchemy session.
        clock: Supplies today's date when a payment has none.
        policy: Eligibility rules; defaults to BONUS/INDEMNITY restricted to
            DEPARTMENT_HEAD/DIRECTOR with a validated condition.
        amount_ceiling: Largest admissible amount (inclusive).
    """

    def __init__(
        self,
        session,
        clock: Clock | None = None,
        policy: EligibilityPolicy | None = None,
        amount_ceiling: Decimal = MAX_PAYMENT_AMOUNT,
    ):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._policy = policy or DEFAULT_POLICY
        self._amount_ceiling = amount_ceiling
        self._selector = PaymentSelector(session)

    def _get_agent(self, agent_id: int) -> Agent:
        agent = self.session.get(Agent, agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    def _get_payment(self, payment_id: int) -> Payment:
        payment = self.session.get(Payment, payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    def _check_eligibility(
        self,
        agent: Agent,
        payment_type: PaymentType,
        condition_validated: bool,
    ) -> None:
        try:
            self._policy.check(agent.role, payment_type, condition_validated)
        except IneligiblePaymentError as exc:
            logger.warning(
                "payment_rejected",
                extra={
                    "agent_id": agent.id,
                    "payment_type": payment_type.value,
                    "role": exc.role,
                    "rejection_reason": exc.reason,
                },
            )
            raise

    # -- writes ----------------------------------------------------------------

    def create_payment(
        self,
        agent_id: int,
        payment_type: PaymentType,
        amount: Any,
        reason: str | None,
        condition_validated: bool,
        payment_date: date | None = None,
    ) -> PaymentInfo:
        """
        Record a payment for an agent.

        Args:
            agent_id: Owning agent; immutable afterwards.
            payment_type: PaymentType (or its name/value).
            amount: Decimal, int or numeric string (floats go through str()).
            reason: Free text.
            condition_validated: Explicit approval flag.
            payment_date: Effective date; defaults to today.

        Returns:
            Created PaymentInfo DTO.

        Raises:
            AgentNotFoundError: agent_id does not exist.
            NegativeOrZeroAmountError: amount <= 0.
            AmountTooLargeError: amount above the ceiling.
            IneligiblePaymentError: type not admissible for role/condition.
        """
        agent = self._get_agent(agent_id)
        payment_type = parse_payment_type(payment_type)
        value = validate_amount(amount, self._amount_ceiling)
        effective_date = payment_date or self._clock.today()

        self._check_eligibility(agent, payment_type, condition_validated)

        payment = Payment(
            payment_type=payment_type.value,
            amount=value,
            reason=reason,
            payment_date=effective_date,
            condition_validated=bool(condition_validated),
            agent_id=agent.id,
        )
        self.session.add(payment)
        self.session.flush()

        logger.info(
            "payment_created",
            extra={
                "payment_id": payment.id,
                "agent_id": agent.id,
                "payment_type": payment_type.value,
                "amount": value,
            },
        )
        return PaymentInfo.from_model(payment)

    def update_payment(
        self,
        payment_id: int,
        payment_type: PaymentType,
        amount: Any,
        reason: str | None,
        condition_validated: bool,
        payment_date: date | None = None,
    ) -> PaymentInfo:
        """
        Replace a payment's type, amount, reason, condition and date.

        ``payment_date=None`` keeps the stored date.  Nothing is changed if
        any gate fails.

        Raises:
            PaymentNotFoundError: payment_id does not exist.
            AgentNotFoundError: the owning agent no longer exists.
            NegativeOrZeroAmountError / AmountTooLargeError: bad amount.
            IneligiblePaymentError: new type/condition not admissible.
        """
        payment = self._get_payment(payment_id)
        payment_type = parse_payment_type(payment_type)
        value = validate_amount(amount, self._amount_ceiling)
        agent = self._get_agent(payment.agent_id)

        self._check_eligibility(agent, payment_type, condition_validated)

        payment.payment_type = payment_type.value
        payment.amount = value
        payment.reason = reason
        payment.condition_validated = bool(condition_validated)
        if payment_date is not None:
            payment.payment_date = payment_date
        self.session.flush()

        logger.info(
            "payment_updated",
            extra={
                "payment_id": payment.id,
                "agent_id": agent.id,
                "payment_type": payment_type.value,
                "amount": value,
            },
        )
        return PaymentInfo.from_model(payment)

    def delete_payment(self, payment_id: int) -> None:
        """
        Raises:
            PaymentNotFoundError: payment_id does not exist.
        """
        payment = self._get_payment(payment_id)
        self.session.delete(payment)
        self.session.flush()

        logger.info("payment_deleted", extra={"payment_id": payment_id})

    # -- reads -----------------------------------------------------------------

    def get_payment(self, payment_id: int) -> PaymentInfo:
        """
        Raises:
            PaymentNotFoundError: payment_id does not exist.
        """
        return PaymentInfo.from_model(self._get_payment(payment_id))

    def list_payments(self) -> list[PaymentInfo]:
        return self._selector.list_all()

    def list_by_agent(self, agent_id: int) -> list[PaymentInfo]:
        """
        Raises:
            AgentNotFoundError: agent_id does not exist.
        """
        self._get_agent(agent_id)
        return self._selector.list_by_agent(agent_id)

    def list_by_type(self, payment_type: PaymentType) -> list[PaymentInfo]:
        return self._selector.list_by_type(parse_payment_type(payment_type))

    def list_by_date_range(self, start: date, end: date) -> list[PaymentInfo]:
        """Payments dated in ``[start, end]``; empty when start > end."""
        return self._selector.list_by_date_range(start, end)

    def total_by_agent(self, agent_id: int) -> Decimal:
        """
        Raises:
            AgentNotFoundError: agent_id does not exist.
        """
        return sum((p.amount for p in self.list_by_agent(agent_id)), Decimal("0"))

    def average_by_agent(self, agent_id: int) -> Decimal:
        """Mean payment amount; Decimal("0") when the agent has none.

        Raises:
            AgentNotFoundError: agent_id does not exist.
        """
        payments = self.list_by_agent(agent_id)
        if not payments:
            return Decimal("0")
        return sum((p.amount for p in payments), Decimal("0")) / len(payments)
