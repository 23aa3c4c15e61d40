"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Immutable views of agents, departments and payments returned by the
    services and selectors.  Callers never receive ORM rows, so nothing
    outside the kernel can mutate the store behind the services' back.

Architecture position:
    Kernel > Domain -- free of database access.  from_model() class methods
    are boundary converters invoked only from services and selectors.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from payroll_kernel.domain.values import AgentRole, PaymentType

if TYPE_CHECKING:
    from payroll_kernel.models.agent import Agent as AgentModel
    from payroll_kernel.models.department import Department as DepartmentModel
    from payroll_kernel.models.payment import Payment as PaymentModel


@dataclass(frozen=True)
class AgentInfo:
    """Immutable DTO for agent data."""

    id: int
    last_name: str
    first_name: str
    email: str
    role: AgentRole
    department_id: int | None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_model(cls, agent: AgentModel) -> AgentInfo:
        return cls(
            id=agent.id,
            last_name=agent.last_name,
            first_name=agent.first_name,
            email=agent.email,
            role=AgentRole(agent.role),
            department_id=agent.department_id,
        )


@dataclass(frozen=True)
class DepartmentInfo:
    """Immutable DTO for department data."""

    id: int
    name: str
    responsible_id: int | None

    @classmethod
    def from_model(cls, department: DepartmentModel) -> DepartmentInfo:
        return cls(
            id=department.id,
            name=department.name,
            responsible_id=department.responsible_id,
        )


@dataclass(frozen=True)
class PaymentInfo:
    """Immutable DTO for payment data.

    The owning agent is referenced by id only; resolve it through the
    directory when the full record is needed.
    """

    id: int
    payment_type: PaymentType
    amount: Decimal
    reason: str | None
    payment_date: date
    condition_validated: bool
    agent_id: int

    @classmethod
    def from_model(cls, payment: PaymentModel) -> PaymentInfo:
        return cls(
            id=payment.id,
            payment_type=PaymentType(payment.payment_type),
            amount=Decimal(payment.amount),
            reason=payment.reason,
            payment_date=payment.payment_date,
            condition_validated=bool(payment.condition_validated),
            agent_id=payment.agent_id,
        )


@dataclass(frozen=True)
class AgentTotal:
    """One row of the agent ranking: an agent and the sum of its payments."""

    agent: AgentInfo
    total: Decimal
