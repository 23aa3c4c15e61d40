"""
Module: payroll_kernel.selectors.statistics_selector
Responsibility: Aggregations over the payment history -- totals, averages,
    rankings, distributions and single-hit anomaly detection.
Architecture position: Kernel > Selectors.  Composes the agent, department and
    payment selectors; never mutates.

Invariants enforced:
    - All monetary results are Decimal, summed in Python from the same rows
      the payment selector returns, so a total always equals the sum of the
      corresponding listing.
    - Empty inputs produce Decimal("0"), 0, an empty collection or None.
    - Ties follow scan order (ascending id): the highest payment and the
      first unusual payment are the earliest stored among equals, and the
      agent ranking is a stable sort.

Failure modes:
    - AgentNotFoundError / DepartmentNotFoundError when the subject of an
      entity-scoped statistic does not exist.

Consistency:
    Department figures fan out: one query for the member agents, then one
    query per agent for its payments.  There is no snapshot across these
    reads; a payment inserted concurrently may or may not be counted.
"""

from collections import Counter
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from payroll_kernel.domain.dtos import AgentTotal, PaymentInfo
from payroll_kernel.domain.values import PaymentType
from payroll_kernel.exceptions import AgentNotFoundError, DepartmentNotFoundError
from payroll_kernel.models.payment import Payment
from payroll_kernel.selectors.agent_selector import AgentSelector
from payroll_kernel.selectors.base import BaseSelector
from payroll_kernel.selectors.department_selector import DepartmentSelector
from payroll_kernel.selectors.payment_selector import PaymentSelector

ZERO = Decimal("0")


def _sum(payments: list[PaymentInfo]) -> Decimal:
    return sum((p.amount for p in payments), ZERO)


class StatisticsSelector(BaseSelector[Payment]):
    """
    Read-only statistics engine.

    Contract:
        Every method is a pure read over the current store contents.
    """

    def __init__(self, session: Session):
        super().__init__(session)
        self._agents = AgentSelector(session)
        self._departments = DepartmentSelector(session)
        self._payments = PaymentSelector(session)

    # -- helpers -----------------------------------------------------------

    def _require_agent(self, agent_id: int) -> None:
        if not self._agents.exists(agent_id):
            raise AgentNotFoundError(agent_id)

    def _require_department(self, department_id: int) -> None:
        if not self._departments.exists(department_id):
            raise DepartmentNotFoundError(department_id)

    def _department_payments(self, department_id: int) -> list[PaymentInfo]:
        payments: list[PaymentInfo] = []
        for agent in self._agents.list_by_department(department_id):
            payments.extend(self._payments.list_by_agent(agent.id))
        return payments

    # -- per agent ---------------------------------------------------------

    def annual_total(self, agent_id: int, year: int) -> Decimal:
        """Sum of the agent's payments dated within calendar ``year``."""
        self._require_agent(agent_id)
        return _sum(
            [
                p
                for p in self._payments.list_by_agent(agent_id)
                if p.payment_date is not None and p.payment_date.year == year
            ]
        )

    def count_by_type(self, agent_id: int, payment_type: PaymentType) -> int:
        self._require_agent(agent_id)
        return len(self._payments.list_by_agent_and_type(agent_id, payment_type))

    def highest_payment(self, agent_id: int) -> PaymentInfo | None:
        """The agent's largest payment; the earliest stored wins a tie."""
        self._require_agent(agent_id)
        highest: PaymentInfo | None = None
        for payment in self._payments.list_by_agent(agent_id):
            if highest is None or payment.amount > highest.amount:
                highest = payment
        return highest

    # -- per department ----------------------------------------------------

    def department_total(self, department_id: int) -> Decimal:
        """Sum of every payment owned by the department's current members."""
        self._require_department(department_id)
        return _sum(self._department_payments(department_id))

    def department_average_salary(self, department_id: int) -> Decimal:
        """Mean SALARY amount across members; 0 when there is none."""
        self._require_department(department_id)
        salaries = [
            p
            for p in self._department_payments(department_id)
            if p.payment_type == PaymentType.SALARY
        ]
        if not salaries:
            return ZERO
        return _sum(salaries) / len(salaries)

    # -- global ------------------------------------------------------------

    def rank_agents_by_total_payments(self) -> list[AgentTotal]:
        """All agents by descending payment total; ties keep scan order."""
        totals = [
            AgentTotal(agent=agent, total=_sum(self._payments.list_by_agent(agent.id)))
            for agent in self._agents.list_all()
        ]
        # sorted() is stable, so equal totals keep ascending-id order.
        return sorted(totals, key=lambda row: row.total, reverse=True)

    def payment_distribution(self) -> dict[PaymentType, int]:
        """Payment count per type.  Types with no payments are absent."""
        counts = Counter(p.payment_type for p in self._payments.list_all())
        return dict(counts)

    def global_total(self) -> Decimal:
        return _sum(self._payments.list_all())

    def total_agents(self) -> int:
        return self._agents.count()

    def total_departments(self) -> int:
        return self._departments.count()

    def detect_unusual_payment(self, threshold: Decimal | int | float) -> PaymentInfo | None:
        """
        First payment in scan order whose amount exceeds ``threshold``.

        This is a single-hit scan, not a full anomaly report.  The threshold
        is not validated: zero or a negative value matches the first payment.
        """
        limit = threshold if isinstance(threshold, Decimal) else Decimal(str(threshold))
        for payment in self._payments.list_all():
            if payment.amount > limit:
                return payment
        return None

    def payments_between(self, start: date, end: date) -> list[PaymentInfo]:
        """Payments dated in ``[start, end]``; empty when start > end."""
        return self._payments.list_by_date_range(start, end)
