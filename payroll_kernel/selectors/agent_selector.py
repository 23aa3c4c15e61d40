"""
Module: payroll_kernel.selectors.agent_selector
Responsibility: Read-only queries over agents.
Architecture position: Kernel > Selectors.
"""

from sqlalchemy import func, select

from payroll_kernel.domain.dtos import AgentInfo
from payroll_kernel.domain.values import AgentRole
from payroll_kernel.models.agent import Agent
from payroll_kernel.selectors.base import BaseSelector


class AgentSelector(BaseSelector[Agent]):
    """Point lookups and scans over the agents table."""

    def get(self, agent_id: int) -> AgentInfo | None:
        agent = self.session.get(Agent, agent_id)
        return AgentInfo.from_model(agent) if agent is not None else None

    def exists(self, agent_id: int) -> bool:
        return self.session.get(Agent, agent_id) is not None

    def find_by_email(self, email: str) -> AgentInfo | None:
        stmt = select(Agent).where(Agent.email == email)
        agent = self.session.execute(stmt).scalar_one_or_none()
        return AgentInfo.from_model(agent) if agent is not None else None

    def list_all(self) -> list[AgentInfo]:
        stmt = select(Agent).order_by(Agent.id)
        return [AgentInfo.from_model(a) for a in self.session.execute(stmt).scalars()]

    def list_by_department(self, department_id: int) -> list[AgentInfo]:
        stmt = (
            select(Agent)
            .where(Agent.department_id == department_id)
            .order_by(Agent.id)
        )
        return [AgentInfo.from_model(a) for a in self.session.execute(stmt).scalars()]

    def list_by_role(self, role: AgentRole) -> list[AgentInfo]:
        stmt = (
            select(Agent)
            .where(Agent.role == AgentRole(role).value)
            .order_by(Agent.id)
        )
        return [AgentInfo.from_model(a) for a in self.session.execute(stmt).scalars()]

    def count(self) -> int:
        return self.session.execute(select(func.count(Agent.id))).scalar_one()
