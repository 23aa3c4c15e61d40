"""
Module: payroll_kernel.models.agent
Responsibility: ORM persistence for agents (staff members).  The agent row is
    the single stored side of the agent -> department relationship.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - email is unique across all agents (uq_agent_email).
    - department_id, when set, references a stored department (FK).
    - Department membership is NEVER stored on the department; it is derived
      by querying agents by department_id.

Failure modes:
    - IntegrityError on duplicate email if the service-level check is
      bypassed or raced.
"""

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import IdentityType, TrackedBase
from payroll_kernel.domain.values import AgentRole


class Agent(TrackedBase):
    """
    A staff member who can head a department and receive payments.

    Contract:
        The password column holds the credential exactly as given; hashing
        is outside the scope of the kernel.

    Guarantees:
        - role holds an AgentRole value.
        - department_id is None for unaffiliated agents.
    """

    __tablename__ = "agents"

    __table_args__ = (
        UniqueConstraint("email", name="uq_agent_email"),
        Index("idx_agent_department", "department_id"),
        Index("idx_agent_role", "role"),
    )

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[AgentRole] = mapped_column(
        String(20),
        nullable=False,
        default=AgentRole.WORKER.value,
    )

    department_id: Mapped[int | None] = mapped_column(
        IdentityType,
        ForeignKey("departments.id", name="fk_agent_department"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Agent {self.id}: {self.first_name} {self.last_name} ({self.role})>"
