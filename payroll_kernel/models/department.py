"""
Module: payroll_kernel.models.department
Responsibility: ORM persistence for departments.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - name is unique across all departments (uq_department_name).
    - responsible_id, when set, references a stored agent (FK).  The service
      layer keeps it symmetric: the responsible agent's department_id points
      back at this department.

Failure modes:
    - IntegrityError on duplicate name if the service-level check is
      bypassed or raced.
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import IdentityType, TrackedBase


class Department(TrackedBase):
    """
    An organizational unit, optionally headed by one responsible agent.

    Non-goals:
        - Does NOT hold a list of member agents; membership is a query over
          agents.department_id.
    """

    __tablename__ = "departments"

    __table_args__ = (
        UniqueConstraint("name", name="uq_department_name"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # agents <-> departments is a reference cycle; this side is added by ALTER.
    responsible_id: Mapped[int | None] = mapped_column(
        IdentityType,
        ForeignKey(
            "agents.id",
            name="fk_department_responsible",
            use_alter=True,
        ),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Department {self.id}: {self.name}>"
