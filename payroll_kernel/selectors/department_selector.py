"""
Module: payroll_kernel.selectors.department_selector
Responsibility: Read-only queries over departments.
Architecture position: Kernel > Selectors.
"""

from sqlalchemy import func, select

from payroll_kernel.domain.dtos import DepartmentInfo
from payroll_kernel.models.department import Department
from payroll_kernel.selectors.base import BaseSelector


class DepartmentSelector(BaseSelector[Department]):
    """Point lookups and scans over the departments table."""

    def get(self, department_id: int) -> DepartmentInfo | None:
        department = self.session.get(Department, department_id)
        return DepartmentInfo.from_model(department) if department is not None else None

    def exists(self, department_id: int) -> bool:
        return self.session.get(Department, department_id) is not None

    def find_by_name(self, name: str) -> DepartmentInfo | None:
        stmt = select(Department).where(Department.name == name)
        department = self.session.execute(stmt).scalar_one_or_none()
        return DepartmentInfo.from_model(department) if department is not None else None

    def list_all(self) -> list[DepartmentInfo]:
        stmt = select(Department).order_by(Department.id)
        return [
            DepartmentInfo.from_model(d)
            for d in self.session.execute(stmt).scalars()
        ]

    def list_headed_by(self, agent_id: int) -> list[DepartmentInfo]:
        """Departments whose responsible pointer names ``agent_id``."""
        stmt = (
            select(Department)
            .where(Department.responsible_id == agent_id)
            .order_by(Department.id)
        )
        return [
            DepartmentInfo.from_model(d)
            for d in self.session.execute(stmt).scalars()
        ]

    def count(self) -> int:
        return self.session.execute(select(func.count(Department.id))).scalar_one()
