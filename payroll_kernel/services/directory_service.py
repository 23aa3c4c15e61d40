"""
Service layer for the agent / department directory.

Owns the agent <-> department relationship.  The relationship is stored on
one side only (``Agent.department_id``); membership is derived by query.
The single second pointer, ``Department.responsible_id``, is always written
together with the head's own ``department_id`` so the two never disagree.

Write ordering (each step is flushed before the next):
    - delete_department: detach every member agent, then delete the row.
    - assign_responsible / update_department / create_department: move the
      agent into the department, then point the department at the agent.
    - moving or removing a head: clear the old department's responsible
      pointer, then change the agent.
    - delete_agent: clear headed departments, then delete the agent.

Without a surrounding transaction, an interruption between steps leaves
detached-but-valid agents or a department without a head, never a pointer
to a deleted or foreign row.
"""

from __future__ import annotations

from decimal import Decimal

from payroll_kernel.domain.dtos import AgentInfo, DepartmentInfo, PaymentInfo
from payroll_kernel.domain.validation import (
    parse_role,
    validate_agent_input,
    validate_department_name,
)
from payroll_kernel.domain.values import AgentRole
from payroll_kernel.exceptions import (
    AgentHasPaymentsError,
    AgentNotFoundError,
    DepartmentNotFoundError,
    DuplicateEmailError,
    DuplicateNameError,
)
from payroll_kernel.logging_config import get_logger
from payroll_kernel.models.agent import Agent
from payroll_kernel.models.department import Department
from payroll_kernel.selectors.agent_selector import AgentSelector
from payroll_kernel.selectors.department_selector import DepartmentSelector
from payroll_kernel.selectors.payment_selector import PaymentSelector
from payroll_kernel.services.base import BaseService

logger = get_logger("services.directory")


class DirectoryService(BaseService[Agent]):
    """
    Service for managing agents, departments and their relationship.

    Every mutation re-reads the rows it touches; nothing is cached between
    calls.  All public methods return DTOs, not ORM entities.
    """

    # -- lookups -------------------------------------------------------------

    def _get_agent(self, agent_id: int) -> Agent:
        agent = self.session.get(Agent, agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    def _get_department(self, department_id: int) -> Department:
        department = self.session.get(Department, department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        return department

    def _resolve_department(self, department_id: int | None) -> Department | None:
        if department_id is None:
            return None
        return self._get_department(department_id)

    def _ensure_email_available(self, email: str, current_id: int | None = None) -> None:
        existing = AgentSelector(self.session).find_by_email(email)
        if existing is not None and existing.id != current_id:
            raise DuplicateEmailError(email)

    def _ensure_name_available(self, name: str, current_id: int | None = None) -> None:
        existing = DepartmentSelector(self.session).find_by_name(name)
        if existing is not None and existing.id != current_id:
            raise DuplicateNameError(name)

    def _members(self, department_id: int) -> list[Agent]:
        members = AgentSelector(self.session).list_by_department(department_id)
        return [self.session.get(Agent, info.id) for info in members]

    # -- relationship primitives ----------------------------------------------

    def _release_headship(self, agent: Agent, keep_department_id: int | None = None) -> None:
        """Clear responsible pointers naming ``agent``, except on ``keep_department_id``."""
        released = []
        for headed in DepartmentSelector(self.session).list_headed_by(agent.id):
            if headed.id != keep_department_id:
                self.session.get(Department, headed.id).responsible_id = None
                released.append(headed.id)
        if released:
            self.session.flush()
            logger.info(
                "department_responsible_cleared",
                extra={"agent_id": agent.id, "department_ids": released},
            )

    def _set_agent_department(self, agent: Agent, department_id: int | None) -> None:
        """Point ``agent`` at ``department_id``, dropping any headship it leaves."""
        if agent.department_id == department_id:
            return
        self._release_headship(agent, keep_department_id=department_id)
        agent.department_id = department_id
        self.session.flush()

    # -- agents -----------------------------------------------------------------

    def create_agent(
        self,
        last_name: str,
        first_name: str,
        email: str,
        password: str,
        role: AgentRole,
        department_id: int | None = None,
    ) -> AgentInfo:
        """
        Create a new agent.

        Args:
            last_name: Required, at most 100 characters.
            first_name: Required.
            email: Required, unique, must contain '@' and '.'.
            password: Required, at least 4 characters.
            role: AgentRole (or its name/value).
            department_id: Optional department to join.

        Returns:
            Created AgentInfo DTO.

        Raises:
            InvalidInputError: A field failed validation.
            DuplicateEmailError: Another agent already uses the email.
            DepartmentNotFoundError: department_id does not exist.
        """
        validate_agent_input(last_name, first_name, email, password)
        role = parse_role(role)
        self._ensure_email_available(email)
        department = self._resolve_department(department_id)

        agent = Agent(
            last_name=last_name,
            first_name=first_name,
            email=email,
            password=password,
            role=role.value,
            department_id=department.id if department is not None else None,
        )
        self.session.add(agent)
        self.session.flush()

        logger.info(
            "agent_created",
            extra={
                "agent_id": agent.id,
                "role": role.value,
                "department_id": agent.department_id,
            },
        )
        return AgentInfo.from_model(agent)

    def update_agent(
        self,
        agent_id: int,
        last_name: str,
        first_name: str,
        email: str,
        password: str,
        role: AgentRole,
        department_id: int | None = None,
    ) -> AgentInfo:
        """
        Replace an agent's fields.

        ``department_id=None`` clears the affiliation.  If the agent headed a
        department it is leaving, that department loses its responsible
        pointer first.

        Raises:
            AgentNotFoundError: agent_id does not exist.
            InvalidInputError: A field failed validation.
            DuplicateEmailError: A different agent already uses the email.
            DepartmentNotFoundError: department_id does not exist.
        """
        agent = self._get_agent(agent_id)

        validate_agent_input(last_name, first_name, email, password)
        role = parse_role(role)
        self._ensure_email_available(email, current_id=agent.id)
        department = self._resolve_department(department_id)

        agent.last_name = last_name
        agent.first_name = first_name
        agent.email = email
        agent.password = password
        agent.role = role.value
        self._set_agent_department(
            agent, department.id if department is not None else None
        )
        self.session.flush()

        logger.info(
            "agent_updated",
            extra={
                "agent_id": agent.id,
                "role": role.value,
                "department_id": agent.department_id,
            },
        )
        return AgentInfo.from_model(agent)

    def delete_agent(self, agent_id: int) -> None:
        """
        Delete an agent.

        Agents that still own payments are kept (restrict).  Departments the
        agent heads lose their responsible pointer (nullify) before the
        agent row is removed.

        Raises:
            AgentNotFoundError: agent_id does not exist.
            AgentHasPaymentsError: The agent still owns payments.
        """
        agent = self._get_agent(agent_id)

        payment_count = PaymentSelector(self.session).count_by_agent(agent.id)
        if payment_count:
            logger.warning(
                "agent_delete_blocked",
                extra={"agent_id": agent.id, "payment_count": payment_count},
            )
            raise AgentHasPaymentsError(agent.id, payment_count)

        self._release_headship(agent)
        self.session.delete(agent)
        self.session.flush()

        logger.info("agent_deleted", extra={"agent_id": agent_id})

    def get_agent(self, agent_id: int) -> AgentInfo:
        """
        Raises:
            AgentNotFoundError: agent_id does not exist.
        """
        return AgentInfo.from_model(self._get_agent(agent_id))

    def list_agents(self) -> list[AgentInfo]:
        return AgentSelector(self.session).list_all()

    def list_agents_by_role(self, role: AgentRole) -> list[AgentInfo]:
        return AgentSelector(self.session).list_by_role(parse_role(role))

    def get_payments_for_agent(self, agent_id: int) -> list[PaymentInfo]:
        """
        Raises:
            AgentNotFoundError: agent_id does not exist.
        """
        self._get_agent(agent_id)
        return PaymentSelector(self.session).list_by_agent(agent_id)

    def total_payments_for_agent(self, agent_id: int) -> Decimal:
        return sum(
            (p.amount for p in self.get_payments_for_agent(agent_id)),
            Decimal("0"),
        )

    # -- departments -----------------------------------------------------------

    def create_department(
        self,
        name: str,
        responsible_id: int | None = None,
    ) -> DepartmentInfo:
        """
        Create a new department, optionally headed by an existing agent.

        When a responsible agent is given it joins the new department before
        the department points at it.

        Raises:
            InvalidInputError: name failed validation.
            DuplicateNameError: Another department already uses the name.
            AgentNotFoundError: responsible_id does not exist.
        """
        validate_department_name(name)
        self._ensure_name_available(name)
        responsible = self._get_agent(responsible_id) if responsible_id is not None else None

        department = Department(name=name)
        self.session.add(department)
        self.session.flush()

        if responsible is not None:
            self._set_agent_department(responsible, department.id)
            department.responsible_id = responsible.id
            self.session.flush()

        logger.info(
            "department_created",
            extra={
                "department_id": department.id,
                "responsible_id": department.responsible_id,
            },
        )
        return DepartmentInfo.from_model(department)

    def update_department(
        self,
        department_id: int,
        name: str,
        responsible_id: int | None = None,
    ) -> DepartmentInfo:
        """
        Rename a department and set (or clear) its responsible agent.

        If the new responsible agent belongs elsewhere, its department
        reference is moved here first; only then is the department's own
        responsible pointer set.  ``responsible_id=None`` clears the pointer
        and leaves memberships untouched.

        Raises:
            DepartmentNotFoundError: department_id does not exist.
            InvalidInputError: name failed validation.
            DuplicateNameError: A different department already uses the name.
            AgentNotFoundError: responsible_id does not exist.
        """
        department = self._get_department(department_id)

        validate_department_name(name)
        self._ensure_name_available(name, current_id=department.id)
        responsible = self._get_agent(responsible_id) if responsible_id is not None else None

        department.name = name
        if responsible is not None:
            self._set_agent_department(responsible, department.id)
            department.responsible_id = responsible.id
        else:
            department.responsible_id = None
        self.session.flush()

        logger.info(
            "department_updated",
            extra={
                "department_id": department.id,
                "responsible_id": department.responsible_id,
            },
        )
        return DepartmentInfo.from_model(department)

    def delete_department(self, department_id: int) -> None:
        """
        Delete a department after detaching every member agent.

        Member agents are never deleted; their department reference is
        cleared and flushed before the department row is removed.

        Raises:
            DepartmentNotFoundError: department_id does not exist.
        """
        department = self._get_department(department_id)

        members = self._members(department.id)
        for agent in members:
            agent.department_id = None
        self.session.flush()

        self.session.delete(department)
        self.session.flush()

        logger.info(
            "department_deleted",
            extra={
                "department_id": department_id,
                "detached_agent_count": len(members),
            },
        )

    def get_department(self, department_id: int) -> DepartmentInfo:
        """
        Raises:
            DepartmentNotFoundError: department_id does not exist.
        """
        return DepartmentInfo.from_model(self._get_department(department_id))

    def list_departments(self) -> list[DepartmentInfo]:
        return DepartmentSelector(self.session).list_all()

    # -- relationship -----------------------------------------------------------

    def assign_responsible(self, department_id: int, agent_id: int) -> DepartmentInfo:
        """
        Make ``agent_id`` the head of ``department_id``.

        Postconditions:
            department.responsible_id == agent_id and
            agent.department_id == department_id.

        Raises:
            DepartmentNotFoundError: department_id does not exist.
            AgentNotFoundError: agent_id does not exist.
        """
        department = self._get_department(department_id)
        agent = self._get_agent(agent_id)

        self._set_agent_department(agent, department.id)
        department.responsible_id = agent.id
        self.session.flush()

        logger.info(
            "department_responsible_assigned",
            extra={"department_id": department.id, "agent_id": agent.id},
        )
        return DepartmentInfo.from_model(department)

    def add_agent_to_department(self, department_id: int, agent_id: int) -> AgentInfo:
        """
        Affiliate an agent with a department.

        An agent moved out of a department it headed leaves that department
        without a responsible agent.

        Raises:
            DepartmentNotFoundError: department_id does not exist.
            AgentNotFoundError: agent_id does not exist.
        """
        department = self._get_department(department_id)
        agent = self._get_agent(agent_id)

        self._set_agent_department(agent, department.id)

        logger.info(
            "agent_added_to_department",
            extra={"department_id": department.id, "agent_id": agent.id},
        )
        return AgentInfo.from_model(agent)

    def remove_agent_from_department(self, department_id: int, agent_id: int) -> AgentInfo:
        """
        Clear an agent's affiliation with a department.

        The agent is never deleted.  Removing an agent that is not a member
        of the department is a no-op, so repeated calls succeed.

        Raises:
            DepartmentNotFoundError: department_id does not exist.
            AgentNotFoundError: agent_id does not exist.
        """
        department = self._get_department(department_id)
        agent = self._get_agent(agent_id)

        if agent.department_id == department.id:
            self._set_agent_department(agent, None)
            logger.info(
                "agent_removed_from_department",
                extra={"department_id": department.id, "agent_id": agent.id},
            )
        return AgentInfo.from_model(agent)

    def get_agents(self, department_id: int) -> list[AgentInfo]:
        """
        Current members of a department, in scan order.

        Raises:
            DepartmentNotFoundError: department_id does not exist.
        """
        self._get_department(department_id)
        return AgentSelector(self.session).list_by_department(department_id)

    def get_payments_for_department(self, department_id: int) -> list[PaymentInfo]:
        """
        Payments of every current member, member by member.

        Raises:
            DepartmentNotFoundError: department_id does not exist.
        """
        payments = PaymentSelector(self.session)
        result: list[PaymentInfo] = []
        for agent in self.get_agents(department_id):
            result.extend(payments.list_by_agent(agent.id))
        return result
