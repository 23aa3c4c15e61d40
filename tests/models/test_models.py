"""
Tests for the Agent, Department and Payment ORM models.

Covers:
- Column defaults and timestamps
- Unique constraints on agent email and department name
- Foreign keys from agents, departments and payments
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from payroll_kernel.domain.values import AgentRole, PaymentType
from payroll_kernel.models import Agent, Department, Payment


def _agent(email: str = "model@corp.io", **overrides) -> Agent:
    fields = dict(
        last_name="Bernard",
        first_name="Luc",
        email=email,
        password="pass",
    )
    fields.update(overrides)
    return Agent(**fields)


class TestAgentModel:
    def test_create_agent_defaults(self, session):
        agent = _agent()
        session.add(agent)
        session.flush()

        assert agent.id is not None
        assert agent.role == AgentRole.WORKER.value
        assert agent.department_id is None
        assert agent.created_at is not None

    def test_duplicate_email_rejected(self, session):
        session.add(_agent("dup@corp.io"))
        session.flush()

        session.add(_agent("dup@corp.io", last_name="Other"))
        with pytest.raises(IntegrityError):
            session.flush()
        session.rollback()

    def test_unknown_department_rejected(self, session):
        session.add(_agent(department_id=999_999))
        with pytest.raises(IntegrityError):
            session.flush()
        session.rollback()

    def test_repr(self, session):
        agent = _agent(role=AgentRole.DIRECTOR.value)
        session.add(agent)
        session.flush()
        assert "Luc Bernard" in repr(agent)


class TestDepartmentModel:
    def test_create_department(self, session):
        department = Department(name="Logistics")
        session.add(department)
        session.flush()

        assert department.id is not None
        assert department.responsible_id is None

    def test_duplicate_name_rejected(self, session):
        session.add(Department(name="Audit"))
        session.flush()

        session.add(Department(name="Audit"))
        with pytest.raises(IntegrityError):
            session.flush()
        session.rollback()

    def test_responsible_references_agent(self, session):
        department = Department(name="Sales")
        session.add(department)
        session.flush()
        agent = _agent(department_id=department.id, role=AgentRole.DEPARTMENT_HEAD.value)
        session.add(agent)
        session.flush()

        department.responsible_id = agent.id
        session.flush()
        assert department.responsible_id == agent.id


class TestPaymentModel:
    def test_create_payment(self, session):
        agent = _agent()
        session.add(agent)
        session.flush()

        payment = Payment(
            payment_type=PaymentType.SALARY.value,
            amount=Decimal("2100.50"),
            reason="March",
            payment_date=date(2024, 3, 31),
            agent_id=agent.id,
        )
        session.add(payment)
        session.flush()
        session.expire(payment)

        assert payment.amount == Decimal("2100.50")
        assert payment.payment_date == date(2024, 3, 31)
        assert payment.condition_validated is False

    def test_payment_requires_existing_agent(self, session):
        session.add(
            Payment(
                payment_type=PaymentType.SALARY.value,
                amount=Decimal("1"),
                payment_date=date(2024, 1, 1),
                agent_id=999_999,
            )
        )
        with pytest.raises(IntegrityError):
            session.flush()
        session.rollback()
