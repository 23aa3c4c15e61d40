"""
Pytest fixtures for the payroll kernel test suite.

Provides:
- Database sessions isolated per test by transaction rollback
- Service, selector and clock fixtures
- Factories for agents, departments and payments
- Captured structured logs

Environment Variables:
- DATABASE_URL: SQLAlchemy connection URL.  Defaults to an in-memory SQLite
  database, so the suite runs without any server.
"""

import itertools
import json
import logging
import os
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from payroll_kernel.db.engine import (
    create_tables,
    drop_tables,
    init_engine_from_url,
    reset_engine,
)
from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.domain.values import AgentRole, PaymentType
from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from payroll_kernel.selectors.statistics_selector import StatisticsSelector
from payroll_kernel.services.directory_service import DirectoryService
from payroll_kernel.services.payment_service import PaymentLedgerService

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"

# Fixed "today" for every test that lets the ledger default a payment date.
TEST_NOW = datetime(2024, 6, 15, 9, 30, 0, tzinfo=timezone.utc)


def get_database_url() -> str:
    """Get database URL from environment, or use in-memory SQLite."""
    return os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, directory):
            directory.create_department("Finance")
            logs = captured_logs()
            assert any(r["message"] == "department_created" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Session-scoped DB infrastructure (create engine + tables ONCE per suite)
# =============================================================================


@pytest.fixture(scope="session")
def db_engine():
    """Single engine for the entire test session."""
    eng = init_engine_from_url(get_database_url(), echo=False)
    yield eng
    reset_engine()


@pytest.fixture(scope="session")
def db_tables(db_engine):
    """Create all tables once per session, drop once at end."""
    drop_tables()
    create_tables()
    yield
    drop_tables()


# =============================================================================
# Per-test session with automatic rollback
# =============================================================================


@pytest.fixture(scope="function")
def session(db_tables, db_engine) -> Generator[Session, None, None]:
    """Provide a database session for testing.

    Uses the SQLAlchemy 2.0 ``join_transaction_mode`` pattern:
    - Opens a dedicated connection with an outer transaction
    - Creates a session that *joins* the outer transaction
    - Any ``session.commit()`` inside the test releases a savepoint; it
      does NOT actually commit to the database
    - At teardown the outer transaction is rolled back, undoing ALL data
      changes made during the test
    """
    conn = db_engine.connect()
    trans = conn.begin()
    sess = Session(bind=conn, join_transaction_mode="create_savepoint", expire_on_commit=False)
    yield sess
    try:
        sess.close()
    finally:
        try:
            trans.rollback()
        finally:
            conn.close()


# =============================================================================
# Services, selectors, clock
# =============================================================================


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(TEST_NOW)


@pytest.fixture
def directory(session) -> DirectoryService:
    return DirectoryService(session)


@pytest.fixture
def ledger(session, clock) -> PaymentLedgerService:
    return PaymentLedgerService(session, clock=clock)


@pytest.fixture
def stats(session) -> StatisticsSelector:
    return StatisticsSelector(session)


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_agent(directory):
    """Create agents with unique emails; override any field by keyword."""
    counter = itertools.count(1)

    def _make(
        role: AgentRole = AgentRole.WORKER,
        department_id: int | None = None,
        last_name: str | None = None,
        first_name: str = "Test",
        email: str | None = None,
        password: str = "secret",
    ):
        n = next(counter)
        return directory.create_agent(
            last_name=last_name or f"Agent{n}",
            first_name=first_name,
            email=email or f"agent{n}@example.com",
            password=password,
            role=role,
            department_id=department_id,
        )

    return _make


@pytest.fixture
def make_department(directory):
    """Create departments with unique names."""
    counter = itertools.count(1)

    def _make(name: str | None = None, responsible_id: int | None = None):
        return directory.create_department(
            name or f"Department {next(counter)}",
            responsible_id=responsible_id,
        )

    return _make


@pytest.fixture
def make_payment(ledger):
    """Record payments; defaults to an approved SALARY of 1000.00."""

    def _make(
        agent_id: int,
        amount: Decimal | str = Decimal("1000.00"),
        payment_type: PaymentType = PaymentType.SALARY,
        payment_date: date | None = None,
        condition_validated: bool = True,
        reason: str = "test payment",
    ):
        return ledger.create_payment(
            agent_id=agent_id,
            payment_type=payment_type,
            amount=amount,
            reason=reason,
            condition_validated=condition_validated,
            payment_date=payment_date,
        )

    return _make
