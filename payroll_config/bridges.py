"""
Config -> Kernel Bridges.

Functions that convert a PayrollConfig into kernel inputs.  They live here
because the kernel must NEVER import payroll_config.

Usage:
    from payroll_config import get_active_config
    from payroll_config.bridges import build_eligibility_policy, init_engine_from_config

    config = get_active_config()
    init_engine_from_config(config)
    with session_scope() as session:
        ledger = PaymentLedgerService(
            session,
            policy=build_eligibility_policy(config),
            amount_ceiling=config.payment_policy.amount_ceiling,
        )
"""

from __future__ import annotations

from sqlalchemy.engine import Engine

from payroll_config.schema import PayrollConfig
from payroll_kernel.db.engine import init_engine_from_url
from payroll_kernel.domain.eligibility import EligibilityPolicy
from payroll_kernel.domain.values import AgentRole, PaymentType
from payroll_kernel.logging_config import configure_logging


def build_eligibility_policy(config: PayrollConfig) -> EligibilityPolicy:
    """Build the kernel EligibilityPolicy from the payment policy block."""
    policy = config.payment_policy
    return EligibilityPolicy(
        supervisory_roles=frozenset(AgentRole[name] for name in policy.supervisory_roles),
        discretionary_types=frozenset(
            PaymentType[name] for name in policy.discretionary_types
        ),
    )


def configure_logging_from_config(config: PayrollConfig) -> None:
    configure_logging(level=config.logging.level)


def init_engine_from_config(config: PayrollConfig) -> Engine:
    """Initialize the kernel engine from the database block."""
    configure_logging_from_config(config)
    db = config.database
    return init_engine_from_url(
        db.url,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
    )
