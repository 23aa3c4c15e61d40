"""
Values -- enumerations and constants shared by every layer.

Responsibility:
    Defines the closed vocabularies of the directory (agent roles, payment
    types) and the default payment amount ceiling.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  Models, services, selectors and
    payroll_config all import from here; this module imports nothing from
    the kernel.
"""

from decimal import Decimal
from enum import Enum

# Largest admissible payment amount (inclusive).
MAX_PAYMENT_AMOUNT = Decimal("9999999")


class AgentRole(str, Enum):
    """Role of an agent in the organization.

    Contract: Every agent has exactly one role.  The role decides which
    discretionary payments the agent may receive.
    """

    WORKER = "worker"
    DEPARTMENT_HEAD = "department_head"
    DIRECTOR = "director"


class PaymentType(str, Enum):
    """Kind of disbursement.

    SALARY is contractual.  BONUS and INDEMNITY are discretionary awards
    restricted by the eligibility policy.
    """

    SALARY = "salary"
    BONUS = "bonus"
    INDEMNITY = "indemnity"
