"""Pure domain layer: values, validation rules, eligibility policy, DTOs."""

from payroll_kernel.domain.auth_session import AuthSession, SessionState
from payroll_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from payroll_kernel.domain.dtos import AgentInfo, AgentTotal, DepartmentInfo, PaymentInfo
from payroll_kernel.domain.eligibility import DEFAULT_POLICY, EligibilityPolicy
from payroll_kernel.domain.values import MAX_PAYMENT_AMOUNT, AgentRole, PaymentType

__all__ = [
    "AgentInfo",
    "AgentRole",
    "AgentTotal",
    "AuthSession",
    "Clock",
    "DEFAULT_POLICY",
    "DepartmentInfo",
    "DeterministicClock",
    "EligibilityPolicy",
    "MAX_PAYMENT_AMOUNT",
    "PaymentInfo",
    "PaymentType",
    "SessionState",
    "SystemClock",
]
