"""
Eligibility -- payment admissibility policy.

Responsibility:
    Decides whether a payment of a given type may be recorded for an agent
    of a given role, given the payment's explicit approval flag.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  The payment ledger
    service calls ``EligibilityPolicy.check`` on both create and update so an
    update can never turn an inadmissible payment into a recorded one.

Invariants enforced:
    - Discretionary types (BONUS, INDEMNITY by default) require a supervisory
      role AND condition_validated=True.
    - Every other type is always admissible.

Failure modes:
    - IneligiblePaymentError from ``check`` naming the failed part.
"""

from __future__ import annotations

from dataclasses import dataclass

from payroll_kernel.domain.values import AgentRole, PaymentType
from payroll_kernel.exceptions import IneligiblePaymentError

DEFAULT_SUPERVISORY_ROLES = frozenset(
    {AgentRole.DEPARTMENT_HEAD, AgentRole.DIRECTOR}
)
DEFAULT_DISCRETIONARY_TYPES = frozenset(
    {PaymentType.BONUS, PaymentType.INDEMNITY}
)


@dataclass(frozen=True)
class EligibilityPolicy:
    """
    Immutable payment admissibility rules.

    Contract:
        ``is_eligible`` and ``check`` are pure functions of their arguments
        and the two sets held by the policy.
    """

    supervisory_roles: frozenset[AgentRole] = DEFAULT_SUPERVISORY_ROLES
    discretionary_types: frozenset[PaymentType] = DEFAULT_DISCRETIONARY_TYPES

    def is_discretionary(self, payment_type: PaymentType) -> bool:
        return PaymentType(payment_type) in self.discretionary_types

    def role_qualifies(self, role: AgentRole) -> bool:
        return AgentRole(role) in self.supervisory_roles

    def is_eligible(
        self,
        role: AgentRole,
        payment_type: PaymentType,
        condition_validated: bool,
    ) -> bool:
        """Return True when the payment may be recorded."""
        if not self.is_discretionary(payment_type):
            return True
        return self.role_qualifies(role) and condition_validated

    def check(
        self,
        role: AgentRole,
        payment_type: PaymentType,
        condition_validated: bool,
    ) -> None:
        """
        Raise when the payment is not admissible.

        The role is checked before the condition, so a worker is told about
        the role even when the condition flag is also missing.

        Raises:
            IneligiblePaymentError: reason is "role not eligible" or
                "condition not validated".
        """
        if not self.is_discretionary(payment_type):
            return
        role = AgentRole(role)
        payment_type = PaymentType(payment_type)
        if not self.role_qualifies(role):
            raise IneligiblePaymentError(
                payment_type.value,
                role.value,
                "role not eligible",
            )
        if not condition_validated:
            raise IneligiblePaymentError(
                payment_type.value,
                role.value,
                "condition not validated",
            )


DEFAULT_POLICY = EligibilityPolicy()
