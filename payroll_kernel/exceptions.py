"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Directory and payment rules fail in a handful of well-known ways. Callers
(menus, scripts, tests) must be able to tell them apart without parsing
message strings, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (the offending id, field or amount)

Example - WRONG way to handle errors:
    try:
        ledger.create_payment(...)
    except Exception as e:
        if "not eligible" in str(e):  # FRAGILE - message might change
            ...

Example - RIGHT way (what this module enables):
    try:
        ledger.create_payment(...)
    except IneligiblePaymentError as e:
        log.warning("rejected %s for role %s", e.payment_type, e.role)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from PayrollKernelError:

    PayrollKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidInputError
    |
    +-- ConflictError
    |   +-- DuplicateEmailError
    |   +-- DuplicateNameError
    |   +-- AgentHasPaymentsError
    |
    +-- NotFoundError
    |   +-- AgentNotFoundError
    |   +-- DepartmentNotFoundError
    |   +-- PaymentNotFoundError
    |
    +-- PaymentPolicyError
    |   +-- NegativeOrZeroAmountError
    |   +-- AmountTooLargeError
    |   +-- IneligiblePaymentError
    |
    +-- AuthenticationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Validation      | INVALID_INPUT               | Required/length/format check failed
----------------|-----------------------------|-----------------------------------------
Conflict        | DUPLICATE_EMAIL             | Email already used by another agent
                | DUPLICATE_NAME              | Department name already taken
                | AGENT_HAS_PAYMENTS          | Agent deletion blocked by payments
----------------|-----------------------------|-----------------------------------------
Not found       | AGENT_NOT_FOUND             | Agent ID doesn't exist
                | DEPARTMENT_NOT_FOUND        | Department ID doesn't exist
                | PAYMENT_NOT_FOUND           | Payment ID doesn't exist
----------------|-----------------------------|-----------------------------------------
Payment policy  | NEGATIVE_OR_ZERO_AMOUNT     | Amount <= 0
                | AMOUNT_TOO_LARGE            | Amount above the ceiling
                | INELIGIBLE_PAYMENT          | Role/condition forbid the payment type
----------------|-----------------------------|-----------------------------------------
Auth            | AUTHENTICATION_FAILED       | Unknown email or wrong password

None of these are retryable: they describe the request, not the store.
Database failures (sqlalchemy.exc.*) are NOT wrapped and propagate as-is.
"""

from decimal import Decimal


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Validation exceptions


class ValidationError(PayrollKernelError):
    """Base exception for field-level input errors."""

    code: str = "VALIDATION_ERROR"


class InvalidInputError(ValidationError):
    """A single input field failed a required/length/format check."""

    code: str = "INVALID_INPUT"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


# Conflict exceptions


class ConflictError(PayrollKernelError):
    """Base exception for uniqueness and referential conflicts."""

    code: str = "CONFLICT"


class DuplicateEmailError(ConflictError):
    """Email is already used by a different agent."""

    code: str = "DUPLICATE_EMAIL"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already in use: {email}")


class DuplicateNameError(ConflictError):
    """Department name is already used by a different department."""

    code: str = "DUPLICATE_NAME"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Department name already in use: {name}")


class AgentHasPaymentsError(ConflictError):
    """Agent cannot be deleted while payments still reference it."""

    code: str = "AGENT_HAS_PAYMENTS"

    def __init__(self, agent_id: int, payment_count: int):
        self.agent_id = agent_id
        self.payment_count = payment_count
        super().__init__(
            f"Agent {agent_id} cannot be deleted: "
            f"referenced by {payment_count} payment(s)"
        )


# Lookup exceptions


class NotFoundError(PayrollKernelError):
    """Base exception for referential lookups that found nothing."""

    code: str = "NOT_FOUND"


class AgentNotFoundError(NotFoundError):
    """Agent with given ID was not found."""

    code: str = "AGENT_NOT_FOUND"

    def __init__(self, agent_id: int):
        self.agent_id = agent_id
        super().__init__(f"Agent not found: {agent_id}")


class DepartmentNotFoundError(NotFoundError):
    """Department with given ID was not found."""

    code: str = "DEPARTMENT_NOT_FOUND"

    def __init__(self, department_id: int):
        self.department_id = department_id
        super().__init__(f"Department not found: {department_id}")


class PaymentNotFoundError(NotFoundError):
    """Payment with given ID was not found."""

    code: str = "PAYMENT_NOT_FOUND"

    def __init__(self, payment_id: int):
        self.payment_id = payment_id
        super().__init__(f"Payment not found: {payment_id}")


# Payment policy exceptions


class PaymentPolicyError(PayrollKernelError):
    """Base exception for payment admissibility failures."""

    code: str = "PAYMENT_POLICY_ERROR"


class NegativeOrZeroAmountError(PaymentPolicyError):
    """Payment amount must be strictly positive."""

    code: str = "NEGATIVE_OR_ZERO_AMOUNT"

    def __init__(self, amount: Decimal):
        self.amount = amount
        if amount == 0:
            message = "Payment amount must not be zero"
        else:
            message = f"Payment amount must not be negative: {amount}"
        super().__init__(message)


class AmountTooLargeError(PaymentPolicyError):
    """Payment amount exceeds the configured ceiling."""

    code: str = "AMOUNT_TOO_LARGE"

    def __init__(self, amount: Decimal, ceiling: Decimal):
        self.amount = amount
        self.ceiling = ceiling
        super().__init__(f"Payment amount {amount} exceeds ceiling {ceiling}")


class IneligiblePaymentError(PaymentPolicyError):
    """Payment type is not admissible for the agent's role or condition."""

    code: str = "INELIGIBLE_PAYMENT"

    def __init__(self, payment_type: str, role: str, reason: str):
        self.payment_type = payment_type
        self.role = role
        self.reason = reason
        super().__init__(
            f"Payment type {payment_type} not allowed for role {role}: {reason}"
        )


# Authentication exceptions


class AuthenticationError(PayrollKernelError):
    """Login failed. The message never says which credential was wrong."""

    code: str = "AUTHENTICATION_FAILED"

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)
