"""
Field-level validation rules for directory and payment input.

Pure checks with no I/O.  Each failed check raises a typed exception naming
the offending field; the first failing check wins.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from payroll_kernel.domain.values import MAX_PAYMENT_AMOUNT, AgentRole, PaymentType
from payroll_kernel.exceptions import (
    AmountTooLargeError,
    InvalidInputError,
    NegativeOrZeroAmountError,
)

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 4
AMOUNT_MAX_PLACES = 2


def require_text(value: str | None, field: str) -> str:
    """Reject None, non-strings, empty and whitespace-only strings."""
    if value is None:
        raise InvalidInputError(field, "is required")
    if not isinstance(value, str):
        raise InvalidInputError(field, "must be a string")
    if not value.strip():
        raise InvalidInputError(field, "must not be blank")
    return value


def require_max_length(value: str, field: str, max_length: int) -> None:
    if len(value) > max_length:
        raise InvalidInputError(
            field, f"must be at most {max_length} characters"
        )


def validate_agent_input(
    last_name: str | None,
    first_name: str | None,
    email: str | None,
    password: str | None,
) -> None:
    """
    Validate the editable fields of an agent.

    Raises:
        InvalidInputError: on the first field that fails, checked in the
            order last_name, first_name, email, password.
    """
    require_text(last_name, "last_name")
    require_max_length(last_name, "last_name", NAME_MAX_LENGTH)

    require_text(first_name, "first_name")

    require_text(email, "email")
    require_max_length(email, "email", EMAIL_MAX_LENGTH)
    if "@" not in email or "." not in email:
        raise InvalidInputError("email", "must contain '@' and '.'")

    require_text(password, "password")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise InvalidInputError(
            "password", f"must be at least {PASSWORD_MIN_LENGTH} characters"
        )


def validate_department_name(name: str | None) -> None:
    """Department names are required, non-blank, at most 100 characters."""
    require_text(name, "name")
    require_max_length(name, "name", NAME_MAX_LENGTH)


def to_decimal(value: Any, field: str = "amount") -> Decimal:
    """Coerce int/str/float input to Decimal (floats go through str())."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(field, "must be a number")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise InvalidInputError(field, f"not a number: {value!r}") from None


def validate_amount(
    amount: Any,
    ceiling: Decimal = MAX_PAYMENT_AMOUNT,
) -> Decimal:
    """
    Check that a payment amount is strictly positive and within the ceiling.

    Returns:
        The amount as a Decimal.

    Raises:
        NegativeOrZeroAmountError: amount <= 0.
        AmountTooLargeError: amount > ceiling.
        InvalidInputError: not a finite number, or more than two decimal
            places (the store keeps cents only).
    """
    value = to_decimal(amount)
    if not value.is_finite():
        raise InvalidInputError("amount", "must be finite")
    if -value.normalize().as_tuple().exponent > AMOUNT_MAX_PLACES:
        raise InvalidInputError(
            "amount", f"at most {AMOUNT_MAX_PLACES} decimal places"
        )
    if value <= 0:
        raise NegativeOrZeroAmountError(value)
    if value > ceiling:
        raise AmountTooLargeError(value, ceiling)
    return value


def parse_role(value: Any) -> AgentRole:
    """Coerce a role name or value to AgentRole."""
    return _parse_enum(AgentRole, value, "role")


def parse_payment_type(value: Any) -> PaymentType:
    """Coerce a payment type name or value to PaymentType."""
    return _parse_enum(PaymentType, value, "payment_type")


def _parse_enum(enum_cls, value: Any, field: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(member.name for member in enum_cls)
    raise InvalidInputError(field, f"must be one of {allowed}, got {value!r}")
