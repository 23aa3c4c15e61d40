"""
Tests for field-level validation (payroll_kernel/domain/validation.py).

Pure functions, no database.
"""

from decimal import Decimal

import pytest

from payroll_kernel.domain.validation import (
    parse_payment_type,
    parse_role,
    to_decimal,
    validate_agent_input,
    validate_amount,
    validate_department_name,
)
from payroll_kernel.domain.values import MAX_PAYMENT_AMOUNT, AgentRole, PaymentType
from payroll_kernel.exceptions import (
    AmountTooLargeError,
    InvalidInputError,
    NegativeOrZeroAmountError,
    PaymentPolicyError,
    ValidationError,
)

VALID = dict(last_name="Martin", first_name="Alice", email="alice@corp.io", password="abcd")


class TestAgentInput:
    def test_valid_input_passes(self):
        validate_agent_input(**VALID)

    @pytest.mark.parametrize("field", ["last_name", "first_name", "email", "password"])
    def test_missing_field_rejected(self, field):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(**{**VALID, field: None})
        assert exc_info.value.field == field

    @pytest.mark.parametrize("field", ["last_name", "first_name", "email", "password"])
    def test_blank_field_rejected(self, field):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(**{**VALID, field: "   "})
        assert exc_info.value.field == field

    def test_last_name_length_limit(self):
        validate_agent_input(**{**VALID, "last_name": "x" * 100})
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(**{**VALID, "last_name": "x" * 101})
        assert exc_info.value.field == "last_name"

    def test_first_name_has_no_length_limit(self):
        validate_agent_input(**{**VALID, "first_name": "y" * 200})

    def test_email_length_limit(self):
        local = "a" * 247
        validate_agent_input(**{**VALID, "email": f"{local}@corp.io"})  # 255 chars
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(**{**VALID, "email": f"{local}a@corp.io"})
        assert exc_info.value.field == "email"

    @pytest.mark.parametrize("email", ["alice.corp.io", "alice@corpio", "alice"])
    def test_email_format(self, email):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(**{**VALID, "email": email})
        assert exc_info.value.field == "email"

    def test_password_minimum_length(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(**{**VALID, "password": "abc"})
        assert exc_info.value.field == "password"

    @pytest.mark.parametrize("field", ["last_name", "first_name", "email", "password"])
    def test_non_string_field_rejected(self, field):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(**{**VALID, field: 123})
        assert exc_info.value.field == field
        assert "string" in str(exc_info.value)

    def test_first_failure_wins(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_agent_input(None, None, "bad", "1")
        assert exc_info.value.field == "last_name"

    def test_invalid_input_is_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_agent_input(**{**VALID, "password": "x"})
        assert exc_info.value.code == "INVALID_INPUT"


class TestDepartmentName:
    def test_valid(self):
        validate_department_name("Research")

    @pytest.mark.parametrize("name", [None, "", "  ", "z" * 101])
    def test_invalid(self, name):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_department_name(name)
        assert exc_info.value.field == "name"


class TestAmount:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (Decimal("10.50"), Decimal("10.50")),
            (100, Decimal("100")),
            ("2500.75", Decimal("2500.75")),
            (0.1, Decimal("0.1")),
        ],
    )
    def test_accepted(self, raw, expected):
        assert validate_amount(raw) == expected

    def test_ceiling_is_inclusive(self):
        assert validate_amount(MAX_PAYMENT_AMOUNT) == Decimal("9999999")

    def test_above_ceiling(self):
        with pytest.raises(AmountTooLargeError) as exc_info:
            validate_amount(Decimal("10000000"))
        assert exc_info.value.ceiling == MAX_PAYMENT_AMOUNT
        assert exc_info.value.code == "AMOUNT_TOO_LARGE"

    def test_custom_ceiling(self):
        with pytest.raises(AmountTooLargeError):
            validate_amount(Decimal("501"), ceiling=Decimal("500"))

    def test_zero_rejected(self):
        with pytest.raises(NegativeOrZeroAmountError) as exc_info:
            validate_amount(0)
        assert "zero" in str(exc_info.value)

    def test_negative_rejected(self):
        with pytest.raises(NegativeOrZeroAmountError) as exc_info:
            validate_amount("-1")
        assert exc_info.value.amount == Decimal("-1")
        assert isinstance(exc_info.value, PaymentPolicyError)

    @pytest.mark.parametrize("raw", ["abc", None, True, "NaN", "Infinity"])
    def test_non_numeric_rejected(self, raw):
        with pytest.raises(InvalidInputError):
            validate_amount(raw)

    @pytest.mark.parametrize("raw", [Decimal("0.004"), "10.005", 0.125, "-0.001"])
    def test_sub_cent_precision_rejected(self, raw):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_amount(raw)
        assert exc_info.value.field == "amount"

    @pytest.mark.parametrize("raw", [Decimal("10.500"), Decimal("1E+2"), "0.01"])
    def test_trailing_zeros_are_not_extra_places(self, raw):
        assert validate_amount(raw) == Decimal(str(raw))

    def test_to_decimal_passes_decimal_through(self):
        value = Decimal("3.14")
        assert to_decimal(value) is value


class TestEnumParsing:
    def test_role_member_passthrough(self):
        assert parse_role(AgentRole.DIRECTOR) is AgentRole.DIRECTOR

    @pytest.mark.parametrize("raw", ["department_head", "DEPARTMENT_HEAD", " Department_Head "])
    def test_role_from_string(self, raw):
        assert parse_role(raw) is AgentRole.DEPARTMENT_HEAD

    def test_unknown_role(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_role("intern")
        assert exc_info.value.field == "role"

    def test_payment_type_from_string(self):
        assert parse_payment_type("BONUS") is PaymentType.BONUS

    @pytest.mark.parametrize("raw", ["tip", 3, None])
    def test_unknown_payment_type(self, raw):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_payment_type(raw)
        assert exc_info.value.field == "payment_type"
