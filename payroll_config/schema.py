"""
PayrollConfig schema.

Frozen dataclasses produced by the loader from YAML.  Role and payment type
names are kept as the upper-case enum names written in the YAML; bridges
translate them into kernel enums.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection settings for the record store."""

    url: str
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10


@dataclass(frozen=True)
class LoggingSettings:
    """Level for the payroll_kernel logger hierarchy."""

    level: str = "INFO"


@dataclass(frozen=True)
class PaymentPolicySettings:
    """Amount ceiling and eligibility rules for payments."""

    amount_ceiling: Decimal
    supervisory_roles: tuple[str, ...]
    discretionary_types: tuple[str, ...]


@dataclass(frozen=True)
class PayrollConfig:
    """The sole runtime configuration artifact."""

    config_id: str
    version: int
    database: DatabaseSettings
    logging: LoggingSettings
    payment_policy: PaymentPolicySettings
    checksum: str
