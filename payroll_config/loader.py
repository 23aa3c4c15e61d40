"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen dataclasses of
``payroll_config.schema``.  The single public entry point for runtime config
is ``payroll_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Unknown role / payment type names, bad levels or amounts -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import (
    DatabaseSettings,
    LoggingSettings,
    PaymentPolicySettings,
    PayrollConfig,
)
from payroll_kernel.domain.values import AgentRole, PaymentType


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _parse_names(values: list[Any], allowed: type, label: str) -> tuple[str, ...]:
    names = []
    for value in values:
        name = str(value).upper()
        if name not in allowed.__members__:
            raise ValueError(
                f"Unknown {label} {value!r}; expected one of "
                f"{', '.join(allowed.__members__)}"
            )
        names.append(name)
    return tuple(names)


def parse_database(data: dict[str, Any]) -> DatabaseSettings:
    """Parse DatabaseSettings; ``url`` is required."""
    return DatabaseSettings(
        url=data["url"],
        echo=bool(data.get("echo", False)),
        pool_size=int(data.get("pool_size", 5)),
        max_overflow=int(data.get("max_overflow", 10)),
    )


def parse_logging(data: dict[str, Any]) -> LoggingSettings:
    level = str(data.get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level {level!r}")
    return LoggingSettings(level=level)


def parse_payment_policy(data: dict[str, Any]) -> PaymentPolicySettings:
    """Parse the payment policy block; all three keys are required."""
    try:
        ceiling = Decimal(str(data["amount_ceiling"]))
    except InvalidOperation:
        raise ValueError(
            f"amount_ceiling is not a number: {data['amount_ceiling']!r}"
        ) from None
    if ceiling <= 0:
        raise ValueError(f"amount_ceiling must be positive, got {ceiling}")
    return PaymentPolicySettings(
        amount_ceiling=ceiling,
        supervisory_roles=_parse_names(
            data["supervisory_roles"], AgentRole, "role"
        ),
        discretionary_types=_parse_names(
            data["discretionary_types"], PaymentType, "payment type"
        ),
    )


def parse_config(data: dict[str, Any]) -> PayrollConfig:
    """Parse a full configuration document."""
    return PayrollConfig(
        config_id=data["config_id"],
        version=int(data.get("version", 1)),
        database=parse_database(data["database"]),
        logging=parse_logging(data.get("logging") or {}),
        payment_policy=parse_payment_policy(data["payment_policy"]),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
