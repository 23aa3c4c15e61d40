"""
payroll_config -- single public entrypoint for payroll configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration files
    or environment variables directly.

Architecture position:
    Configuration sits above ``payroll_kernel``.  The kernel MUST NEVER
    import from ``payroll_config``; ``payroll_config.bridges`` translates
    the loaded config into kernel inputs.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``KeyError`` / ``ValueError`` -- missing keys or invalid values.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``PAYROLL_CONFIG_TRACE`` log entry with the config id, version and
    checksum of the document that was loaded.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

from payroll_config.loader import load_yaml_file, parse_config
from payroll_config.schema import PayrollConfig

_logger = logging.getLogger("payroll_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"

# Environment variable that overrides database.url.
DATABASE_URL_ENV = "PAYROLL_DATABASE_URL"


def get_active_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> PayrollConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML file to load.  Defaults to
            payroll_config/sets/default.yaml.
        env: Environment mapping; defaults to ``os.environ``.

    Returns:
        PayrollConfig, with database.url replaced by ``PAYROLL_DATABASE_URL``
        when that variable is set.
    """
    path = config_path or _DEFAULT_CONFIG_PATH
    environ = os.environ if env is None else env

    config = parse_config(load_yaml_file(path))

    override = environ.get(DATABASE_URL_ENV)
    if override:
        config = replace(config, database=replace(config.database, url=override))

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "database_url_overridden": bool(override),
        },
    )
    return config


__all__ = ["DATABASE_URL_ENV", "PayrollConfig", "get_active_config"]
