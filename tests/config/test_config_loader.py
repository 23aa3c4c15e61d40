"""
Tests for payroll configuration loading and the config -> kernel bridges.

Covers:
- Parsing the shipped default.yaml
- Validation of roles, payment types, levels and the amount ceiling
- PAYROLL_DATABASE_URL override and the PAYROLL_CONFIG_TRACE log entry
- Building the eligibility policy and engine arguments from config
"""

from decimal import Decimal
from pathlib import Path

import pytest
import yaml

from payroll_config import DATABASE_URL_ENV, get_active_config
from payroll_config import bridges
from payroll_config.loader import compute_checksum, parse_config, parse_payment_policy
from payroll_kernel.domain.eligibility import DEFAULT_POLICY
from payroll_kernel.domain.values import AgentRole, PaymentType

MINIMAL = {
    "config_id": "test",
    "database": {"url": "sqlite+pysqlite:///:memory:"},
    "payment_policy": {
        "amount_ceiling": "5000",
        "supervisory_roles": ["director"],
        "discretionary_types": ["BONUS"],
    },
}


def _write(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "payroll.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestLoader:
    def test_default_config(self):
        config = get_active_config(env={})

        assert config.config_id == "payroll-default"
        assert config.database.url == "sqlite+pysqlite:///payroll.db"
        assert config.logging.level == "INFO"
        assert config.payment_policy.amount_ceiling == Decimal("9999999")
        assert config.payment_policy.supervisory_roles == ("DEPARTMENT_HEAD", "DIRECTOR")
        assert config.payment_policy.discretionary_types == ("BONUS", "INDEMNITY")
        assert len(config.checksum) == 64

    def test_minimal_document_defaults(self, tmp_path):
        config = get_active_config(_write(tmp_path, MINIMAL), env={})

        assert config.version == 1
        assert config.database.pool_size == 5
        assert config.database.echo is False
        assert config.logging.level == "INFO"
        assert config.payment_policy.supervisory_roles == ("DIRECTOR",)

    def test_env_overrides_database_url(self, tmp_path):
        path = _write(tmp_path, MINIMAL)
        config = get_active_config(path, env={DATABASE_URL_ENV: "sqlite+pysqlite:///other.db"})
        assert config.database.url == "sqlite+pysqlite:///other.db"
        assert config.database.pool_size == 5

    def test_config_trace_logged(self, tmp_path, captured_logs):
        get_active_config(_write(tmp_path, MINIMAL), env={})

        traces = [r for r in captured_logs() if r["message"] == "PAYROLL_CONFIG_TRACE"]
        assert len(traces) == 1
        assert traces[0]["config_id"] == "test"
        assert traces[0]["database_url_overridden"] is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "absent.yaml", env={})

    def test_missing_required_key(self):
        data = {k: v for k, v in MINIMAL.items() if k != "database"}
        with pytest.raises(KeyError):
            parse_config(data)

    def test_unknown_role(self):
        with pytest.raises(ValueError, match="role"):
            parse_payment_policy({**MINIMAL["payment_policy"], "supervisory_roles": ["INTERN"]})

    def test_unknown_payment_type(self):
        with pytest.raises(ValueError, match="payment type"):
            parse_payment_policy({**MINIMAL["payment_policy"], "discretionary_types": ["TIP"]})

    @pytest.mark.parametrize("ceiling", ["0", "-10", "lots"])
    def test_bad_ceiling(self, ceiling):
        with pytest.raises(ValueError):
            parse_payment_policy({**MINIMAL["payment_policy"], "amount_ceiling": ceiling})

    def test_bad_log_level(self):
        with pytest.raises(ValueError):
            parse_config({**MINIMAL, "logging": {"level": "CHATTY"}})

    def test_checksum_is_stable(self):
        assert compute_checksum(MINIMAL) == compute_checksum(dict(reversed(list(MINIMAL.items()))))
        assert compute_checksum(MINIMAL) != compute_checksum({**MINIMAL, "version": 2})


class TestBridges:
    def test_default_policy_matches_kernel_default(self):
        policy = bridges.build_eligibility_policy(get_active_config(env={}))
        assert policy == DEFAULT_POLICY

    def test_custom_policy(self, tmp_path):
        config = get_active_config(_write(tmp_path, MINIMAL), env={})
        policy = bridges.build_eligibility_policy(config)

        assert policy.supervisory_roles == frozenset({AgentRole.DIRECTOR})
        assert policy.discretionary_types == frozenset({PaymentType.BONUS})
        assert policy.is_eligible(AgentRole.DEPARTMENT_HEAD, PaymentType.INDEMNITY, False)

    def test_init_engine_from_config(self, tmp_path, monkeypatch):
        calls = []
        levels = []
        monkeypatch.setattr(
            bridges, "init_engine_from_url", lambda url, **kwargs: calls.append((url, kwargs))
        )
        monkeypatch.setattr(bridges, "configure_logging", lambda level: levels.append(level))

        config = get_active_config(
            _write(tmp_path, {**MINIMAL, "logging": {"level": "warning"}}), env={}
        )
        bridges.init_engine_from_config(config)

        assert calls == [
            (
                "sqlite+pysqlite:///:memory:",
                {"echo": False, "pool_size": 5, "max_overflow": 10},
            )
        ]
        assert levels == ["WARNING"]
