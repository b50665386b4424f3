import pytest
from pydantic import ValidationError

from asset_expiry.core.config import Settings


def test_invariant_policy_follows_environment():
    assert Settings(environment="development").invariant_policy == "abort"
    assert Settings(environment="test").invariant_policy == "abort"
    assert Settings(environment="production").invariant_policy == "skip"


def test_explicit_invariant_policy_wins():
    settings = Settings(environment="production", expiration={"invariant_policy": "abort"})
    assert settings.invariant_policy == "abort"


def test_nested_environment_variables(monkeypatch):
    monkeypatch.setenv("EXPIRATION__HANDLER_FAILURE_POLICY", "fail_run")
    monkeypatch.setenv("EXPIRATION__INTERVAL_SECONDS", "30")
    monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./other.db")

    settings = Settings()

    assert settings.handler_failure_policy == "fail_run"
    assert settings.check_interval_seconds == 30
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"


def test_rejects_unknown_policy():
    with pytest.raises(ValidationError):
        Settings(expiration={"invariant_policy": "ignore"})
