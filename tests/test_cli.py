import json

import pytest

from asset_expiry import cli
from asset_expiry.core.config import get_settings
from asset_expiry.core.container import build_container
from asset_expiry.modules.assets import UNEXPIRING, NamedQueryRegistry, default_registry


@pytest.fixture
def db_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_check_command(db_env, capsys):
    assert cli.main(["check"]) == 0
    assert json.loads(capsys.readouterr().out) == {"status": "ok", "command": "check"}


def test_validate_command(db_env, capsys):
    assert cli.main(["validate"]) == 0
    assert json.loads(capsys.readouterr().out)["status"] == "ok"


def test_configuration_error_exit_code(db_env, capsys, monkeypatch):
    registry = default_registry()
    broken = NamedQueryRegistry([registry.get(name) for name in registry.names() if name != UNEXPIRING])
    monkeypatch.setattr(cli, "build_container", lambda settings: build_container(settings, queries=broken))

    assert cli.main(["check"]) == 2
    out = json.loads(capsys.readouterr().out)
    assert out["status"] == "error"
    assert out["code"] == "configuration"
