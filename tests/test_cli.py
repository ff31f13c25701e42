import json
import logging

import pytest

from deskpro_integration.__main__ import run_cli
from deskpro_integration.sso.token import SignedTokenCodec


@pytest.fixture(autouse=True)
def env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DESKPRO_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("DESKPRO_ROOT_URL", "https://support.example.com")
    monkeypatch.setenv("DESKPRO_API_KEY", "1:ABC")
    monkeypatch.setenv("DESKPRO_SSO_SECRET", "cli-secret")
    monkeypatch.setenv("DESKPRO_LOGINKEY_DB_PATH", str(tmp_path / "keys.db"))
    yield
    logging.getLogger("deskpro_integration").handlers.clear()


def test_sso_token_command(capsys: pytest.CaptureFixture) -> None:
    assert run_cli(["sso-token", "lookup_user_id", "user_id=3"]) == 0

    token = json.loads(capsys.readouterr().out)["token"]
    result = SignedTokenCodec("cli-secret").decode(token)
    assert result.params == {"action": "lookup_user_id", "user_id": "3"}


def test_loginkey_command_reuses_key(capsys: pytest.CaptureFixture) -> None:
    assert run_cli(["loginkey", "9"]) == 0
    first = json.loads(capsys.readouterr().out)
    assert run_cli(["loginkey", "9"]) == 0
    second = json.loads(capsys.readouterr().out)

    assert first == second
    assert len(first["key"]) == 32


def test_missing_configuration(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.delenv("DESKPRO_API_KEY")
    assert run_cli(["loginkey", "9"]) == 2
    assert "DESKPRO_API_KEY" in capsys.readouterr().err


def test_bad_token_parameter(capsys: pytest.CaptureFixture) -> None:
    assert run_cli(["sso-token", "lookup_user_id", "oops"]) == 1
    assert "key=value" in capsys.readouterr().err
