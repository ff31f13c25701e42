from unittest.mock import MagicMock

import pytest

from deskpro_integration.apis import OrganizationsApi, PeopleApi, TicketsApi
from deskpro_integration.client import DeskproClient
from deskpro_integration.config import AppSettings, ConfigurationError
from deskpro_integration.services import DeskproService, build_service

from conftest import ROOT_URL, last_request, make_response


@pytest.fixture
def service(client: DeskproClient) -> DeskproService:
    return DeskproService(client, OrganizationsApi(client), PeopleApi(client), TicketsApi(client))


def test_find_people_by_email(service: DeskproService, session: MagicMock) -> None:
    session.request.return_value = make_response({"people": {"4": {"id": 4}}})

    assert service.find_people_by_email("ann@example.com") == [{"id": 4}]
    _, _, kwargs = last_request(session)
    assert kwargs["params"] == {"email": "ann@example.com", "page": 1}


def test_find_people_error_gives_empty_list(service: DeskproService, session: MagicMock) -> None:
    session.request.return_value = make_response({"error_code": "invalid_email", "error_message": "Bad"})

    assert service.find_people_by_email("nope") == []
    assert service.api_errors == [["invalid_email", "Bad"]]


def test_recent_tickets_limited(service: DeskproService, session: MagicMock) -> None:
    session.request.return_value = make_response({"tickets": [{"id": n} for n in range(15)]})

    recent = service.recent_tickets(42)

    assert len(recent) == 10
    _, url, kwargs = last_request(session)
    assert url == ROOT_URL + "/api/tickets"
    assert kwargs["params"]["order"] == "ticket.date_created:desc"
    assert service.deskpro_url == ROOT_URL


def _settings(**overrides: object) -> AppSettings:
    values = dict(
        root_url="https://support.example.com",
        api_key="1:ABC",
        sso_secret="s",
        timeout_seconds=30,
        loginkey_db_path="keys.db",
        loginkey_ttl_seconds=900,
        sso_max_age_seconds=30000,
        log_level="INFO",
        log_file="",
    )
    values.update(overrides)
    return AppSettings(**values)


def test_build_service_wires_settings() -> None:
    service = build_service(_settings())
    assert service.deskpro_url == "https://support.example.com"


@pytest.mark.parametrize(
    "overrides",
    [
        {"root_url": ""},
        {"api_key": ""},
        {"api_key": "no-secret"},
        {"root_url": "ftp://example.com"},
        {"timeout_seconds": 0},
        {"log_level": "LOUD"},
    ],
)
def test_settings_validation(overrides: dict) -> None:
    with pytest.raises(ConfigurationError):
        _settings(**overrides).validate()


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DESKPRO_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("DESKPRO_ROOT_URL", "https://support.example.com/")
    monkeypatch.setenv("DESKPRO_API_KEY", "2:XYZ")
    monkeypatch.setenv("DESKPRO_TIMEOUT_SECONDS", "12")

    settings = AppSettings.from_env()

    assert settings.root_url == "https://support.example.com"
    assert settings.timeout_seconds == 12
    assert settings.loginkey_ttl_seconds == 900
    assert settings.sso_max_age_seconds == 30000


def test_settings_read_env_file_without_overriding(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    env_file = tmp_path / "deskpro.env"
    env_file.write_text(
        "# helpdesk\n"
        "DESKPRO_ROOT_URL=https://from-file.example.com\n"
        "DESKPRO_SSO_SECRET='file-secret'\n"
        "not a setting\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DESKPRO_ENV_FILE", str(env_file))
    monkeypatch.setenv("DESKPRO_ROOT_URL", "https://support.example.com")
    monkeypatch.setenv("DESKPRO_API_KEY", "2:XYZ")
    # recorded so the value loaded from the file is removed again afterwards
    monkeypatch.setenv("DESKPRO_SSO_SECRET", "")
    monkeypatch.delenv("DESKPRO_SSO_SECRET")

    settings = AppSettings.from_env()

    assert settings.root_url == "https://support.example.com"
    assert settings.sso_secret == "file-secret"
