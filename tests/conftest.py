from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from deskpro_integration.apis import OrganizationsApi, PeopleApi, TicketsApi
from deskpro_integration.client import DeskproClient
from deskpro_integration.http import HttpClient

ROOT_URL = "http://helpdesk.example.com/deskpro"
API_KEY = "1:APIKEY"


def make_response(body: Any = None, status_code: int = 200, headers: dict[str, str] | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code == 200 else "Error"
    response.headers = CaseInsensitiveDict(headers or {"Content-Type": "application/json"})
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    response._content = (body or "").encode("utf-8")
    response.encoding = "utf-8"
    return response


@pytest.fixture
def session() -> MagicMock:
    mock_session = MagicMock(spec=requests.Session)
    mock_session.headers = {}
    mock_session.request.return_value = make_response({})
    return mock_session


@pytest.fixture
def client(session: MagicMock) -> DeskproClient:
    return DeskproClient(ROOT_URL + "/", API_KEY, http_client=HttpClient(API_KEY, session=session))


@pytest.fixture
def organizations(client: DeskproClient) -> OrganizationsApi:
    return OrganizationsApi(client)


@pytest.fixture
def people(client: DeskproClient) -> PeopleApi:
    return PeopleApi(client)


@pytest.fixture
def tickets(client: DeskproClient) -> TicketsApi:
    return TicketsApi(client)


def last_request(session: MagicMock) -> tuple[str, str, dict[str, Any]]:
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs
