"""Core DeskPRO REST client.

Every API method returns ``False`` when the helpdesk answers with an error
envelope; the error list is then available from ``last_errors``. Failures that
mean the API cannot be used at all (bad key, non-JSON body, no connection) are
raised instead.

``last_result`` and ``last_errors`` describe only the most recent call, so a
client instance must not be shared between threads without external locking.
"""
from __future__ import annotations

import logging
from typing import Any

from deskpro_integration.errors import ApiErrorDetail, AuthError, ResponseFormatError
from deskpro_integration.http import HttpClient
from deskpro_integration.results import UNDECODABLE, ApiResult

logger = logging.getLogger(__name__)


class DeskproClient:
    def __init__(self, root_url: str, api_key: str, http_client: HttpClient | None = None):
        self._http_client = http_client or HttpClient(api_key)
        self._root = ""
        self.set_root(root_url)
        self.set_api_key(api_key)
        self._errors: list[list[Any]] | None = None
        self._last: ApiResult | None = None

    @property
    def root_url(self) -> str:
        return self._root

    def set_root(self, root_url: str) -> None:
        if root_url.endswith("/"):
            root_url = root_url[:-1]
        self._root = root_url

    @property
    def api_key(self) -> str:
        return self._http_client.api_key

    def set_api_key(self, api_key: str) -> None:
        self._http_client.api_key = api_key

    @property
    def last_result(self) -> ApiResult | None:
        return self._last

    @property
    def last_errors(self) -> list[list[Any]] | None:
        return self._errors

    @property
    def last_error_details(self) -> list[ApiErrorDetail]:
        return [ApiErrorDetail.from_pair(pair) for pair in self._errors or []]

    def call(self, method: str, endpoint: str, params: dict[str, Any] | None = None) -> ApiResult:
        if endpoint.startswith("/"):
            endpoint = endpoint[1:]
        if endpoint.endswith("/"):
            endpoint = endpoint[:-1]

        self._errors = None
        self._last = None

        url = f"{self._root}/api/{endpoint}"
        raw = self._http_client.send(method, url, params or {})
        self._last = ApiResult.from_raw(raw)
        return self._last

    def get_response(self, result: ApiResult) -> Any:
        """Decoded JSON of ``result``, or ``False`` if it carries an error envelope."""
        if result.status_code == 401:
            raise AuthError()

        json = result.json
        if json is UNDECODABLE:
            raise ResponseFormatError(status_code=result.status_code)

        if isinstance(json, dict) and json.get("error_code"):
            if json["error_code"] == "multiple":
                self._errors = list(json.get("errors") or [])
            else:
                self._errors = [[json["error_code"], json.get("error_message")]]
            logger.info("DeskPRO API returned errors: %s", self._errors)
            return False

        return json

    def get_success_response(self, result: ApiResult) -> bool:
        json = self.get_response(result)
        return bool(json) and isinstance(json, dict) and bool(json.get("success"))

    def get_exists_response(self, result: ApiResult) -> bool:
        json = self.get_response(result)
        return bool(json) and isinstance(json, dict) and bool(json.get("exists"))

    @staticmethod
    def list_params(
        criteria: dict[str, Any] | None,
        page: int = 1,
        order: str | None = None,
        cache: int | None = None,
    ) -> dict[str, Any]:
        params = dict(criteria or {})
        params["page"] = page
        if order is not None:
            params["order"] = order
        if cache is not None:
            params["cache"] = cache
        return params
