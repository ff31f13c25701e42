from __future__ import annotations

import logging
from typing import Any

import requests

from deskpro_integration.errors import TransportError
from deskpro_integration.results import RawResponse

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-DeskPRO-API-Key"
SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


def build_query_fields(params: dict[str, Any], prefix: str | None = None) -> dict[str, Any]:
    """Flatten nested params into PHP-style bracketed keys.

    ``{"status": ["a", "b"]}`` becomes ``{"status[0]": "a", "status[1]": "b"}``, which
    is what the helpdesk expects for array criteria. ``None`` values are dropped
    and booleans are sent as 1/0.
    """
    fields: dict[str, Any] = {}
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix is not None else str(key)
        if isinstance(value, (list, tuple)):
            value = dict(enumerate(value))
        if isinstance(value, dict):
            fields.update(build_query_fields(value, name))
        elif value is None:
            continue
        elif isinstance(value, bool):
            fields[name] = int(value)
        else:
            fields[name] = value
    return fields


class HttpClient:
    def __init__(self, api_key: str, timeout_seconds: int = 30, session: requests.Session | None = None):
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    @property
    def api_key(self) -> str:
        return self._api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self._api_key = value

    def send(self, method: str, url: str, params: dict[str, Any] | None = None) -> RawResponse:
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported request method: {method}")

        request_kwargs: dict[str, Any] = {
            "headers": {API_KEY_HEADER: self._api_key},
            "timeout": self._timeout_seconds,
            "allow_redirects": False,
        }
        fields = build_query_fields(params or {})
        if method == "GET":
            request_kwargs["params"] = fields
        else:
            request_kwargs["data"] = fields

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, **request_kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return RawResponse(
            status_code=response.status_code,
            header_block=self._header_block(response),
            body=response.text,
        )

    @staticmethod
    def _header_block(response: requests.Response) -> str:
        version = getattr(response.raw, "version", 11)
        http_version = "1.0" if version == 10 else "1.1"
        lines = [f"HTTP/{http_version} {response.status_code} {response.reason or ''}".rstrip()]

        raw_headers = getattr(response.raw, "headers", None)
        header_items = raw_headers.items() if raw_headers is not None else response.headers.items()
        for name, value in header_items:
            lines.append(f"{name}: {value}")

        return "\r\n".join(lines)
