from __future__ import annotations

from typing import Any, NamedTuple


class ApiErrorDetail(NamedTuple):
    """One (code, message) pair from an API error envelope."""

    code: str
    message: str | None = None

    @classmethod
    def from_pair(cls, pair: Any) -> "ApiErrorDetail":
        if isinstance(pair, (list, tuple)):
            code = pair[0] if pair else ""
            message = pair[1] if len(pair) > 1 else None
            return cls(str(code), message)
        return cls(str(pair))


class DeskproError(RuntimeError):
    """Base class for failures talking to the DeskPRO API."""


class TransportError(DeskproError):
    """The request never produced an HTTP response (connection, DNS, timeout)."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class AuthError(DeskproError):
    """The API rejected the configured key (HTTP 401)."""

    def __init__(self, message: str = "Invalid API authentication"):
        super().__init__(message)
        self.status_code = 401


class ResponseFormatError(DeskproError):
    """The API did not return JSON, usually a wrong root URL or a proxy page."""

    def __init__(self, message: str = "API did not return valid JSON", status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
