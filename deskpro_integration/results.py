from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any

import requests

_STATUS_LINE = re.compile(r"^HTTP/1\.\d (\d{3})")


class _Undecodable:
    """Marker for a body that is not valid JSON. Falsy, like an empty result."""

    _instance: "_Undecodable | None" = None

    def __new__(cls) -> "_Undecodable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDECODABLE"


UNDECODABLE = _Undecodable()
_NOT_DECODED = object()


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    header_block: str
    body: str

    @staticmethod
    def split(raw: str) -> tuple[str, str]:
        """Split a raw HTTP response into its header block and body."""
        header_end = raw.find("\r\n\r\n")
        if header_end == -1:
            return raw, ""
        return raw[:header_end], raw[header_end + 4:]


class ApiResult:
    """A parsed API response: status code, header pairs and a lazily decoded body."""

    def __init__(self, status_code: int, headers: list[tuple[str, str]], body: str):
        self._status_code = status_code
        self._headers = headers
        self._body = body
        self._json: Any = _NOT_DECODED

    @classmethod
    def parse(cls, header_block: str, body: str) -> "ApiResult":
        lines = header_block.replace("\r\n", "\n").split("\n")
        first = lines.pop(0) if lines else ""

        status_code = 200
        match = _STATUS_LINE.match(first)
        if match:
            status_code = int(match.group(1))

        headers: list[tuple[str, str]] = []
        for line in lines:
            name, sep, value = line.partition(":")
            if not sep:
                continue
            headers.append((name.strip().lower(), value.strip()))

        return cls(status_code, headers, body)

    @classmethod
    def from_raw(cls, raw: RawResponse) -> "ApiResult":
        return cls.parse(raw.header_block, raw.body)

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> str:
        return self._body

    @property
    def json(self) -> Any:
        """Decoded body, or ``UNDECODABLE`` if the body is not JSON."""
        if self._json is _NOT_DECODED:
            self._json = self._decode(self._body)
        return self._json

    def set_body(self, body: str) -> None:
        self._body = body
        self._json = _NOT_DECODED

    def get_headers(self, name: str | None = None) -> list[Any]:
        if name is None:
            return list(self._headers)

        name = name.lower()
        return [value for header_name, value in self._headers if header_name == name]

    @staticmethod
    def _decode(body: str) -> Any:
        try:
            decoded = requests.models.complexjson.loads(body)
        except ValueError:
            return UNDECODABLE
        # JSON null counts as undecodable
        if decoded is None:
            return UNDECODABLE
        return decoded

    def __repr__(self) -> str:
        return f"ApiResult(status_code={self._status_code}, headers={len(self._headers)})"
