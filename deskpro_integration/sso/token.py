"""Signed request tokens used by the helpdesk to call back into the CMS.

Wire format: ``{epoch}_{hexsignature}_{base64(json(params))}``. The default
signer hashes ``epoch + payload + secret`` with SHA-1, which is what deployed
helpdesks send. ``HmacSha1Signer`` is a keyed drop-in for installations that
can change both ends.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
import hashlib
import hmac
import json
import logging
import string
import time
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 30000
MAX_EPOCH_DIGITS = 20
_HEX_DIGITS = frozenset(string.hexdigits)


class TokenError(str, Enum):
    MALFORMED = "invalid_data.0"
    UNREADABLE_OR_EXPIRED = "invalid_data.1"
    SIGNATURE_MISMATCH = "invalid_data.2"
    ACTION_MISSING = "invalid_data.3"


@dataclass(frozen=True)
class TokenResult:
    params: dict[str, Any] = field(default_factory=dict)
    error: TokenError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def action(self) -> Any:
        return self.params.get("action")


class TokenSigner(Protocol):
    def sign(self, issued_at: str, payload: str, secret: str) -> str:
        ...


class Sha1SuffixSigner:
    def sign(self, issued_at: str, payload: str, secret: str) -> str:
        return hashlib.sha1(f"{issued_at}{payload}{secret}".encode("utf-8")).hexdigest()


class HmacSha1Signer:
    def sign(self, issued_at: str, payload: str, secret: str) -> str:
        message = f"{issued_at}{payload}".encode("utf-8")
        return hmac.new(secret.encode("utf-8"), message, hashlib.sha1).hexdigest()


class SignedTokenCodec:
    def __init__(
        self,
        secret: str,
        signer: TokenSigner | None = None,
        clock: Callable[[], float] = time.time,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
    ):
        self._secret = secret
        self._signer = signer or Sha1SuffixSigner()
        self._clock = clock
        self._max_age_seconds = max_age_seconds

    def encode(
        self,
        action: str,
        extra_params: dict[str, Any] | None = None,
        issued_at: int | None = None,
    ) -> str:
        params = {"action": action}
        params.update(extra_params or {})

        payload = base64.b64encode(
            json.dumps(params, separators=(",", ":")).encode("utf-8")
        ).decode("ascii")
        epoch = str(int(self._clock()) if issued_at is None else int(issued_at))
        signature = self._signer.sign(epoch, payload, self._secret)
        return f"{epoch}_{signature}_{payload}"

    def decode(self, wire: Any, now: float | None = None) -> TokenResult:
        parts = self._split(wire)
        if parts is None:
            return self._reject(TokenError.MALFORMED)

        epoch, signature, payload = parts
        params = self._load_params(payload)
        now = self._clock() if now is None else now

        # only an age bound; future-dated tokens are accepted
        if not params or int(epoch) < int(now) - self._max_age_seconds:
            return self._reject(TokenError.UNREADABLE_OR_EXPIRED)

        expected = self._signer.sign(epoch, payload, self._secret)
        if not hmac.compare_digest(signature, expected):
            return self._reject(TokenError.SIGNATURE_MISMATCH)

        if not isinstance(params, dict) or params.get("action") is None:
            return self._reject(TokenError.ACTION_MISSING)

        return TokenResult(params=params)

    @staticmethod
    def _split(wire: Any) -> tuple[str, str, str] | None:
        if not wire or not isinstance(wire, str):
            return None

        # a single trailing newline is tolerated and not part of the payload
        if wire.endswith("\n"):
            wire = wire[:-1]

        parts = wire.split("_", 2)
        if len(parts) != 3:
            return None

        epoch, signature, payload = parts
        if not epoch.isascii() or not epoch.isdigit() or len(epoch) > MAX_EPOCH_DIGITS:
            return None
        if not signature or not set(signature) <= _HEX_DIGITS:
            return None
        if "\n" in payload:
            return None
        return epoch, signature, payload

    @staticmethod
    def _load_params(payload: str) -> Any:
        try:
            decoded = base64.b64decode(payload)
            return json.loads(decoded)
        except (binascii.Error, ValueError):
            return None

    @staticmethod
    def _reject(error: TokenError) -> TokenResult:
        logger.info("Rejected signed token: %s", error.value)
        return TokenResult(error=error)
