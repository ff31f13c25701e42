from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Protocol

from deskpro_integration.sso.token import SignedTokenCodec, TokenError

logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    def find_by_email(self, email: str) -> Mapping[str, Any] | None:
        ...

    def find_by_username(self, username: str) -> Mapping[str, Any] | None:
        ...

    def find_by_id(self, user_id: Any) -> Mapping[str, Any] | None:
        ...


class Authenticator(Protocol):
    def authenticate(self, username: str, password: str) -> str | None:
        """Return the canonical username on a successful login, else ``None``."""
        ...


class SessionWriter(Protocol):
    def current_user_id(self) -> Any:
        ...

    def attach_user(self, user_id: Any) -> None:
        ...


class SsoListener:
    """Answers signed helpdesk callbacks with exactly one JSON object."""

    def __init__(
        self,
        codec: SignedTokenCodec,
        users: UserDirectory,
        sessions: SessionWriter | None = None,
        authenticator: Authenticator | None = None,
    ):
        self._codec = codec
        self._users = users
        self._sessions = sessions
        self._authenticator = authenticator
        self._handlers = {
            "lookup_user_email": self._lookup_user_email,
            "lookup_user_username": self._lookup_user_username,
            "lookup_user_id": self._lookup_user_id,
            "auth": self._auth,
            "init_session": self._init_session,
        }

    def handle(self, data: Any, now: float | None = None) -> dict[str, Any]:
        token = self._codec.decode(data, now=now)
        if not token.ok:
            return _error(token.error)

        handler = self._handlers.get(token.action) if isinstance(token.action, str) else None
        if handler is None:
            logger.warning("Unknown SSO action: %r", token.action)
            return _error(TokenError.ACTION_MISSING)

        logger.info("Handling SSO action %s", token.action)
        return {"success": True, "user_info": handler(token.params)}

    def respond(self, data: Any, now: float | None = None) -> str:
        return json.dumps(self.handle(data, now=now), default=str)

    def _lookup_user_email(self, params: dict[str, Any]) -> Any:
        return _row(self._users.find_by_email(params.get("user_email", "")))

    def _lookup_user_username(self, params: dict[str, Any]) -> Any:
        return _row(self._users.find_by_username(params.get("user_username", "")))

    def _lookup_user_id(self, params: dict[str, Any]) -> Any:
        return _row(self._users.find_by_id(params.get("user_id")))

    def _auth(self, params: dict[str, Any]) -> Any:
        if self._authenticator is None:
            return None

        username = str(params.get("username") or "")
        password = str(params.get("password") or "")

        logged_in = self._authenticator.authenticate(username, password)
        if not logged_in and "@" in username:
            by_email = self._users.find_by_email(username)
            if by_email and by_email.get("username"):
                logged_in = self._authenticator.authenticate(str(by_email["username"]), password)

        if not logged_in:
            return None
        return _row(self._users.find_by_username(logged_in))

    def _init_session(self, params: dict[str, Any]) -> Any:
        if self._sessions is None:
            return None

        current = self._sessions.current_user_id()
        if current:
            return _row(self._users.find_by_id(current))

        user = self._users.find_by_id(params.get("user_id"))
        if not user or not user.get("id") or _is_blocked(user):
            return None

        self._sessions.attach_user(user["id"])
        logger.info("Attached user %s to the current session", user["id"])
        return _row(user)


def _error(error: TokenError | None) -> dict[str, Any]:
    code = error.value if error is not None else TokenError.MALFORMED.value
    return {"error": True, "code": code}


def _row(user: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return dict(user) if user else None


def _is_blocked(user: Mapping[str, Any]) -> bool:
    return str(user.get("block", 0)) == "1"
