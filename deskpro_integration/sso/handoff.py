from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol
from urllib.parse import urlencode

from deskpro_integration.sso.loginkeys import LoginKey, LoginKeyStore

logger = logging.getLogger(__name__)


class CustomerDirectory(Protocol):
    def customer_info(self, customer_id: int) -> Mapping[str, Any] | None:
        ...


def handoff_url(url: str, login_key: LoginKey) -> str:
    """URL the browser is sent to so the helpdesk can redeem ``login_key``."""
    separator = "&" if "?" in url else "?"
    return url + separator + urlencode({"id": login_key.id, "key": login_key.key})


class StorefrontSso:
    def __init__(self, store: LoginKeyStore, customers: CustomerDirectory):
        self._store = store
        self._customers = customers

    def validate(self, params: Mapping[str, Any], now: float | None = None) -> dict[str, Any] | None:
        try:
            loginkey_id = int(params.get("id") or 0)
        except (TypeError, ValueError):
            loginkey_id = 0
        key = params.get("key")

        if not loginkey_id or not key:
            return None

        customer_id = self._store.redeem(loginkey_id, key, now=now)
        if customer_id is None:
            logger.info("Login key %s could not be redeemed", loginkey_id)
            return None

        info = self._customers.customer_info(customer_id)
        return dict(info) if info else None
