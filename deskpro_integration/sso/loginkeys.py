from __future__ import annotations

from contextlib import closing
from dataclasses import dataclass
import hmac
import logging
import secrets
import sqlite3
import time
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 900
TABLE = "deskpro_loginkey"


@dataclass(frozen=True)
class LoginKey:
    id: int
    customer_id: int
    key: str
    created_at: float | None

    def still_valid(self, now: float, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> bool:
        # keys without a creation time never expire
        if self.created_at is None:
            return True
        return now - self.created_at <= ttl_seconds


def new_key_value() -> str:
    return secrets.token_hex(16)


class LoginKeyStore:
    def __init__(
        self,
        db_path: str,
        clock: Callable[[], float] = time.time,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        self._db_path = db_path
        self._clock = clock
        self._ttl_seconds = ttl_seconds

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, timeout=30, isolation_level=None)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        with closing(self._connect()) as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    loginkey_id  INTEGER PRIMARY KEY AUTOINCREMENT,
                    customer_id  INTEGER NOT NULL UNIQUE,
                    loginkey     TEXT NOT NULL,
                    date_created REAL
                )
                """
            )

    def get(self, loginkey_id: int) -> LoginKey | None:
        with closing(self._connect()) as conn:
            row = conn.execute(
                f"SELECT * FROM {TABLE} WHERE loginkey_id=?", (int(loginkey_id),)
            ).fetchone()
        return _to_login_key(row)

    def get_by_customer(self, customer_id: int) -> LoginKey | None:
        with closing(self._connect()) as conn:
            row = conn.execute(
                f"SELECT * FROM {TABLE} WHERE customer_id=?", (int(customer_id),)
            ).fetchone()
        return _to_login_key(row)

    def issue_or_reuse(self, customer_id: int) -> LoginKey:
        """Return the customer's current key, minting a fresh one if it is missing or stale."""
        customer_id = int(customer_id)
        now = self._clock()

        with closing(self._connect()) as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                cur = conn.execute(
                    f"""
                    INSERT INTO {TABLE} (customer_id, loginkey, date_created)
                    VALUES (?, ?, ?)
                    ON CONFLICT(customer_id) DO UPDATE SET
                        loginkey = excluded.loginkey,
                        date_created = excluded.date_created
                    WHERE {TABLE}.loginkey = ''
                       OR ({TABLE}.date_created IS NOT NULL AND {TABLE}.date_created < ?)
                    """,
                    (customer_id, new_key_value(), now, now - self._ttl_seconds),
                )
                row = conn.execute(
                    f"SELECT * FROM {TABLE} WHERE customer_id=?", (customer_id,)
                ).fetchone()
                conn.execute("COMMIT")
            except sqlite3.Error:
                conn.execute("ROLLBACK")
                raise

        if cur.rowcount:
            logger.info("Issued login key %s for customer %s", row["loginkey_id"], customer_id)
        return _to_login_key(row)

    def redeem(self, loginkey_id: int, key: str, now: float | None = None) -> int | None:
        """Consume a key. Returns the customer id, or ``None`` if the key is unknown, wrong or stale."""
        now = self._clock() if now is None else now

        with closing(self._connect()) as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                login_key = _to_login_key(
                    conn.execute(
                        f"SELECT * FROM {TABLE} WHERE loginkey_id=?", (int(loginkey_id),)
                    ).fetchone()
                )
                if (
                    login_key is None
                    or not login_key.key
                    or not isinstance(key, str)
                    or not hmac.compare_digest(login_key.key.encode(), key.encode())
                    or not login_key.still_valid(now, self._ttl_seconds)
                ):
                    conn.execute("ROLLBACK")
                    return None

                deleted = conn.execute(
                    f"DELETE FROM {TABLE} WHERE loginkey_id=? AND loginkey=?",
                    (login_key.id, login_key.key),
                ).rowcount
                conn.execute("COMMIT")
            except sqlite3.Error:
                conn.execute("ROLLBACK")
                raise

        if deleted != 1:
            return None

        logger.info("Redeemed login key %s for customer %s", login_key.id, login_key.customer_id)
        return login_key.customer_id


def _to_login_key(row: sqlite3.Row | None) -> LoginKey | None:
    if row is None:
        return None
    return LoginKey(
        id=row["loginkey_id"],
        customer_id=row["customer_id"],
        key=row["loginkey"] or "",
        created_at=row["date_created"],
    )
