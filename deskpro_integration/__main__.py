from __future__ import annotations

import argparse
import json
import logging
import sqlite3
import sys
from typing import Any, Sequence

from deskpro_integration.config import AppSettings, ConfigurationError
from deskpro_integration.errors import DeskproError
from deskpro_integration.logging_utils import configure_logging
from deskpro_integration.services import build_service
from deskpro_integration.sso.loginkeys import LoginKeyStore
from deskpro_integration.sso.token import SignedTokenCodec

logger = logging.getLogger("deskpro_integration.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deskpro_integration", description="DeskPRO integration tools")
    commands = parser.add_subparsers(dest="command", required=True)

    people = commands.add_parser("people", help="Find helpdesk people by e-mail address")
    people.add_argument("email")

    tickets = commands.add_parser("tickets", help="Show the most recent tickets of a person")
    tickets.add_argument("person_id", type=int)
    tickets.add_argument("--limit", type=int, default=10)

    token = commands.add_parser("sso-token", help="Sign an SSO callback token")
    token.add_argument("action")
    token.add_argument("params", nargs="*", help="extra key=value parameters")

    loginkey = commands.add_parser("loginkey", help="Issue (or reuse) a storefront login key")
    loginkey.add_argument("customer_id", type=int)

    return parser


def _parse_pairs(pairs: Sequence[str]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected key=value, got: {pair}")
        key, value = pair.split("=", 1)
        params[key.strip()] = value
    return params


def _mask_email(value: str) -> str:
    if "@" not in value:
        return value

    local, domain = value.split("@", 1)
    if not domain:
        return value

    mask_count = min(6, len(domain))
    return f"{local}@{'*' * mask_count}{domain[mask_count:]}"


def run_cli(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = AppSettings.from_env()
    except ConfigurationError as exc:
        print(f"Configuration error. Set required environment variables and retry:\n\n{exc}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_file)

    try:
        output = _run_command(args, settings)
    except (DeskproError, ValueError, sqlite3.Error) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, default=str))
    return 0


def _run_command(args: argparse.Namespace, settings: AppSettings) -> Any:
    if args.command == "people":
        service = build_service(settings)
        logger.info("Looking up people for %s", _mask_email(args.email))
        return {"people": service.find_people_by_email(args.email), "errors": service.api_errors}

    if args.command == "tickets":
        service = build_service(settings)
        return {"tickets": service.recent_tickets(args.person_id, args.limit), "errors": service.api_errors}

    if args.command == "sso-token":
        if not settings.sso_secret:
            raise ValueError("DESKPRO_SSO_SECRET is required to sign tokens")
        codec = SignedTokenCodec(settings.sso_secret, max_age_seconds=settings.sso_max_age_seconds)
        return {"token": codec.encode(args.action, _parse_pairs(args.params))}

    store = LoginKeyStore(settings.loginkey_db_path, ttl_seconds=settings.loginkey_ttl_seconds)
    store.init_db()
    login_key = store.issue_or_reuse(args.customer_id)
    return {"id": login_key.id, "key": login_key.key}


if __name__ == "__main__":
    sys.exit(run_cli())
