"""Command-line front-end.

Usage:
    python -m src.app_cli greet Ann
    python -m src.app_cli process data.json
    python -m src.app_cli fibonacci 30 [--iterative]
    python -m src.app_cli --config config.toml serve
    python -m src.app_cli db init|ping|create-user NAME EMAIL|list-users|get-user ID|delete-user ID

Exit codes: 0 success, 1 application error (config, file, store), 2 usage error.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from config.settings import load_settings
from src.app_cli.commands import (
    cmd_fibonacci,
    cmd_greet,
    cmd_process,
    cmd_serve,
    greet,
    welcome,
)
from src.app_cli.db_commands import (
    cmd_db,
    db_create_user,
    db_delete_user,
    db_get_user,
    db_init,
    db_list_users,
    db_ping,
)
from src.app_common.errors import AppError
from src.app_common.logging_setup import configure_logging
from src.app_users.domain.models import USER_ID_MAX, USER_ID_MIN

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return n


def _user_id(value: str) -> int:
    n = int(value)
    if not USER_ID_MIN <= n <= USER_ID_MAX:
        raise argparse.ArgumentTypeError(f"user id out of range: {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="app",
        description="Sample app: greetings, JSON files, fibonacci and a users store.",
    )
    parser.add_argument("-n", "--name", help="name to greet when no command is given")
    parser.add_argument("-c", "--config", type=Path, help="settings file (.toml or .json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("greet", help="greet someone")
    p.add_argument("person", metavar="name")
    p.set_defaults(handler=cmd_greet)

    p = sub.add_parser("process", help="parse and pretty-print a JSON file")
    p.add_argument("file", type=Path)
    p.set_defaults(handler=cmd_process)

    p = sub.add_parser("fibonacci", help="compute the nth Fibonacci number")
    p.add_argument("n", type=_non_negative_int)
    p.add_argument("--iterative", action="store_true", help="use the linear-time variant")
    p.set_defaults(handler=cmd_fibonacci)

    p = sub.add_parser("serve", help="run the HTTP API")
    p.set_defaults(handler=cmd_serve)

    db = sub.add_parser("db", help="database commands")
    db_sub = db.add_subparsers(dest="db_command", required=True)

    p = db_sub.add_parser("init", help="run schema migrations")
    p.set_defaults(db_handler=db_init)

    p = db_sub.add_parser("ping", help="check the database connection")
    p.set_defaults(db_handler=db_ping)

    p = db_sub.add_parser("create-user", help="create a user")
    p.add_argument("user_name", metavar="name")
    p.add_argument("email")
    p.set_defaults(db_handler=db_create_user)

    p = db_sub.add_parser("list-users", help="list all users")
    p.set_defaults(db_handler=db_list_users)

    p = db_sub.add_parser("get-user", help="show one user")
    p.add_argument("id", type=_user_id)
    p.set_defaults(db_handler=db_get_user)

    p = db_sub.add_parser("delete-user", help="delete a user")
    p.add_argument("id", type=_user_id)
    p.set_defaults(db_handler=db_delete_user)

    db.set_defaults(handler=cmd_db)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
        configure_logging(settings.logging, "debug" if args.verbose else None)

        if args.verbose:
            print("🔎 Verbose mode on")
            shown = {k: v for k, v in vars(args).items() if not callable(v)}
            print(f"Args: {shown}")
            print(f"Settings: {settings.model_dump_json(indent=2)}")

        if args.command is None:
            if args.name:
                greet(args.name)
            else:
                welcome(settings)
            return 0

        args.handler(args, settings)
    except AppError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
