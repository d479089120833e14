"""`db` subcommands: schema migrations, connectivity check and user CRUD.

Every command builds the store from the settings, runs one coroutine and
closes the store again, whatever the outcome.
"""

import argparse
import asyncio
import json
from collections.abc import Awaitable, Callable

from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings
from src.app_common.errors import ValidationFailedError
from src.app_users.application.schemas import CreateUserRequest
from src.app_users.domain.repository import UserStore
from src.app_users.infrastructure.store import build_user_store


async def db_init(store: UserStore, args: argparse.Namespace) -> None:
    print("🔧 Initializing database...")
    await store.migrate()
    print("✅ Database initialized!")
    print("📊 Migrations applied!")


async def db_ping(store: UserStore, args: argparse.Namespace) -> None:
    print("🔍 Checking database connection...")
    await store.ping()
    print("✅ Connection OK!")


async def db_create_user(store: UserStore, args: argparse.Namespace) -> None:
    try:
        body = CreateUserRequest(name=args.user_name, email=args.email)
    except PydanticValidationError as exc:
        raise ValidationFailedError(f"Invalid user: {exc.errors()[0]['msg']}") from exc

    print("👤 Creating user...")
    user = await store.create(body.name, body.email)
    print("✅ User created!")
    print(json.dumps(user.to_dict(), indent=2, ensure_ascii=False))


async def db_list_users(store: UserStore, args: argparse.Namespace) -> None:
    print("📋 Listing users...")
    users = await store.list_all()
    count = await store.count()

    print(f"\n{count} user(s) found:\n")
    for user in users:
        status = "active" if user.active else "inactive"
        print(f"  [{user.id}] {user.name} - {user.email} ({status})")


async def db_get_user(store: UserStore, args: argparse.Namespace) -> None:
    print(f"🔍 Looking up user #{args.id}...")
    user = await store.find_by_id(args.id)
    if user is None:
        print("❌ User not found!")
        return
    print("✅ User found!")
    print(json.dumps(user.to_dict(), indent=2, ensure_ascii=False))


async def db_delete_user(store: UserStore, args: argparse.Namespace) -> None:
    print(f"🗑️  Deleting user #{args.id}...")
    await store.delete(args.id)
    print("✅ User deleted!")


DbHandler = Callable[[UserStore, argparse.Namespace], Awaitable[None]]


async def _run(handler: DbHandler, store: UserStore, args: argparse.Namespace) -> None:
    try:
        await handler(store, args)
    finally:
        await store.close()


def cmd_db(args: argparse.Namespace, settings: Settings) -> None:
    store = build_user_store(settings)
    asyncio.run(_run(args.db_handler, store, args))
