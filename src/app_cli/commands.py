"""Handlers for the non-database CLI commands.

Each handler takes the parsed arguments and the settings and prints its
result; failures are raised as AppError subclasses for main() to report.
"""

import argparse
import json
import logging
import os
from pathlib import Path

import uvicorn

from config.settings import Settings
from src.app_common.errors import FileProcessingError
from src.app_utils.numbers import fibonacci, fibonacci_naive

logger = logging.getLogger(__name__)


def greet(name: str) -> None:
    print(f"Hello, {name}! 👋")
    print("Welcome to the sample app.")


def welcome(settings: Settings) -> None:
    print(f"👋 Welcome to {settings.app_name}!")
    print("Use --help to see the available commands")


def cmd_greet(args: argparse.Namespace, settings: Settings) -> None:
    greet(args.person)


def load_json_file(path: Path) -> object:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileProcessingError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise FileProcessingError(f"Invalid JSON in {path}: {exc}") from exc


def cmd_process(args: argparse.Namespace, settings: Settings) -> None:
    path: Path = args.file
    print(f"📄 Processing file: {path}")
    data = load_json_file(path)
    print("✅ File processed successfully!")
    print(f"Content: {json.dumps(data, indent=2, ensure_ascii=False)}")


def cmd_fibonacci(args: argparse.Namespace, settings: Settings) -> None:
    compute = fibonacci if args.iterative else fibonacci_naive
    logger.debug("Computing fibonacci(%d) with %s", args.n, compute.__name__)
    print(f"Fibonacci({args.n}) = {compute(args.n)}")


def cmd_serve(args: argparse.Namespace, settings: Settings) -> None:
    if args.config is not None:
        # Worker processes rebuild the app from the same file
        os.environ["APP_CONFIG_FILE"] = str(args.config)
    if args.verbose:
        os.environ["APP_LOGGING__LEVEL"] = "debug"
    logger.info("Starting API server on %s", settings.server_address)
    uvicorn.run(
        "src.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers,
        timeout_keep_alive=settings.server.timeout_seconds,
        loop="auto",
        log_config=None,
    )
