"""Tests for the command-line front-end."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app_cli import main as cli_main
from src.app_cli import db_commands
from src.app_common.errors import StoreError
from src.app_users.infrastructure.memory_store import InMemoryUserStore


@pytest.fixture(autouse=True)
def _quiet(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Leave the root logger alone and ignore any local .env."""
    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryUserStore:
    store = InMemoryUserStore()
    monkeypatch.setattr(db_commands, "build_user_store", lambda settings: store)
    return store


class TestBasicCommands:
    def test_greet(self, capsys) -> None:
        assert cli_main.main(["greet", "Ann"]) == 0
        assert "Hello, Ann!" in capsys.readouterr().out

    def test_name_flag_without_command(self, capsys) -> None:
        assert cli_main.main(["--name", "Bob"]) == 0
        assert "Hello, Bob!" in capsys.readouterr().out

    def test_welcome_without_command(self, capsys) -> None:
        assert cli_main.main([]) == 0
        out = capsys.readouterr().out
        assert "Welcome to Sample App" in out
        assert "--help" in out

    def test_fibonacci(self, capsys) -> None:
        assert cli_main.main(["fibonacci", "10"]) == 0
        assert "Fibonacci(10) = 55" in capsys.readouterr().out

    def test_fibonacci_defaults_to_recursive_variant(self, capsys, monkeypatch) -> None:
        from src.app_cli import commands

        naive = MagicMock(return_value=610)
        naive.__name__ = "fibonacci_naive"
        monkeypatch.setattr(commands, "fibonacci_naive", naive)
        assert cli_main.main(["fibonacci", "15"]) == 0
        naive.assert_called_once_with(15)
        assert "Fibonacci(15) = 610" in capsys.readouterr().out

    def test_fibonacci_iterative(self, capsys) -> None:
        assert cli_main.main(["fibonacci", "90", "--iterative"]) == 0
        assert "Fibonacci(90) = 2880067194370816120" in capsys.readouterr().out

    def test_fibonacci_negative_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main(["fibonacci", "-1"])
        assert exc_info.value.code == 2

    def test_verbose_prints_settings_without_password(self, capsys, monkeypatch) -> None:
        monkeypatch.setenv("APP_DATABASE__PASSWORD", "hunter2")
        assert cli_main.main(["--verbose", "greet", "Ann"]) == 0
        out = capsys.readouterr().out
        assert "Verbose mode" in out
        assert "Settings:" in out
        assert "hunter2" not in out


class TestProcess:
    def test_valid_json(self, capsys, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"app_name": "demo", "features": ["cli"]}))
        assert cli_main.main(["process", str(path)]) == 0
        out = capsys.readouterr().out
        assert "File processed successfully" in out
        assert '"app_name": "demo"' in out

    def test_missing_file(self, capsys, tmp_path: Path) -> None:
        assert cli_main.main(["process", str(tmp_path / "missing.json")]) == 1
        assert "Error: Cannot read" in capsys.readouterr().err

    def test_invalid_json(self, capsys, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{oops")
        assert cli_main.main(["process", str(path)]) == 1
        assert "Error: Invalid JSON" in capsys.readouterr().err


class TestConfigOption:
    def test_config_file_sets_app_name(self, capsys, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('app_name = "Configured"\n')
        assert cli_main.main(["--config", str(path)]) == 0
        assert "Welcome to Configured" in capsys.readouterr().out

    def test_missing_config_file(self, capsys, tmp_path: Path) -> None:
        assert cli_main.main(["--config", str(tmp_path / "nope.toml"), "greet", "Ann"]) == 1
        assert "Config file not found" in capsys.readouterr().err


class TestDbCommands:
    def test_create_list_get_delete(self, capsys, store: InMemoryUserStore) -> None:
        assert cli_main.main(["db", "create-user", "Ann", "ann@x.com"]) == 0
        out = capsys.readouterr().out
        assert "User created" in out
        assert '"email": "ann@x.com"' in out

        assert cli_main.main(["db", "list-users"]) == 0
        out = capsys.readouterr().out
        assert "1 user(s) found" in out
        assert "[1] Ann - ann@x.com (active)" in out

        assert cli_main.main(["db", "get-user", "1"]) == 0
        assert "User found" in capsys.readouterr().out

        assert cli_main.main(["db", "delete-user", "1"]) == 0
        assert "User deleted" in capsys.readouterr().out

        assert cli_main.main(["db", "get-user", "1"]) == 0
        assert "User not found" in capsys.readouterr().out

    def test_create_user_invalid_email(self, capsys, store: InMemoryUserStore) -> None:
        assert cli_main.main(["db", "create-user", "Ann", "not-an-email"]) == 1
        assert "Invalid user" in capsys.readouterr().err

    def test_init_and_ping(self, capsys, store: InMemoryUserStore) -> None:
        assert cli_main.main(["db", "init"]) == 0
        assert "Migrations applied" in capsys.readouterr().out
        assert cli_main.main(["db", "ping"]) == 0
        assert "Connection OK" in capsys.readouterr().out

    def test_store_error_exits_nonzero_and_closes(self, capsys, monkeypatch) -> None:
        failing = MagicMock()
        failing.ping = AsyncMock(side_effect=StoreError("connection refused"))
        failing.close = AsyncMock()
        monkeypatch.setattr(db_commands, "build_user_store", lambda settings: failing)

        assert cli_main.main(["db", "ping"]) == 1
        assert "Error: connection refused" in capsys.readouterr().err
        failing.close.assert_awaited_once()

    @pytest.mark.parametrize("command", ["get-user", "delete-user"])
    def test_id_outside_int4_is_usage_error(self, command: str, store: InMemoryUserStore) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main(["db", command, str(2**31)])
        assert exc_info.value.code == 2

    def test_negative_id_in_range_is_not_found(self, capsys, store: InMemoryUserStore) -> None:
        assert cli_main.main(["db", "get-user", "-5"]) == 0
        assert "User not found" in capsys.readouterr().out

    def test_db_requires_subcommand(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main(["db"])
        assert exc_info.value.code == 2


class TestServe:
    def test_serve_runs_uvicorn_factory(self, monkeypatch) -> None:
        from src.app_cli import commands

        run = MagicMock()
        monkeypatch.setattr(commands.uvicorn, "run", run)
        monkeypatch.setenv("APP_SERVER__PORT", "9001")

        assert cli_main.main(["serve"]) == 0

        args, kwargs = run.call_args
        assert args[0] == "src.main:create_app"
        assert kwargs["factory"] is True
        assert kwargs["port"] == 9001
        assert kwargs["timeout_keep_alive"] == 30
        assert kwargs["loop"] == "auto"

    def test_verbose_serve_passes_debug_level_to_app(self, monkeypatch) -> None:
        import os

        from src.app_cli import commands

        monkeypatch.setattr(commands.uvicorn, "run", MagicMock())
        monkeypatch.setenv("APP_LOGGING__LEVEL", "info")

        assert cli_main.main(["--verbose", "serve"]) == 0
        assert os.environ["APP_LOGGING__LEVEL"] == "debug"
