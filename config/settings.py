"""Application settings.

Resolution order, lowest to highest precedence:
  1. built-in defaults (database defaults fall back to the libpq PG* variables)
  2. optional config file (.toml or .json), passed to load_settings() or
     found as ./config.toml / ./config.json
  3. .env file in the working directory
  4. APP_-prefixed environment variables, nested with "__"
     e.g. APP_SERVER__PORT=9000, APP_DATABASE__ENABLED=false

Settings are built once at startup and handed to the components that need
them; there is no module-level settings instance.
"""

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from src.app_common.errors import ConfigError

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

# Read from the working directory when no config file is given
DEFAULT_CONFIG_FILES = (Path("config.toml"), Path("config.json"))


def _pg_port() -> int:
    try:
        return int(os.environ.get("PGPORT", "5432"))
    except ValueError:
        return 5432


def _pg_password() -> SecretStr | None:
    value = os.environ.get("PGPASSWORD")
    return SecretStr(value) if value else None


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(8080, ge=1, le=65535)
    workers: int | None = Field(None, ge=1)
    timeout_seconds: int = Field(30, ge=1)


class DatabaseSettings(BaseModel):
    # False selects the in-memory store instead of PostgreSQL
    enabled: bool = True
    host: str = Field(default_factory=lambda: os.environ.get("PGHOST", "localhost"))
    port: int = Field(default_factory=_pg_port)
    database: str = Field(default_factory=lambda: os.environ.get("PGDATABASE", "app_db"))
    username: str = Field(default_factory=lambda: os.environ.get("PGUSER", "app_user"))
    password: SecretStr | None = Field(default_factory=_pg_password)
    max_connections: int = Field(10, ge=1)
    min_connections: int = Field(2, ge=0)

    @property
    def url(self) -> str:
        """SQLAlchemy URL for the asyncpg driver."""
        password = f":{self.password.get_secret_value()}" if self.password else ""
        return (
            f"postgresql+asyncpg://{self.username}{password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class LoggingSettings(BaseModel):
    level: str = "info"
    format: Literal["json", "pretty", "compact"] = "pretty"
    file: Path | None = None

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}, expected one of {sorted(_LOG_LEVELS)}")
        return v.lower()


class FeaturesSettings(BaseModel):
    api_enabled: bool = True
    metrics_enabled: bool = False
    cors_enabled: bool = True


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Set on the subclass built by load_settings()
    config_file: ClassVar[Path | None] = None

    app_name: str = "Sample App"
    version: str = "0.1.0"

    server: ServerSettings = Field(default_factory=ServerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    features: FeaturesSettings = Field(default_factory=FeaturesSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
        ]
        if cls.config_file is not None:
            sources.append(_file_source(settings_cls, cls.config_file))
        return tuple(sources)

    @property
    def server_address(self) -> str:
        return f"{self.server.host}:{self.server.port}"


def _file_source(
    settings_cls: type[BaseSettings], path: Path
) -> PydanticBaseSettingsSource:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        return TomlConfigSettingsSource(settings_cls, toml_file=path)
    if suffix == ".json":
        return JsonConfigSettingsSource(settings_cls, json_file=path)
    raise ConfigError(f"Unsupported config file type: {path.name} (use .toml or .json)")


def _default_config_file() -> Path | None:
    for candidate in DEFAULT_CONFIG_FILES:
        if candidate.is_file():
            return candidate
    return None


def load_settings(config_file: str | Path | None = None) -> Settings:
    """Build the settings object once, at startup.

    Without an explicit path, ./config.toml or ./config.json is read when
    present. Raises ConfigError for a missing or unreadable config file and
    for values that fail validation.
    """
    if config_file is None:
        config_file = _default_config_file()
    if config_file is None:
        settings_cls: type[Settings] = Settings
    else:
        path = Path(config_file)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        class FileSettings(Settings):
            config_file = path

        settings_cls = FileSettings

    try:
        return settings_cls()
    except ValueError as exc:
        # pydantic ValidationError, TOMLDecodeError and JSONDecodeError
        # are all ValueError subclasses
        raise ConfigError(f"Invalid configuration: {exc}") from exc
