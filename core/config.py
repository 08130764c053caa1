"""Dataclass-based application configuration.

Every section is a frozen dataclass with sensible defaults. Values are
overridden from environment variables by ``AppConfig.from_env()``; invalid
values raise ``ConfigurationError`` so the process fails at startup rather
than on the first request.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class ConfigurationError(RuntimeError):
    """Raised when the application cannot be wired from its configuration."""


# ---------------------------------------------------------------------------
# Env helpers
# ---------------------------------------------------------------------------

def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the persistence layer."""

    url: str = "sqlite:///./light.db"
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False
    auto_create: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    json: bool = False


@dataclass(frozen=True)
class TemplateConfig:
    """Template namespaces, ``namespace -> directory``."""

    paths: dict[str, Path] = field(
        default_factory=lambda: {
            "layout": PACKAGE_ROOT / "core" / "templates" / "layout",
            "page": PACKAGE_ROOT / "verticals" / "book" / "templates" / "page",
        }
    )


@dataclass(frozen=True)
class AppConfig:
    """Complete configuration for the application.

    Usage::

        config = AppConfig.from_env()
        engine = make_engine(config.database)
    """

    name: str = "Light"
    version: str = "0.1.0"
    debug: bool = False
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    templates: TemplateConfig = field(default_factory=TemplateConfig)

    @classmethod
    def default(cls) -> "AppConfig":
        return cls()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables.

        Example: DATABASE_URL=postgresql+psycopg://light:light@db/light
        """
        defaults = DatabaseConfig()
        database = DatabaseConfig(
            url=os.getenv("DATABASE_URL", defaults.url),
            pool_size=_env_int("DB_POOL_SIZE", defaults.pool_size),
            max_overflow=_env_int("DB_MAX_OVERFLOW", defaults.max_overflow),
            echo=_env_bool("DB_ECHO", defaults.echo),
            auto_create=_env_bool("DB_AUTO_CREATE", defaults.auto_create),
        )
        logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json=_env_bool("LOG_JSON", False),
        )
        return cls(
            name=os.getenv("APP_NAME", "Light"),
            debug=_env_bool("DEBUG", False),
            database=database,
            logging=logging,
        )
