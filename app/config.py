"""Configuration management using Pydantic settings.

Two-layer configuration system:
1. Environment: Loads raw values from environment variables (UPPER_CASE)
2. Settings: Clean application settings with lowercase fields and derived values
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


class Environment(BaseSettings):
    """Raw environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Server ─────────────────────────────────────────────────────────

    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    SECRET_KEY: str = Field(default=_DEFAULT_SECRET_KEY)
    FLASK_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)
    CORS_ORIGINS: list[str] = Field(default=["http://localhost:3000"])
    WAITRESS_THREADS: int = Field(default=4)
    GRACEFUL_SHUTDOWN_TIMEOUT: int = Field(default=30)

    # ── JSON body parsing ──────────────────────────────────────────────

    JSON_BODY_LIMIT: int = Field(default=100 * 1024)
    JSON_BODY_STRICT: bool = Field(default=True)

    # ── Database ───────────────────────────────────────────────────────

    DATABASE_URL: str = Field(default="sqlite:///backend.db")
    DB_POOL_SIZE: int = Field(default=5)
    DB_POOL_MAX_OVERFLOW: int = Field(default=10)
    DB_POOL_TIMEOUT: int = Field(default=10)


class Settings(BaseModel):
    """Application settings with lowercase fields and derived values."""

    model_config = ConfigDict(from_attributes=True)

    # ── Server ─────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    port: int = 3000
    secret_key: str = _DEFAULT_SECRET_KEY
    flask_env: str = "development"
    debug: bool = True
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    waitress_threads: int = 4
    graceful_shutdown_timeout: int = 30

    # ── JSON body parsing ──────────────────────────────────────────────

    json_body_limit: int = 100 * 1024
    json_body_strict: bool = True

    # ── Database ───────────────────────────────────────────────────────

    database_url: str = "sqlite:///backend.db"
    db_pool_size: int = 5
    db_pool_max_overflow: int = 10
    db_pool_timeout: int = 10
    sqlalchemy_engine_options: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_testing(self) -> bool:
        return self.flask_env == "testing"

    @property
    def is_production(self) -> bool:
        return self.flask_env == "production"

    def to_flask_config(self) -> "FlaskConfig":
        return FlaskConfig(
            SECRET_KEY=self.secret_key,
            MAX_CONTENT_LENGTH=self.json_body_limit,
            SQLALCHEMY_DATABASE_URI=self.database_url,
            SQLALCHEMY_TRACK_MODIFICATIONS=False,
            SQLALCHEMY_ENGINE_OPTIONS=self.sqlalchemy_engine_options,
        )

    def validate_production_config(self) -> None:
        from app.exceptions import ConfigurationError

        errors: list[str] = []

        if self.is_production and self.secret_key == _DEFAULT_SECRET_KEY:
            errors.append(
                "SECRET_KEY must be set to a secure value in production"
            )

        if not 0 <= self.port <= 65535:
            errors.append(f"PORT must be between 0 and 65535, got {self.port}")

        if self.json_body_limit <= 0:
            errors.append("JSON_BODY_LIMIT must be a positive number of bytes")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

    def set_engine_options_override(self, options: dict[str, Any]) -> None:
        """Override SQLAlchemy engine options (used for testing with SQLite)."""

        self.sqlalchemy_engine_options = options

    @classmethod
    def load(cls, env: "Environment | None" = None) -> "Settings":
        if env is None:
            env = Environment()

        # SQLite uses SingletonThreadPool/NullPool and rejects sizing options
        if env.DATABASE_URL.startswith("sqlite"):
            sqlalchemy_engine_options: dict[str, Any] = {}
        else:
            sqlalchemy_engine_options = {
                "pool_size": env.DB_POOL_SIZE,
                "max_overflow": env.DB_POOL_MAX_OVERFLOW,
                "pool_timeout": env.DB_POOL_TIMEOUT,
                "pool_pre_ping": True,
            }

        return cls(
            # Server
            host=env.HOST,
            port=env.PORT,
            secret_key=env.SECRET_KEY,
            flask_env=env.FLASK_ENV,
            debug=env.DEBUG,
            cors_origins=env.CORS_ORIGINS,
            waitress_threads=env.WAITRESS_THREADS,
            graceful_shutdown_timeout=env.GRACEFUL_SHUTDOWN_TIMEOUT,

            # JSON body parsing
            json_body_limit=env.JSON_BODY_LIMIT,
            json_body_strict=env.JSON_BODY_STRICT,

            # Database
            database_url=env.DATABASE_URL,
            db_pool_size=env.DB_POOL_SIZE,
            db_pool_max_overflow=env.DB_POOL_MAX_OVERFLOW,
            db_pool_timeout=env.DB_POOL_TIMEOUT,
            sqlalchemy_engine_options=sqlalchemy_engine_options,
        )


class FlaskConfig:
    """Flask-specific configuration for app.config.from_object()."""

    def __init__(
        self,
        SECRET_KEY: str,
        MAX_CONTENT_LENGTH: int,
        SQLALCHEMY_DATABASE_URI: str,
        SQLALCHEMY_TRACK_MODIFICATIONS: bool,
        SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any],
    ) -> None:
        self.SECRET_KEY = SECRET_KEY
        self.MAX_CONTENT_LENGTH = MAX_CONTENT_LENGTH
        self.SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI
        self.SQLALCHEMY_TRACK_MODIFICATIONS = SQLALCHEMY_TRACK_MODIFICATIONS
        self.SQLALCHEMY_ENGINE_OPTIONS = SQLALCHEMY_ENGINE_OPTIONS
