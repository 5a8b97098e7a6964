"""Tests for configuration management."""

import pytest

from app.config import Environment, Settings
from app.exceptions import ConfigurationError


def test_environment_defaults(monkeypatch):
    """Test Environment loads default values."""
    for name in ("PORT", "HOST", "FLASK_ENV", "SECRET_KEY", "JSON_BODY_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    env = Environment(_env_file=None)

    assert env.PORT == 3000
    assert env.HOST == "0.0.0.0"
    assert env.FLASK_ENV == "development"
    assert env.SECRET_KEY == "dev-secret-key-change-in-production"
    assert env.JSON_BODY_LIMIT == 102400


def test_environment_from_env_vars(monkeypatch):
    """Test Environment loads from environment variables."""
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("FLASK_ENV", "production")
    monkeypatch.setenv("JSON_BODY_STRICT", "false")

    env = Environment(_env_file=None)

    assert env.PORT == 8080
    assert env.FLASK_ENV == "production"
    assert env.JSON_BODY_STRICT is False


def test_settings_extra_env_ignored(monkeypatch):
    """Extra environment variables should be ignored."""
    monkeypatch.setenv("SOME_UNRELATED_SETTING", "42")
    env = Environment(_env_file=None)
    assert not hasattr(env, "SOME_UNRELATED_SETTING")


def test_settings_default_port_is_3000():
    """The listener port defaults to 3000."""
    assert Settings().port == 3000
    assert Settings.load(Environment(_env_file=None, PORT=3000)).port == 3000


def test_settings_load_copies_environment():
    """Test Settings.load() maps environment values onto settings."""
    env = Environment(
        _env_file=None,
        HOST="127.0.0.1",
        PORT=5050,
        WAITRESS_THREADS=8,
        JSON_BODY_LIMIT=2048,
    )
    settings = Settings.load(env)

    assert settings.host == "127.0.0.1"
    assert settings.port == 5050
    assert settings.waitress_threads == 8
    assert settings.json_body_limit == 2048


def test_settings_load_sqlite_has_no_pool_options():
    """SQLite URLs get no pool sizing options."""
    env = Environment(_env_file=None, DATABASE_URL="sqlite:///backend.db")
    settings = Settings.load(env)

    assert settings.sqlalchemy_engine_options == {}


def test_settings_load_engine_options():
    """Test Settings.load() builds engine options from pool settings."""
    env = Environment(
        _env_file=None,
        DATABASE_URL="postgresql+psycopg://user:pw@db:5432/app",
        DB_POOL_SIZE=10,
        DB_POOL_MAX_OVERFLOW=20,
        DB_POOL_TIMEOUT=15,
    )
    settings = Settings.load(env)

    assert settings.sqlalchemy_engine_options["pool_size"] == 10
    assert settings.sqlalchemy_engine_options["max_overflow"] == 20
    assert settings.sqlalchemy_engine_options["pool_timeout"] == 15
    assert settings.sqlalchemy_engine_options["pool_pre_ping"] is True


def test_to_flask_config():
    """Test Settings.to_flask_config() creates FlaskConfig."""
    settings = Settings(json_body_limit=4096, database_url="sqlite://")
    flask_config = settings.to_flask_config()

    assert flask_config.SECRET_KEY == settings.secret_key
    assert flask_config.MAX_CONTENT_LENGTH == 4096
    assert flask_config.SQLALCHEMY_DATABASE_URI == "sqlite://"
    assert flask_config.SQLALCHEMY_TRACK_MODIFICATIONS is False


def test_settings_is_production_property():
    """Test is_production property."""
    assert Settings(flask_env="production").is_production is True
    assert Settings(flask_env="development").is_production is False


def test_settings_is_testing_property():
    """Test is_testing property."""
    assert Settings(flask_env="testing").is_testing is True
    assert Settings(flask_env="development").is_testing is False


class TestValidateProductionConfig:
    """Tests for configuration validation."""

    def test_development_defaults_pass(self):
        """Development defaults should pass validation."""
        Settings().validate_production_config()

    def test_production_default_secret_key_fails(self):
        """Production with default SECRET_KEY should fail."""
        settings = Settings(flask_env="production")
        with pytest.raises(ConfigurationError, match="SECRET_KEY"):
            settings.validate_production_config()

    def test_production_custom_secret_key_passes(self):
        """Production with a custom SECRET_KEY passes."""
        settings = Settings(flask_env="production", secret_key="a-real-secret")
        settings.validate_production_config()

    def test_port_out_of_range_fails(self):
        """Ports outside the TCP range are rejected."""
        settings = Settings(port=70000)
        with pytest.raises(ConfigurationError, match="PORT"):
            settings.validate_production_config()

    def test_non_positive_body_limit_fails(self):
        """A zero body limit is rejected."""
        settings = Settings(json_body_limit=0)
        with pytest.raises(ConfigurationError, match="JSON_BODY_LIMIT"):
            settings.validate_production_config()

    def test_all_errors_reported_together(self):
        """Every failing check is listed in one error."""
        settings = Settings(flask_env="production", port=-1, json_body_limit=0)
        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_production_config()

        message = str(exc_info.value)
        assert "SECRET_KEY" in message
        assert "PORT" in message
        assert "JSON_BODY_LIMIT" in message
