"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
from flask import Flask
from sqlalchemy.pool import StaticPool

from app import create_app
from app.config import Settings
from app.services.container import ServiceContainer


def _build_test_settings() -> Settings:
    """Construct base Settings object for tests."""
    settings = Settings(
        host="127.0.0.1",
        port=0,
        secret_key="test-secret-key",
        debug=True,
        flask_env="testing",
        cors_origins=["http://localhost:3000"],
        waitress_threads=2,
        graceful_shutdown_timeout=5,
        json_body_limit=1024,
        json_body_strict=True,
        database_url="sqlite://",
    )
    settings.set_engine_options_override({
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    })
    return settings


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with in-memory database."""
    return _build_test_settings()


@pytest.fixture
def app(test_settings: Settings) -> Generator[Flask, None, None]:
    """Create Flask app for testing."""
    app = create_app(test_settings)

    try:
        yield app
    finally:
        try:
            app.container.lifecycle_coordinator().shutdown()
        except Exception:
            pass

        with app.app_context():
            from app.extensions import db as flask_db
            flask_db.session.remove()
            flask_db.engine.dispose()


@pytest.fixture
def container(app: Flask) -> ServiceContainer:
    """Access to the app's service container."""
    return app.container


@pytest.fixture
def client(app: Flask):
    """Create test client."""
    return app.test_client()
