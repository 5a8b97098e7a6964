"""Database connection management."""

import logging

from flask import Flask
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError

from app.exceptions import DatabaseConnectionError
from app.extensions import db

logger = logging.getLogger(__name__)


def get_engine() -> Engine:
    return db.engine


def mask_database_url(url: str) -> str:
    """Return the database URL with the password replaced by asterisks."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return url


def connect_database(app: Flask) -> None:
    """Open a connection to the configured database and verify it responds.

    Raises:
        DatabaseConnectionError: if the database cannot be reached
    """
    masked_url = mask_database_url(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    with app.app_context():
        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            raise DatabaseConnectionError(masked_url, e) from e

    logger.info(f"Database connected: {masked_url}")


def check_db_connection() -> bool:
    try:
        with db.engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception as e:
        logger.warning(f"Checking database connection failed: {e}")
        return False
