"""Flask application factory."""

import logging

from flask import request
from flask.wrappers import Response
from flask_cors import CORS

from app.app import App
from app.config import Settings
from app.extensions import db

logger = logging.getLogger(__name__)


def create_app(settings: "Settings | None" = None, skip_background_services: bool = False) -> App:
    """Create and configure the Flask application.

    The application carries JSON body parsing, correlation IDs, CORS, JSON
    error responses and the /health and /metrics endpoints. It registers no
    application routes, so any other path answers 404.

    Args:
        settings: Optional settings instance (loaded from the environment if not provided)
        skip_background_services: Skip connecting the database and firing
            startup (for CLI/tests)

    Returns:
        Configured Flask application instance
    """
    app = App(__name__)

    # Load configuration
    if settings is None:
        settings = Settings.load()

    # Validate configuration before proceeding
    settings.validate_production_config()

    app.config.from_object(settings.to_flask_config())

    # Initialize extensions
    db.init_app(app)

    # Initialize service container
    from app.services.container import ServiceContainer

    container = ServiceContainer()
    container.config.override(settings)

    # Wire container to all API modules via package scanning
    container.wire(packages=["app.api"])

    app.container = container

    # Configure CORS
    CORS(app, origins=settings.cors_origins)

    # Correlation ID must be set before body parsing so parse errors carry it
    from app.utils import _init_request_id
    _init_request_id(app)

    from app.utils.json_body import init_json_body_parsing
    init_json_body_parsing(app, strict=settings.json_body_strict)

    # Register error handlers
    from app.utils.flask_error_handlers import (
        register_business_error_handlers,
        register_core_error_handlers,
    )

    register_core_error_handlers(app)
    register_business_error_handlers(app)

    # Register database health check with HealthService
    from app import database as _database_module

    health_service = container.health_service()

    def _check_db_readiness() -> dict:
        # Look up via module to allow test patching
        connected = _database_module.check_db_connection()
        return {"connected": connected, "ok": connected}

    health_service.register_readyz("database", _check_db_readiness)

    # Operational blueprints
    from app.api.health import health_bp
    from app.api.metrics import metrics_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_bp)

    metrics_service = container.metrics_service()

    @app.after_request
    def record_request_metrics(response: Response) -> Response:
        metrics_service.record_request(request.method, response.status_code)
        return response

    if not skip_background_services:
        _database_module.connect_database(app)

        # Signal that application startup is complete
        container.lifecycle_coordinator().fire_startup()

    return app
