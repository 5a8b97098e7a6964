"""Health check endpoints for liveness and readiness."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, jsonify

from app.services.container import ServiceContainer
from app.services.health_service import HealthService

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("/healthz", methods=["GET"])
@inject
def healthz(
    health_service: HealthService = Provide[ServiceContainer.health_service],
) -> Any:
    """Liveness check."""
    body, status = health_service.check_healthz()
    return jsonify(body), status


@health_bp.route("/readyz", methods=["GET"])
@inject
def readyz(
    health_service: HealthService = Provide[ServiceContainer.health_service],
) -> Any:
    """Readiness check. Answers 503 once shutdown has started."""
    body, status = health_service.check_readyz()
    return jsonify(body), status
