"""Flask error handlers producing the JSON error envelope.

Every error response has the shape::

    {"error": <message>, "details": {...}, "code": <code>, "correlationId": <id>}
"""

import logging
from typing import Any

from flask import Flask, jsonify
from flask.wrappers import Response
from werkzeug.exceptions import (
    BadRequest,
    HTTPException,
    MethodNotAllowed,
    NotFound,
    RequestEntityTooLarge,
)

from app.exceptions import BusinessLogicException
from app.utils import get_current_correlation_id

logger = logging.getLogger(__name__)


def _error_response(
    message: str,
    status_code: int,
    code: str,
    details: dict[str, Any] | None = None,
) -> tuple[Response, int]:
    body = {
        "error": message,
        "details": details or {},
        "code": code,
        "correlationId": get_current_correlation_id(),
    }
    return jsonify(body), status_code


def register_core_error_handlers(app: Flask) -> None:
    """Register handlers for framework-level HTTP errors."""

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest) -> tuple[Response, int]:
        return _error_response(
            error.description or "Bad request", 400, "BAD_REQUEST"
        )

    @app.errorhandler(NotFound)
    def handle_not_found(error: NotFound) -> tuple[Response, int]:
        return _error_response("Not Found", 404, "NOT_FOUND")

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(error: MethodNotAllowed) -> tuple[Response, int]:
        response, status = _error_response(
            "Method Not Allowed",
            405,
            "METHOD_NOT_ALLOWED",
            {"allowed": sorted(error.valid_methods or [])},
        )
        if error.valid_methods:
            response.headers["Allow"] = ", ".join(error.valid_methods)
        return response, status

    @app.errorhandler(RequestEntityTooLarge)
    def handle_payload_too_large(error: RequestEntityTooLarge) -> tuple[Response, int]:
        return _error_response(
            "Request body too large",
            413,
            "PAYLOAD_TOO_LARGE",
            {"limit": app.config.get("MAX_CONTENT_LENGTH")},
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
        if isinstance(error, HTTPException):
            code = (error.name or "error").upper().replace(" ", "_")
            return _error_response(
                error.description or error.name, error.code or 500, code
            )

        logger.exception(f"Unhandled error: {error}")
        return _error_response("Internal server error", 500, "INTERNAL_ERROR")


def register_business_error_handlers(app: Flask) -> None:
    """Register handlers for application exceptions."""

    @app.errorhandler(BusinessLogicException)
    def handle_business_logic_exception(
        error: BusinessLogicException,
    ) -> tuple[Response, int]:
        return _error_response(error.message, 400, error.error_code)
