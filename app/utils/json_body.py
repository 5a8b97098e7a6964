"""JSON request body parsing middleware.

Parses JSON request bodies before they reach route handlers and stores the
result on ``g.json_body``. Only requests with a JSON content type
(``application/json`` or ``application/*+json``) are parsed. The body size
limit is enforced by Flask through ``MAX_CONTENT_LENGTH``, which answers 413
once the body is read. Flask applies that limit to every request body, not
only JSON ones, so form and raw uploads share ``JSON_BODY_LIMIT``.

``NaN``, ``Infinity`` and ``-Infinity`` are not JSON and are rejected, as is
nesting deep enough to exhaust the decoder's recursion limit.
"""

import logging
from typing import Any

from flask import Flask, current_app, g, request

from app.exceptions import InvalidJsonException

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def get_json_body() -> Any:
    """Return the parsed JSON body of the current request, or None."""
    return g.get("json_body")


def init_json_body_parsing(app: Flask, strict: bool = True) -> None:
    """Register the before_request hook that parses JSON request bodies.

    Args:
        app: Flask application to register the hook on
        strict: Only accept objects and arrays at the top level
    """

    @app.before_request
    def parse_json_body() -> None:
        g.json_body = None

        if not request.is_json:
            return

        # Raises RequestEntityTooLarge when the body exceeds MAX_CONTENT_LENGTH
        raw = request.get_data(cache=True)
        if not raw.strip():
            return

        try:
            body = current_app.json.loads(raw, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            logger.debug(f"Rejecting malformed JSON body on {request.path}: {e}")
            raise InvalidJsonException(str(e)) from e

        if strict and not isinstance(body, (dict, list)):
            raise InvalidJsonException(
                f"top-level value must be an object or array, got {type(body).__name__}"
            )

        g.json_body = body
