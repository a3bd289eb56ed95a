"""
api.errors - JSON bodies for HTTP errors raised under /api/v1.

Import and lookup failures are answered by the routes themselves.
These handlers cover what Werkzeug raises on a route's behalf, such as
an upload over STOCKROOM_MAX_UPLOAD_BYTES or a malformed form body.
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from api import api_bp

logger = logging.getLogger(__name__)


@api_bp.errorhandler(HTTPException)
def api_http_error(exc: HTTPException):
    return jsonify({"error": exc.description, "status": exc.code}), exc.code


@api_bp.errorhandler(500)
def api_server_error(exc):
    cause = getattr(exc, "original_exception", None) or exc
    logger.error(f"Unhandled API error: {cause!r}")
    return jsonify({"error": "internal server error", "status": 500}), 500
