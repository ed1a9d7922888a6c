from __future__ import annotations

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    DuplicateSubmissionError,
    QueueFullError,
    ValidationError,
)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (DuplicateSubmissionError, 409),
    (QueueFullError, 503),
)


def json_message(message: str, status: int = 200, **extra):
    return jsonify({"message": message, **extra}), status


def domain_error_response(exc: DomainError):
    """Map a business error to its HTTP status; anything unlisted is a 500."""
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return json_message(str(exc), status)
    return json_message(str(exc) or "Server error", 500)
