from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import (
    AttendanceCompletedError,
    NotFoundError,
    RetryableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, **extra):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def json_errors(failure_message: str):
    """Map domain errors raised by a view to JSON error responses."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except AttendanceCompletedError as e:
                return error_response(str(e), 409)
            except ValidationError as e:
                return error_response(str(e), 400)
            except NotFoundError as e:
                return error_response(str(e), 404)
            except RetryableError as e:
                logger.warning("%s: %s", failure_message, e)
                return error_response(f"{failure_message}. Please try again.", 503, retryable=True)
            except Exception:
                logger.exception(failure_message)
                return error_response(failure_message, 500)

        return wrapper

    return decorator
