from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.constants import GENERIC_SERVER_ERROR
from ..core.exceptions import DomainError, PersistenceError


def json_body() -> dict:
    """Request payload as a dict; accepts JSON or form posts."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def error_response(exc: DomainError):
    return jsonify({"message": str(exc)}), exc.status_code


def handle_errors(logger: logging.Logger, server_message: str = GENERIC_SERVER_ERROR):
    """Map domain errors to JSON responses at the request boundary.

    Persistence and unexpected failures are logged with traceback and answered
    with `server_message` only.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except PersistenceError:
                logger.exception("store failure in %s", view.__name__)
                return jsonify({"message": server_message}), 500
            except DomainError as e:
                return error_response(e)
            except Exception:
                logger.exception("unhandled error in %s", view.__name__)
                return jsonify({"message": server_message}), 500

        return wrapper

    return decorator
