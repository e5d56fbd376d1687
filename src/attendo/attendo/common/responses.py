from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, *, code: str | None = None):
    body = {"success": False, "message": message}
    if code:
        body["code"] = code
    return jsonify(body), status


def json_endpoint(view):
    """Map domain errors of a JSON view to HTTP responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_error(str(e), 400, code=e.code)
        except StoreError as e:
            logger.error("Store failure in %s: %s", view.__name__, e)
            return json_error("Attendance data is temporarily unavailable", 503)
        except Exception:
            logger.exception("Unexpected error in %s", view.__name__)
            return json_error("Internal error", 500)

    return wrapper
