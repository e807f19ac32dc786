from flask import jsonify


class LendTrackError(Exception):
    """Base class for errors the controllers translate into JSON responses."""

    status_code = 500

    def __init__(self, message: str, errors: dict | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class ValidationError(LendTrackError, ValueError):
    status_code = 400


class NotFoundError(LendTrackError, LookupError):
    status_code = 404


class AggregationError(LendTrackError, RuntimeError):
    status_code = 500


def error_response(e: LendTrackError):
    """JSON envelope used by every blueprint: {"success": false, "message": ...}."""
    body = {"success": False, "message": e.message}
    if e.errors:
        body["errors"] = e.errors
    return jsonify(body), e.status_code
