import re
from datetime import datetime, timezone

from flask import request

from lendtrack.utils.errors import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

BODY_NOT_OBJECT = "request body must be a JSON object"


def as_object(data) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(BODY_NOT_OBJECT)
    return data


def json_body() -> dict:
    """JSON object of the current request; {} when the body is empty or not JSON."""
    return as_object(request.get_json(silent=True))


class FormValidator:
    """
    Collects field errors while reading a JSON body.
    Call .raise_if_errors() at the end; every problem is reported at once.
    """

    def __init__(self, data: dict | None):
        self.data = as_object(data)
        self.errors = {}
        self.cleaned = {}

    def _raw(self, field):
        value = self.data.get(field)
        if isinstance(value, str):
            value = value.strip()
        return value if value not in ("", None) else None

    def string(self, field, required=False, max_length=255):
        value = self._raw(field)
        if value is None:
            if required:
                self.errors[field] = f"{field} is required"
            self.cleaned[field] = None
            return None

        value = str(value)
        if len(value) > max_length:
            self.errors[field] = f"{field} may not be longer than {max_length} characters"
        self.cleaned[field] = value
        return value

    def email(self, field="email", required=True, max_length=255):
        value = self.string(field, required=required, max_length=max_length)
        if value is not None and not _EMAIL_RE.match(value):
            self.errors[field] = f"{field} must be a valid email address"
        return value

    def datetime(self, field, required=False):
        raw = self._raw(field)
        if raw is None:
            if required:
                self.errors[field] = f"{field} is required"
            self.cleaned[field] = None
            return None

        value = parse_datetime(raw)
        if value is None:
            self.errors[field] = f"{field} must be a valid date"
        self.cleaned[field] = value
        return value

    def integer(self, field, required=False):
        raw = self._raw(field)
        if raw is None:
            if required:
                self.errors[field] = f"{field} is required"
            self.cleaned[field] = None
            return None
        try:
            value = int(raw)
        except (TypeError, ValueError):
            self.errors[field] = f"{field} must be an integer"
            value = None
        self.cleaned[field] = value
        return value

    def error(self, field, message):
        self.errors.setdefault(field, message)

    def raise_if_errors(self):
        if self.errors:
            first = next(iter(self.errors.values()))
            raise ValidationError(first, self.errors)
        return self.cleaned


def parse_datetime(value):
    """
    ISO-8601 strings ("2025-01-01T09:00", "2025-01-01 09:00:00", "2025-01-01").
    Aware values are converted to naive UTC; everything is stored naive UTC.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt