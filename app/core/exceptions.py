"""
Application errors.

Handlers registered in app.main turn these into JSON responses of the form
{"message": ..., "errors": [...]} with the matching status code.
"""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base error carrying an HTTP status and an optional list of field errors."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.errors = errors
        super().__init__(message)

    def as_dict(self) -> dict:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    """Malformed or missing fields."""

    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


def field_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into [{"field", "message"}] pairs."""
    flattened = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        flattened.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return flattened
