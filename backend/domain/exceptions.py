"""Application error taxonomy.

Each error carries the HTTP status it maps to and a message that is safe to
show to the client. Internal diagnostics belong in the logs, not here.
"""

from typing import Any, Dict, List, Optional


class RapmaniaError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(RapmaniaError):
    """Malformed or out-of-range input."""
    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.errors:
            data["errors"] = self.errors
        return data

    @classmethod
    def from_pydantic(cls, errors: List[Dict[str, Any]], skip_locs: tuple = ("body", "query", "path")) -> "ValidationError":
        """Build from pydantic's `errors()` list, one entry per field."""
        field_errors = []
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part not in skip_locs]
            field_errors.append({"field": ".".join(loc) or "request", "message": err.get("msg", "Invalid value")})
        summary = "; ".join(f"{e['message']} at \"{e['field']}\"" for e in field_errors)
        return cls(f"Validation error: {summary}" if summary else None, errors=field_errors)


class AuthenticationError(RapmaniaError):
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(RapmaniaError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(RapmaniaError):
    status_code = 404
    default_message = "Not found"


class ConfigurationError(RapmaniaError):
    """The service cannot run the request until an operator fixes its setup."""
    status_code = 500
    default_message = "Service misconfigured"


class GenerationError(RapmaniaError):
    status_code = 500
    default_message = "Error generating rap lyrics"


class GenerationPreconditionError(ValueError):
    """Raised by the rap generator before any provider call when topic or genre is empty."""
