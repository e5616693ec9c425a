"""Typed domain exceptions for API error mapping.

Services raise these; the FastAPI exception handler in src/api/main.py
renders them using the registry's public message and HTTP status.

Usage:
    # In service layer
    raise NotFoundError.from_code("E-2001", order_number=order_number)

    # In a client adapter
    raise UpstreamError("shopify", "503 Service Unavailable")
"""

from src.errors.registry import get_error

_FALLBACK_STATUS = 500


class TrackerError(Exception):
    """Base exception for all domain errors.

    Attributes:
        code: Error code in E-XXXX format.
        message: Internal message (logged, never sent to clients).
        details: Additional context for diagnostics.
    """

    default_code = "E-4001"

    def __init__(
        self,
        message: str = "",
        code: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.code = code or self.default_code
        self.message = message or self.public_message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_code(cls, code: str, **details: object) -> "TrackerError":
        """Create an error for a registry code, keeping context as details."""
        error_def = get_error(code)
        message = error_def.title if error_def else f"Unknown error: {code}"
        return cls(message=message, code=code, details=dict(details))

    @property
    def public_message(self) -> str:
        """Message safe to return to API callers."""
        error_def = get_error(self.code)
        return error_def.message_template if error_def else "Internal server error"

    @property
    def http_status(self) -> int:
        error_def = get_error(self.code)
        return error_def.http_status if error_def else _FALLBACK_STATUS


class InvalidRequestError(TrackerError):
    """Malformed or incomplete request. Maps to HTTP 400."""

    default_code = "E-1003"


class NotFoundError(TrackerError):
    """Order or status record was not found. Maps to HTTP 404."""

    default_code = "E-2001"


class UnauthorizedError(TrackerError):
    """Bad admin key or capability token. Maps to HTTP 401."""

    default_code = "E-5001"


class UpstreamError(TrackerError):
    """An external system call failed. Maps to HTTP 500.

    The source is kept for diagnostics only; responses never name it.
    """

    default_code = "E-3001"

    def __init__(
        self,
        source: str,
        message: str = "",
        code: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.source = source
        super().__init__(message=message, code=code, details=details)

    def __str__(self) -> str:
        return f"{self.code}: [{self.source}] {self.message}"
