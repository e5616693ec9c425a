"""Error handling framework for the order tracker.

This package provides:
- Error code registry with E-XXXX format codes
- Typed domain exceptions mapped to HTTP responses

Error categories:
- E-1xxx: Request errors
- E-2xxx: Not-found errors
- E-3xxx: Upstream (Shopify/Notion) errors
- E-4xxx: System/internal errors
- E-5xxx: Authentication errors
"""

from src.errors.domain import (
    InvalidRequestError,
    NotFoundError,
    TrackerError,
    UnauthorizedError,
    UpstreamError,
)
from src.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Domain errors
    "TrackerError",
    "InvalidRequestError",
    "NotFoundError",
    "UnauthorizedError",
    "UpstreamError",
]
