"""Error code registry with E-XXXX format codes.

This module defines the error code system for the order tracker, organizing
errors into categories:
- E-1xxx: Request errors (malformed or incomplete input)
- E-2xxx: Not-found errors (order or status record missing)
- E-3xxx: Upstream errors (Shopify or Notion call failed)
- E-4xxx: System/internal errors
- E-5xxx: Authentication errors

Each error includes a code, title, public message template and the HTTP
status the API answers with.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    REQUEST = "request"  # E-1xxx
    NOT_FOUND = "not_found"  # E-2xxx
    UPSTREAM = "upstream"  # E-3xxx
    SYSTEM = "system"  # E-4xxx
    AUTH = "auth"  # E-5xxx


@dataclass(frozen=True)
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for logs.
        message_template: Public message with {placeholders} for context.
        http_status: Status code returned by the API.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    http_status: int


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Request errors (E-1xxx)
    "E-1001": ErrorCode(
        code="E-1001",
        category=ErrorCategory.REQUEST,
        title="Missing Order Number",
        message_template="Order number required",
        http_status=400,
    ),
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.REQUEST,
        title="Missing Token",
        message_template="Token required",
        http_status=400,
    ),
    "E-1003": ErrorCode(
        code="E-1003",
        category=ErrorCategory.REQUEST,
        title="Malformed Request Body",
        message_template="Invalid request body",
        http_status=400,
    ),
    # Not found (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.NOT_FOUND,
        title="Order Not Found",
        message_template="Order not found",
        http_status=404,
    ),
    # Upstream (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.UPSTREAM,
        title="Upstream Request Failed",
        message_template="Internal server error",
        http_status=500,
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        category=ErrorCategory.UPSTREAM,
        title="Record Creation Failed",
        message_template="Failed to create Notion record",
        http_status=500,
    ),
    # System (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.SYSTEM,
        title="Internal Error",
        message_template="Internal server error",
        http_status=500,
    ),
    # Auth (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        category=ErrorCategory.AUTH,
        title="Bad Admin Key",
        message_template="Unauthorized",
        http_status=401,
    ),
    "E-5002": ErrorCode(
        code="E-5002",
        category=ErrorCategory.AUTH,
        title="Invalid Capability Token",
        message_template="Invalid or expired token",
        http_status=401,
    ),
    "E-5003": ErrorCode(
        code="E-5003",
        category=ErrorCategory.AUTH,
        title="Auth Rate Limited",
        message_template="Too many authentication failures. Try again later.",
        http_status=429,
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Look up error code definition.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all error codes in a category.

    Args:
        category: The category to filter by.

    Returns:
        List of ErrorCode objects in that category.
    """
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
