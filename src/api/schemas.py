"""Pydantic schemas for API request/response validation.

This module defines the data contracts for the tracker's REST API. Field
names travel as camelCase on the wire, matching the shop automation and
the tracking page.
"""

from pydantic import ConfigDict, Field

from src.external_sources.models import TrackerModel


class AdminRequest(TrackerModel):
    """Base for admin requests authenticated by a body field.

    Every field is optional so that a missing key or order number is
    answered with 401/400 rather than a schema error.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    order_number: str | None = None
    api_key: str | None = None


class CreateRecordRequest(AdminRequest):
    """Request body for provisioning a Notion status record."""

    customer_name: str | None = None
    customer_email: str | None = None
    line_item_titles: str | None = Field(
        None, description="Comma-separated Shopify line item titles"
    )


class GenerateLinkRequest(AdminRequest):
    """Request body for issuing a magic tracking link."""


class CreateRecordResponse(TrackerModel):
    """Response from record provisioning."""

    message: str
    created: bool
    exists: bool
    record_id: str | None = None


class GenerateLinkResponse(TrackerModel):
    """Response carrying the customer's tracking link."""

    tracking_url: str
    token: str


class HealthResponse(TrackerModel):
    """Health check payload."""

    message: str


class ErrorResponse(TrackerModel):
    """Uniform error body."""

    error: str
    error_code: str | None = Field(None, alias="error_code")
