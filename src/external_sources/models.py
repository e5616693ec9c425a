"""Models for the external order and status sources.

Wire names are camelCase (the tracking page's contract); attribute names
stay snake_case.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StatusKey(str, Enum):
    """Canonical fulfillment status keys shown on the tracking page."""

    PLACED = "placed"
    NOT_IN_UK = "not-in-uk"
    ON_THE_WAY = "on-the-way"
    READY_TO_TRY = "ready-to-try"
    COLLECTED = "collected"


class ProductType(str, Enum):
    """Trackable product kinds."""

    BOOT = "Boot"
    BLADE = "Blade"


class TrackerModel(BaseModel):
    """Base model with camelCase aliases, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderLineItem(TrackerModel):
    """One line item of a commerce order."""

    id: str = Field(..., description="Platform line item ID")
    title: str = Field(default="", description="Product title")
    variant: str | None = Field(None, description="Variant title, e.g. size")
    quantity: int = Field(default=1, description="Ordered quantity")
    sku: str | None = Field(None, description="Stock keeping unit")
    properties: list[dict[str, Any]] = Field(
        default_factory=list, description="Free-form line item properties"
    )


class OrderRecord(TrackerModel):
    """Order from the commerce platform, normalized format."""

    order_number: str = Field(..., description="Human-readable order number")
    customer_name: str = Field(default="", description="Customer full name")
    customer_email: str | None = Field(None, description="Customer email")
    order_date: str | None = Field(None, description="Order creation timestamp")
    line_items: list[OrderLineItem] = Field(default_factory=list)


class StatusRecord(TrackerModel):
    """Per-order fulfillment status kept in the Notion database."""

    id: str = Field(..., description="Notion page ID")
    order_number: str | None = None
    boot_model: str | None = None
    blade_model: str | None = None
    size: str | None = None
    customer_name: str | None = None
    contact_details: str | None = None
    internal_status: str | None = None
    boot_status: str | None = None
    blade_status: str | None = None
    boot_notes: str = ""
    blade_notes: str = ""
    boot_expected_arrival: str | None = None
    blade_expected_arrival: str | None = None
    last_reviewed: str | None = Field(None, description="ISO date of last review")
    supplier: str | None = None


class TrackableItem(TrackerModel):
    """A line item joined with its status, as shown to the customer."""

    id: str = Field(..., description="Type-prefixed synthetic ID")
    type: ProductType = Field(..., alias="type")
    model: str | None = None
    size: str | None = None
    status: StatusKey
    supplier: str | None = None
    location: str | None = None
    estimated_arrival: str | None = None
    notes: str = ""
    last_reviewed: str = Field(..., description="Display date, e.g. '5 March 2025'")


class TrackingResponse(TrackerModel):
    """Payload returned by the track endpoint."""

    order_number: str
    customer_name: str
    order_date: str | None = None
    items: list[TrackableItem] = Field(default_factory=list)


class ProvisionResult(TrackerModel):
    """Outcome of an idempotent status-record creation."""

    created: bool
    record_id: str | None = None
