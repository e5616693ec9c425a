"""Reconciliation of Shopify line items with Notion status records.

Each line item is classified as boot-like and/or blade-like by keyword,
then joined with the order's status record to produce the TrackableItems
shown on the tracking page.

Emission policy: an item is emitted whenever its title classifies. A
missing per-type status does not drop the item; it normalizes to
``placed``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.external_sources.models import (
    OrderLineItem,
    OrderRecord,
    ProductType,
    StatusRecord,
    TrackableItem,
)
from src.services.status_normalizer import normalize_status

BOOT_KEYWORDS = ("boot", "edea", "risport", "jackson")
BLADE_KEYWORDS = ("blade", "wilson", "paramount")

# English month names, independent of the process locale.
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class ProductClassification:
    """Keyword classification of a product title."""

    is_boot: bool
    is_blade: bool


def classify_title(title: str | None) -> ProductClassification:
    """Classify a product title by case-insensitive keyword membership."""
    lowered = (title or "").lower()
    return ProductClassification(
        is_boot=any(keyword in lowered for keyword in BOOT_KEYWORDS),
        is_blade=any(keyword in lowered for keyword in BLADE_KEYWORDS),
    )


def format_review_date(value: str | None, today: date | None = None) -> str:
    """Format a reviewed date as "<day> <Month> <year>", e.g. "5 March 2025".

    Accepts an ISO date or datetime string. Absent or unparseable values
    use ``today`` (the current date by default).
    """
    day = today or date.today()
    if value:
        try:
            day = date.fromisoformat(value[:10])
        except ValueError:
            pass
    return f"{day.day} {_MONTH_NAMES[day.month - 1]} {day.year}"


def _boot_item(
    line_item: OrderLineItem, status: StatusRecord, reviewed: str
) -> TrackableItem:
    return TrackableItem(
        id=f"boot-{line_item.id}",
        type=ProductType.BOOT,
        model=status.boot_model or line_item.title,
        size=status.size or line_item.variant,
        status=normalize_status(status.boot_status),
        supplier=status.supplier,
        location=None,
        estimated_arrival=status.boot_expected_arrival,
        notes=status.boot_notes,
        last_reviewed=reviewed,
    )


def _blade_item(
    line_item: OrderLineItem, status: StatusRecord, reviewed: str
) -> TrackableItem:
    return TrackableItem(
        id=f"blade-{line_item.id}",
        type=ProductType.BLADE,
        model=status.blade_model or line_item.title,
        size=line_item.variant,
        status=normalize_status(status.blade_status),
        supplier=status.supplier,
        location=None,
        estimated_arrival=status.blade_expected_arrival,
        notes=status.blade_notes,
        last_reviewed=reviewed,
    )


def reconcile(
    order: OrderRecord,
    status: StatusRecord,
    today: date | None = None,
) -> list[TrackableItem]:
    """Join an order's line items with its status record.

    Args:
        order: Order with line items, in Shopify order.
        status: The authoritative (first) status record for the order.
        today: Date used when the record has no reviewed date.

    Returns:
        Trackable items in line-item order. A title matching both keyword
        sets yields a boot item followed by a blade item. Unclassified
        titles yield nothing, so the list may be empty.
    """
    reviewed = format_review_date(status.last_reviewed, today)
    items: list[TrackableItem] = []
    for line_item in order.line_items:
        classification = classify_title(line_item.title)
        if classification.is_boot:
            items.append(_boot_item(line_item, status, reviewed))
        if classification.is_blade:
            items.append(_blade_item(line_item, status, reviewed))
    return items
