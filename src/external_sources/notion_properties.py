"""Notion page property adapter.

Notion returns each database column as a typed property object, and the
tracking database has used more than one type for some columns (Contact
Details as email or text, Supplier as select or text). This module parses
raw properties into explicit tagged types and maps a whole page onto a
StatusRecord, so the rest of the code never touches Notion's JSON shape.

Column names of the tracking database live in the constants below.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from src.external_sources.models import StatusRecord

ORDER_NUMBER = "Order Number"
BOOT_MODEL = "Model of Boot"
BLADE_MODEL = "Model of Blade"
SIZE = "Size"
CUSTOMER_NAME = "Customer Name"
CONTACT_DETAILS = "Contact Details"
INTERNAL_STATUS = "Status"
BOOT_STATUS = "Boot Status"
BLADE_STATUS = "Blade Status"
BOOT_NOTES = "Boot Notes"
BLADE_NOTES = "Blade Notes"
BOOT_EXPECTED_ARRIVAL = "Boot Expected Arrival"
BLADE_EXPECTED_ARRIVAL = "Blade Expected Arrival"
LAST_REVIEWED = "Last Reviewed"
SUPPLIER = "Supplier"


class TitleProperty(BaseModel):
    type: Literal["title"]
    value: str | None = None


class TextProperty(BaseModel):
    type: Literal["rich_text"]
    value: str | None = None


class SelectProperty(BaseModel):
    type: Literal["select"]
    value: str | None = None


class DateProperty(BaseModel):
    type: Literal["date"]
    value: str | None = Field(None, description="ISO start date")


class EmailProperty(BaseModel):
    type: Literal["email"]
    value: str | None = None


NotionProperty = Annotated[
    Union[TitleProperty, TextProperty, SelectProperty, DateProperty, EmailProperty],
    Field(discriminator="type"),
]

_PROPERTY_ADAPTER = TypeAdapter(NotionProperty)

# Checked in order when a raw property carries no "type" tag.
_KNOWN_KINDS = ("title", "rich_text", "select", "date", "email")


def _first_plain_text(fragments: Any) -> str | None:
    """Return the first fragment's text content, as the tracker always has."""
    if not isinstance(fragments, list) or not fragments:
        return None
    first = fragments[0] or {}
    text = first.get("text") or {}
    content = text.get("content")
    if content is None:
        content = first.get("plain_text")
    return content


def _raw_value(kind: str, raw: dict[str, Any]) -> str | None:
    body = raw.get(kind)
    if kind in ("title", "rich_text"):
        return _first_plain_text(body)
    if kind == "select":
        return body.get("name") if isinstance(body, dict) else None
    if kind == "date":
        return body.get("start") if isinstance(body, dict) else None
    if kind == "email":
        return body if isinstance(body, str) else None
    return None


def parse_property(raw: dict[str, Any] | None) -> NotionProperty | None:
    """Parse one raw Notion property into its tagged type.

    Returns:
        The parsed property, or None for missing or unsupported kinds.
    """
    if not isinstance(raw, dict):
        return None
    kind = raw.get("type")
    if kind is None:
        kind = next((k for k in _KNOWN_KINDS if k in raw), None)
    if kind not in _KNOWN_KINDS:
        return None
    try:
        return _PROPERTY_ADAPTER.validate_python(
            {"type": kind, "value": _raw_value(kind, raw)}
        )
    except ValidationError:
        return None


def _value(
    properties: dict[str, Any],
    name: str,
    *kinds: type[BaseModel],
) -> str | None:
    parsed = parse_property(properties.get(name))
    if parsed is None or (kinds and not isinstance(parsed, kinds)):
        return None
    return parsed.value


def map_status_record(page: dict[str, Any]) -> StatusRecord:
    """Map a raw Notion page onto a StatusRecord.

    Args:
        page: Page object as returned by the database query endpoint.

    Returns:
        StatusRecord with absent columns left as None (notes as "").
    """
    props = page.get("properties") or {}
    return StatusRecord(
        id=page.get("id", ""),
        order_number=_value(props, ORDER_NUMBER, TextProperty, TitleProperty),
        boot_model=_value(props, BOOT_MODEL, TextProperty),
        blade_model=_value(props, BLADE_MODEL, TextProperty),
        size=_value(props, SIZE, TextProperty),
        customer_name=_value(props, CUSTOMER_NAME, TitleProperty, TextProperty),
        contact_details=_value(props, CONTACT_DETAILS, EmailProperty, TextProperty),
        internal_status=_value(props, INTERNAL_STATUS, SelectProperty),
        boot_status=_value(props, BOOT_STATUS, SelectProperty),
        blade_status=_value(props, BLADE_STATUS, SelectProperty),
        boot_notes=_value(props, BOOT_NOTES, TextProperty) or "",
        blade_notes=_value(props, BLADE_NOTES, TextProperty) or "",
        boot_expected_arrival=_value(props, BOOT_EXPECTED_ARRIVAL, DateProperty),
        blade_expected_arrival=_value(props, BLADE_EXPECTED_ARRIVAL, DateProperty),
        last_reviewed=_value(props, LAST_REVIEWED, DateProperty),
        supplier=_value(props, SUPPLIER, SelectProperty, TextProperty),
    )


# --- Builders for page creation ---


def text_value(content: str) -> dict[str, Any]:
    return {"rich_text": [{"text": {"content": content}}]}


def title_value(content: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": content}}]}


def select_value(name: str) -> dict[str, Any]:
    return {"select": {"name": name}}


def date_value(start: str) -> dict[str, Any]:
    return {"date": {"start": start}}


def order_number_filter(order_number: str) -> dict[str, Any]:
    """Database query filter matching the Order Number column exactly."""
    return {"property": ORDER_NUMBER, "rich_text": {"equals": order_number}}
