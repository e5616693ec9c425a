"""Tests for joining line items with status records."""

from datetime import date

import pytest

from src.external_sources.models import (
    OrderLineItem,
    OrderRecord,
    ProductType,
    StatusKey,
    StatusRecord,
)
from src.services.reconciliation import classify_title, format_review_date, reconcile

TODAY = date(2025, 6, 1)


def _order(*items: tuple[str, str, str | None]) -> OrderRecord:
    return OrderRecord(
        order_number="#1042",
        customer_name="Ada Skater",
        line_items=[
            OrderLineItem(id=item_id, title=title, variant=variant)
            for item_id, title, variant in items
        ],
    )


class TestClassifyTitle:
    """Keyword classification."""

    @pytest.mark.parametrize(
        "title", ["Edea Boots", "RISPORT RF3", "Jackson Ultima Elite", "Custom boot"]
    )
    def test_boot_like(self, title):
        result = classify_title(title)
        assert result.is_boot and not result.is_blade

    @pytest.mark.parametrize("title", ["Wilson Blade", "John Wilson Gold Seal", "Paramount"])
    def test_blade_like(self, title):
        result = classify_title(title)
        assert result.is_blade and not result.is_boot

    def test_both(self):
        result = classify_title("Edea boot and blade package")
        assert result.is_boot and result.is_blade

    @pytest.mark.parametrize("title", ["Skate guards", "", None])
    def test_neither(self, title):
        result = classify_title(title)
        assert not result.is_boot and not result.is_blade


class TestFormatReviewDate:
    def test_iso_date(self):
        assert format_review_date("2025-03-05") == "5 March 2025"

    def test_iso_datetime(self):
        assert format_review_date("2024-12-25T10:00:00.000Z") == "25 December 2024"

    def test_absent_uses_today(self):
        assert format_review_date(None, today=TODAY) == "1 June 2025"

    def test_unparseable_uses_today(self):
        assert format_review_date("last week", today=TODAY) == "1 June 2025"


class TestReconcile:
    """Reconciliation of orders against one status record."""

    def test_boot_and_blade_statuses_in_line_item_order(self):
        order = _order(("1", "Edea Boots", "UK 5"), ("2", "Wilson Blade", "9.5"))
        status = StatusRecord(
            id="page-1", boot_status="Collected", blade_status="Not in UK"
        )

        items = reconcile(order, status, today=TODAY)

        assert [i.type for i in items] == [ProductType.BOOT, ProductType.BLADE]
        assert [i.status for i in items] == [StatusKey.COLLECTED, StatusKey.NOT_IN_UK]
        assert [i.id for i in items] == ["boot-1", "blade-2"]

    def test_record_overrides_model_and_size(self):
        order = _order(("1", "Edea Boots", "UK 5"), ("2", "Wilson Blade", "9.5"))
        status = StatusRecord(
            id="page-1",
            boot_model="Edea Ice Fly",
            blade_model="Gold Seal",
            size="235C",
            boot_status="On the way",
            blade_status="On the way",
        )

        boot, blade = reconcile(order, status, today=TODAY)

        assert (boot.model, boot.size) == ("Edea Ice Fly", "235C")
        # Size on the record is the boot size; blades keep the variant.
        assert (blade.model, blade.size) == ("Gold Seal", "9.5")

    def test_falls_back_to_line_item_title_and_variant(self):
        order = _order(("1", "Edea Boots", "UK 5"))
        status = StatusRecord(id="page-1", boot_status="Collected")

        (boot,) = reconcile(order, status, today=TODAY)

        assert (boot.model, boot.size) == ("Edea Boots", "UK 5")

    def test_missing_per_type_status_still_emits_placed(self):
        order = _order(("1", "Edea Boots", None), ("2", "Wilson Blade", None))
        status = StatusRecord(id="page-1", boot_status="Collected")

        items = reconcile(order, status, today=TODAY)

        assert [i.status for i in items] == [StatusKey.COLLECTED, StatusKey.PLACED]

    def test_notes_supplier_and_arrival_per_type(self):
        order = _order(("1", "Risport Boots", None), ("2", "Paramount Blade", None))
        status = StatusRecord(
            id="page-1",
            supplier="Skate Supplies Ltd",
            boot_notes="Heat moulding booked",
            blade_notes="Awaiting stock",
            boot_expected_arrival="2025-07-01",
            blade_expected_arrival="2025-07-15",
            last_reviewed="2025-03-05",
        )

        boot, blade = reconcile(order, status, today=TODAY)

        assert boot.notes == "Heat moulding booked"
        assert blade.notes == "Awaiting stock"
        assert boot.supplier == blade.supplier == "Skate Supplies Ltd"
        assert boot.estimated_arrival == "2025-07-01"
        assert blade.estimated_arrival == "2025-07-15"
        assert boot.last_reviewed == blade.last_reviewed == "5 March 2025"
        assert boot.location is None

    def test_no_reviewed_date_uses_today(self):
        order = _order(("1", "Edea Boots", None))
        (boot,) = reconcile(order, StatusRecord(id="p"), today=TODAY)
        assert boot.last_reviewed == "1 June 2025"

    def test_title_matching_both_yields_boot_then_blade(self):
        order = _order(("7", "Jackson boot + Wilson blade set", None))
        items = reconcile(order, StatusRecord(id="p"), today=TODAY)
        assert [i.id for i in items] == ["boot-7", "blade-7"]

    def test_unclassified_items_are_skipped(self):
        order = _order(("1", "Skate guards", None), ("2", "Edea Boots", None))
        items = reconcile(order, StatusRecord(id="p"), today=TODAY)
        assert [i.id for i in items] == ["boot-2"]

    def test_no_classified_items_gives_empty_list(self):
        order = _order(("1", "Gift card", None))
        assert reconcile(order, StatusRecord(id="p"), today=TODAY) == []

    def test_serializes_with_camel_case_wire_names(self):
        order = _order(("1", "Edea Boots", "UK 5"))
        status = StatusRecord(id="p", boot_status="Collected", last_reviewed="2025-03-05")

        (boot,) = reconcile(order, status, today=TODAY)
        wire = boot.model_dump(mode="json", by_alias=True)

        assert wire == {
            "id": "boot-1",
            "type": "Boot",
            "model": "Edea Boots",
            "size": "UK 5",
            "status": "collected",
            "supplier": None,
            "location": None,
            "estimatedArrival": None,
            "notes": "",
            "lastReviewed": "5 March 2025",
        }
