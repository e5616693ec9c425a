"""Idempotent creation of Notion status records for new orders.

Called by the shop's order webhook (through the admin endpoint) so staff
have a tracking row for every order. Existing records are never touched.
"""

import logging
from collections.abc import Callable
from datetime import date

from src.external_sources.clients.notion import NotionClient
from src.external_sources.models import ProvisionResult
from src.services.reconciliation import classify_title

logger = logging.getLogger(__name__)

INITIAL_STATUS = "Placed with Supplier"


def infer_models(line_item_titles: str | None) -> tuple[str, str]:
    """Pick a boot model and a blade model from comma-separated titles.

    The last matching title of each type wins.

    Returns:
        (boot_model, blade_model), each "" when nothing matched.
    """
    boot_model = ""
    blade_model = ""
    titles = [t.strip() for t in (line_item_titles or "").split(",")]
    for title in titles:
        if not title:
            continue
        classification = classify_title(title)
        if classification.is_boot:
            boot_model = title
        if classification.is_blade:
            blade_model = title
    return boot_model, blade_model


class RecordProvisioner:
    """Creates a status record for an order if none exists yet.

    Args:
        notion: Client for the tracking database.
        today: Returns the creation date. Injected for tests.
    """

    def __init__(
        self,
        notion: NotionClient,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._notion = notion
        self._today = today

    async def create_record_if_absent(
        self,
        order_number: str,
        customer_name: str | None = None,
        customer_email: str | None = None,
        line_item_titles: str | None = None,
    ) -> ProvisionResult:
        """Create the order's status record unless one already exists.

        The existence check uses the same lookup as tracking, including the
        '#'-prefixed retry, so "1042" finds a record stored as "#1042".

        Raises:
            UpstreamError: If a Notion request fails.
        """
        existing = await self._notion.fetch_status(order_number)
        if existing:
            logger.info(
                "Status record already exists for order %s (%s)",
                order_number,
                existing[0].id,
            )
            return ProvisionResult(created=False, record_id=existing[0].id)

        boot_model, _ = infer_models(line_item_titles)
        record_id = await self._notion.create_status_record(
            order_number=order_number,
            customer_name=customer_name or "",
            customer_email=customer_email or "",
            boot_model=boot_model,
            initial_status=INITIAL_STATUS,
            reviewed_on=self._today().isoformat(),
        )
        return ProvisionResult(created=True, record_id=record_id)
