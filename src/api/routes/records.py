"""FastAPI route for provisioning Notion status records.

Called by the shop's order automation after checkout so every order gets
a tracking row. Safe to call repeatedly for the same order.
"""

import logging

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_config, get_record_provisioner
from src.api.middleware.auth import require_admin_key
from src.api.schemas import CreateRecordRequest, CreateRecordResponse
from src.config import TrackerConfig
from src.errors import InvalidRequestError, UpstreamError
from src.services.provisioning import RecordProvisioner
from src.utils.redaction import redact_for_logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["records"])


@router.post("/create-notion-record", response_model=CreateRecordResponse)
async def create_notion_record(
    body: CreateRecordRequest,
    request: Request,
    config: TrackerConfig = Depends(get_config),
    provisioner: RecordProvisioner = Depends(get_record_provisioner),
) -> CreateRecordResponse:
    """Create the order's status record unless it already exists."""
    logger.debug(
        "create-notion-record request: %s",
        redact_for_logging(body.model_dump(by_alias=True)),
    )
    require_admin_key(request, body.api_key, config.admin_api_key, config.trust_proxy)
    if not body.order_number:
        raise InvalidRequestError.from_code("E-1001")

    try:
        result = await provisioner.create_record_if_absent(
            order_number=body.order_number,
            customer_name=body.customer_name,
            customer_email=body.customer_email,
            line_item_titles=body.line_item_titles,
        )
    except UpstreamError as e:
        raise UpstreamError(
            e.source, e.message, code="E-3002", details=e.details
        ) from e

    if not result.created:
        return CreateRecordResponse(
            message="Record already exists",
            created=False,
            exists=True,
            record_id=result.record_id,
        )
    return CreateRecordResponse(
        message="Notion record created",
        created=True,
        exists=False,
        record_id=result.record_id,
    )
