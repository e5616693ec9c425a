"""FastAPI routes for magic tracking links.

Provides the admin endpoint that issues a link for an order and the
public endpoint the tracking page calls with the link's token.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import get_config, get_magic_link_codec, get_tracking_service
from src.api.middleware.auth import require_admin_key
from src.api.schemas import GenerateLinkRequest, GenerateLinkResponse
from src.config import TrackerConfig
from src.errors import InvalidRequestError, UnauthorizedError
from src.external_sources.models import TrackingResponse
from src.services.magic_link import MagicLinkCodec
from src.services.tracking_service import TrackingService
from src.utils.redaction import mask_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tracking"])


@router.post("/generate-link", response_model=GenerateLinkResponse)
def generate_link(
    body: GenerateLinkRequest,
    request: Request,
    config: TrackerConfig = Depends(get_config),
    codec: MagicLinkCodec = Depends(get_magic_link_codec),
) -> GenerateLinkResponse:
    """Issue a magic tracking link for an order.

    Args:
        body: Order number and admin key.
        request: Incoming request, for rate limiting by client IP.
        config: Service configuration.
        codec: Token codec bound to the signing secret.

    Returns:
        The tracking URL and its bare token.
    """
    require_admin_key(request, body.api_key, config.admin_api_key, config.trust_proxy)
    if not body.order_number:
        raise InvalidRequestError.from_code("E-1001")

    token = codec.issue(body.order_number)
    logger.info("Issued tracking link for order %s", body.order_number)
    return GenerateLinkResponse(
        tracking_url=f"{config.base_url}/track?token={token}",
        token=token,
    )


@router.get("/track", response_model=TrackingResponse)
async def track_order(
    token: str | None = Query(None, description="Magic-link token"),
    codec: MagicLinkCodec = Depends(get_magic_link_codec),
    tracking: TrackingService = Depends(get_tracking_service),
) -> TrackingResponse:
    """Return fulfillment status for the order named by the token.

    Args:
        token: Capability token from the tracking link.
        codec: Token codec bound to the signing secret.
        tracking: Tracking service dependency.

    Returns:
        Order summary with one item per tracked boot or blade.
    """
    if not token:
        raise InvalidRequestError.from_code("E-1002")

    order_number = codec.validate(token)
    if order_number is None:
        logger.warning("Rejected tracking token %s", mask_token(token))
        raise UnauthorizedError.from_code("E-5002")

    return await tracking.track(order_number)
