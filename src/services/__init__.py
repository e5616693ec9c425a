"""Service layer for the order tracker.

Provides magic-link tokens, status normalization, reconciliation of
Shopify orders with Notion status records, and record provisioning.
"""

from src.services.magic_link import DEFAULT_TOKEN_TTL, MagicLinkCodec
from src.services.provisioning import RecordProvisioner, infer_models
from src.services.reconciliation import classify_title, reconcile
from src.services.status_normalizer import normalize_status
from src.services.tracking_service import TrackingService

__all__ = [
    "DEFAULT_TOKEN_TTL",
    "MagicLinkCodec",
    "RecordProvisioner",
    "TrackingService",
    "classify_title",
    "infer_models",
    "normalize_status",
    "reconcile",
]
