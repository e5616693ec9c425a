"""Status label normalization.

Maps the select labels used in the Notion tracking database to the small
closed set of canonical status keys the tracking page understands.
Unknown labels fall back to ``placed`` with a warning; they are never an
error for the caller.
"""

import logging

from src.external_sources.models import StatusKey

logger = logging.getLogger(__name__)

DEFAULT_STATUS = StatusKey.PLACED

STATUS_LABELS: dict[str, StatusKey] = {
    "Placed with Supplier": StatusKey.PLACED,
    "Not in UK": StatusKey.NOT_IN_UK,
    "On the way": StatusKey.ON_THE_WAY,
    "Ready to try on": StatusKey.READY_TO_TRY,
    "Collected": StatusKey.COLLECTED,
}

_LABELS_CASEFOLDED: dict[str, StatusKey] = {
    label.casefold(): key for label, key in STATUS_LABELS.items()
}


def normalize_status(raw_status: str | None) -> StatusKey:
    """Map a raw status label to its canonical key.

    Exact match first, then case-insensitive. Surrounding whitespace is
    ignored.

    Args:
        raw_status: Label from the status record, or None when unset.

    Returns:
        The canonical StatusKey; ``placed`` when the label is unknown.
    """
    label = raw_status.strip() if isinstance(raw_status, str) else ""

    key = STATUS_LABELS.get(label) or _LABELS_CASEFOLDED.get(label.casefold())
    if key is not None:
        return key

    logger.warning(
        "Unrecognized status label %r, defaulting to %s",
        raw_status,
        DEFAULT_STATUS.value,
        extra={"raw_status": raw_status, "fallback_status": DEFAULT_STATUS.value},
    )
    return DEFAULT_STATUS
