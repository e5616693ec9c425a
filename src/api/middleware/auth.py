"""Admin-key checks for the provisioning and link-generation endpoints.

Security note: the admin key is one shared static secret sent in the
request body. It is a coarse capability for the shop's automation, not
per-caller authentication; every holder has the same privilege.
"""

from __future__ import annotations

import hmac
import logging
import threading
import time

from fastapi import Request

from src.errors import UnauthorizedError

logger = logging.getLogger(__name__)

# --- Rate limiting for auth failures ---
_AUTH_FAIL_MAX = 10  # Max failures per IP in the time window
_AUTH_FAIL_WINDOW_SECONDS = 300  # 5-minute sliding window
_auth_failures: dict[str, list[float]] = {}
_auth_lock = threading.Lock()  # Protects _auth_failures


def _get_client_ip(request: Request, trust_proxy: bool = False) -> str:
    """Extract client IP from request.

    Only uses X-Forwarded-For when the deployment sits behind a trusted
    reverse proxy; otherwise clients could spoof IPs to dodge the limiter.
    """
    if trust_proxy:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _is_rate_limited(client_ip: str) -> bool:
    """Check if the client IP has exceeded the auth failure rate limit.

    Args:
        client_ip: Client IP address.

    Returns:
        True if the client should be blocked.
    """
    with _auth_lock:
        now = time.monotonic()
        timestamps = _auth_failures.get(client_ip, [])
        # Prune expired entries
        timestamps = [t for t in timestamps if now - t < _AUTH_FAIL_WINDOW_SECONDS]
        if timestamps:
            _auth_failures[client_ip] = timestamps
        else:
            _auth_failures.pop(client_ip, None)
        return len(timestamps) >= _AUTH_FAIL_MAX


def _record_auth_failure(client_ip: str) -> None:
    with _auth_lock:
        now = time.monotonic()
        # Drop clients whose failures have all aged out of the window
        stale = [
            ip
            for ip, timestamps in _auth_failures.items()
            if not timestamps or now - timestamps[-1] >= _AUTH_FAIL_WINDOW_SECONDS
        ]
        for ip in stale:
            del _auth_failures[ip]
        _auth_failures.setdefault(client_ip, []).append(now)


def reset_rate_limiter() -> None:
    """Reset the rate limiter state. Used by tests."""
    with _auth_lock:
        _auth_failures.clear()


def admin_key_matches(provided_key: str | None, expected_key: str) -> bool:
    """Constant-time comparison of the supplied admin key."""
    if not provided_key or not expected_key:
        return False
    return hmac.compare_digest(provided_key.encode(), expected_key.encode())


def require_admin_key(
    request: Request,
    provided_key: str | None,
    expected_key: str,
    trust_proxy: bool = False,
) -> None:
    """Reject the request unless it carries the admin key.

    Raises:
        UnauthorizedError: E-5003 when the client IP is rate limited,
            E-5001 when the key is missing or wrong.
    """
    client_ip = _get_client_ip(request, trust_proxy)

    # Check rate limit before processing the key
    if _is_rate_limited(client_ip):
        logger.warning("Auth rate limit exceeded for IP %s", client_ip)
        raise UnauthorizedError.from_code("E-5003", client_ip=client_ip)

    if not admin_key_matches(provided_key, expected_key):
        _record_auth_failure(client_ip)
        logger.warning(
            "Rejected admin key on %s from %s", request.url.path, client_ip
        )
        raise UnauthorizedError.from_code("E-5001", client_ip=client_ip)
