"""Magic-link capability tokens.

A token is a self-contained, HMAC-SHA256 signed credential carrying one
order number and an absolute expiry. Nothing is stored server-side: a
token is valid iff its signature matches under the current secret and its
expiry is still in the future, so it cannot be revoked early.

Wire format (unpadded URL-safe base64 of a JSON envelope):

    {"payload": "{\"orderNumber\":\"#1042\",\"exp\":1767225600000}",
     "signature": "<hex hmac-sha256 of payload>"}

The payload is kept as a string inside the envelope so the exact signed
bytes survive the round trip. Expiry is epoch milliseconds.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time
from collections.abc import Callable
from datetime import timedelta

DEFAULT_TOKEN_TTL = timedelta(days=90)

# Issued tokens are a few hundred characters; anything far longer is junk.
MAX_TOKEN_LENGTH = 4096


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(token: str) -> bytes:
    padded = token + "=" * (-len(token) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


class MagicLinkCodec:
    """Issues and validates order-tracking capability tokens.

    Args:
        secret: Server-held signing secret.
        ttl: Default lifetime for issued tokens.
        clock: Returns the current time in epoch seconds. Injected for tests.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Magic-link secret must not be empty")
        self._secret = secret.encode()
        self._ttl = ttl
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _sign(self, payload: str) -> str:
        return hmac.new(self._secret, payload.encode(), hashlib.sha256).hexdigest()

    def issue(self, subject: str, ttl: timedelta | None = None) -> str:
        """Issue a token for ``subject`` expiring ``ttl`` from now.

        Raises:
            ValueError: If the effective TTL is not positive.
        """
        lifetime = self._ttl if ttl is None else ttl
        ttl_ms = int(lifetime.total_seconds() * 1000)
        if ttl_ms <= 0:
            raise ValueError("Token TTL must be positive")

        payload = json.dumps(
            {"orderNumber": subject, "exp": self._now_ms() + ttl_ms},
            separators=(",", ":"),
        )
        envelope = json.dumps(
            {"payload": payload, "signature": self._sign(payload)},
            separators=(",", ":"),
        )
        return _b64encode(envelope.encode())

    def validate(self, token: str) -> str | None:
        """Return the token's order number, or None if the token is invalid.

        Malformed encoding, signature mismatch and expiry all produce the
        same None so callers cannot tell which check failed.
        """
        if len(token) > MAX_TOKEN_LENGTH:
            return None
        try:
            envelope = json.loads(_b64decode(token))
            payload = envelope["payload"]
            signature = envelope["signature"]
            if not isinstance(payload, str) or not isinstance(signature, str):
                return None

            expected = self._sign(payload)
            if not hmac.compare_digest(signature.encode(), expected.encode()):
                return None

            data = json.loads(payload)
            subject = data["orderNumber"]
            expires_at = data["exp"]
        except (
            binascii.Error,
            UnicodeError,
            ValueError,
            KeyError,
            TypeError,
            RecursionError,
        ):
            return None

        if not isinstance(subject, str) or not subject:
            return None
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            return None
        if expires_at <= self._now_ms():
            return None
        return subject
