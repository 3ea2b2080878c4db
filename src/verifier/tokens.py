"""HMAC-based access tokens for verified orders, rotated every hour."""

from __future__ import annotations

import hashlib
import hmac
import time

WINDOW_SECONDS = 3600


def time_window(now: float | None = None) -> int:
    """Return the hour bucket for a Unix timestamp (defaults to the current time)."""
    if now is None:
        now = time.time()
    return int(now // WINDOW_SECONDS)


def sign_token(order_id: str, secret: str, now: float | None = None) -> str:
    """Generate an access token for a paid order.

    Args:
        order_id: Order identifier, already in its string form.
        secret: Shared signing secret.
        now: Unix timestamp to sign for. Defaults to the current time.

    Returns:
        Hex-encoded HMAC-SHA256 of "<order_id>:<hour window>".
    """
    message = f"{order_id}:{time_window(now)}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_token(order_id: str, token: str, secret: str, now: float | None = None) -> bool:
    """Verify a token against the current hour window. Returns True if valid."""
    expected = sign_token(order_id, secret, now)
    return hmac.compare_digest(expected.encode(), token.strip().lower().encode())
