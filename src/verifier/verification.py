"""Verify a Lemon Squeezy order and issue an access token if it is paid."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from decimal import Decimal

from verifier.config import Settings
from verifier.lemonsqueezy import MISSING, LemonSqueezyClient, is_success, order_status
from verifier.models import VerificationResult
from verifier.tokens import sign_token

logger = logging.getLogger(__name__)

PAID = "paid"

METHOD_NOT_ALLOWED = "Method not allowed"
MISSING_ORDER_ID = "Missing orderId"
CONFIGURATION_ERROR = "Server configuration error"
ORDER_NOT_FOUND = "Order not found"
VERIFICATION_FAILED = "Verification failed"


def number_text(value: float) -> str:
    """Spell a number the way a JavaScript runtime does (String(value)).

    Plain decimals for 1e-7 <= |value| < 1e21, otherwise 1e+21 / 1.5e-7.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    # repr() gives the shortest round-trip digits, as JavaScript does.
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # value == 0.<digits> * 10**n
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{prefix}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def order_id_text(order_id: object) -> str:
    """Render an orderId from a JSON body the way the storefront sends it.

    Numbers keep their JavaScript spelling (12.0 is 12, 1e21 is 1e+21) and
    booleans are lowercase.
    """
    if isinstance(order_id, bool):
        return "true" if order_id else "false"
    if isinstance(order_id, int):
        # Browsers parse JSON numbers as doubles; past 2**53 the digits change.
        return str(order_id) if abs(order_id) <= 2**53 else number_text(float(order_id))
    if isinstance(order_id, float):
        return number_text(order_id)
    return str(order_id)


def order_id_missing(order_id: object) -> bool:
    """True for absent or empty ids, and for anything not a string or number."""
    if isinstance(order_id, float) and math.isnan(order_id):
        return True
    if not isinstance(order_id, (str, int, float)):
        return True
    return not order_id


def status_text(status: object) -> str:
    """Render an order status for the error message; absent becomes 'undefined'."""
    if status is MISSING:
        return "undefined"
    if status is None:
        return "null"
    return order_id_text(status)


def verify_order(
    order_id: object,
    settings: Settings,
    client_factory: Callable[[Settings], LemonSqueezyClient] = LemonSqueezyClient,
    now: float | None = None,
) -> VerificationResult:
    """Look up an order and sign a token if its status is "paid".

    Args:
        order_id: The orderId from the request body (string or number).
        settings: Resolved configuration; an absent API key short-circuits.
        client_factory: Builds the API client. Not called without an API key.
        now: Unix timestamp to sign for. Defaults to the current time.

    Returns:
        A VerificationResult; failures are results, never exceptions.
    """
    if order_id_missing(order_id):
        return VerificationResult.failure(400, MISSING_ORDER_ID)

    if not settings.ls_api_key:
        logger.error("LS_API_KEY not set")
        return VerificationResult.failure(500, CONFIGURATION_ERROR)

    order_key = order_id_text(order_id)
    try:
        with client_factory(settings) as client:
            resp = client.get_order(order_key)
            if not is_success(resp):
                return VerificationResult.failure(403, ORDER_NOT_FOUND)
            status = order_status(resp.json())

        if status != PAID:
            logger.info("Order %s not paid (status %s)", order_key, status_text(status))
            return VerificationResult.failure(403, f"Order status: {status_text(status)}")

        token = sign_token(order_key, settings.token_secret, now)
        return VerificationResult.success(token)
    except Exception:
        logger.exception("verify-order error for order %s", order_key)
        return VerificationResult.failure(500, VERIFICATION_FAILED)
