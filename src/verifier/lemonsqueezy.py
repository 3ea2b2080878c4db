"""Lemon Squeezy REST API client (orders endpoint only)."""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from verifier.config import Settings

logger = logging.getLogger(__name__)

JSON_API_MEDIA_TYPE = "application/vnd.api+json"
USER_AGENT = "momentor-verify/0.1 (order verification)"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


# Sentinel for a status field absent from the order document.
MISSING = _Missing()


class LemonSqueezyClient:
    """Thin wrapper around a requests.Session authorised with the store API key."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        if not settings.ls_api_key:
            raise ValueError("LS_API_KEY is required to call the Lemon Squeezy API")
        self.base_url = settings.api_base_url
        self.timeout = settings.request_timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {settings.ls_api_key}",
            "Accept": JSON_API_MEDIA_TYPE,
            "User-Agent": USER_AGENT,
        })

    def order_url(self, order_id: str) -> str:
        return f"{self.base_url}/v1/orders/{quote(order_id, safe='')}"

    def get_order(self, order_id: str) -> requests.Response:
        """GET a single order. Transport errors propagate to the caller."""
        resp = self.session.get(self.order_url(order_id), timeout=self.timeout)
        logger.info("Order lookup %s — status %d", order_id, resp.status_code)
        return resp

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> LemonSqueezyClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def is_success(resp: requests.Response) -> bool:
    """True for 2xx responses only (requests' Response.ok also accepts 3xx)."""
    return 200 <= resp.status_code < 300


def order_status(payload: object) -> object:
    """Return data.attributes.status from a JSON:API order document.

    Missing or non-object intermediate fields yield MISSING instead of raising.
    """
    node = payload
    for key in ("data", "attributes", "status"):
        if not isinstance(node, dict) or key not in node:
            return MISSING
        node = node[key]
    return node
