"""Stand-ins for the Lemon Squeezy client used across the test modules."""

from __future__ import annotations

from unittest import mock

import requests


def make_response(status_code: int = 200, payload=None, json_error: Exception | None = None):
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status_code
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


def paid_order(order_id="1001", status="paid"):
    return {
        "data": {
            "type": "orders",
            "id": str(order_id),
            "attributes": {"status": status, "total": 1900, "currency": "USD"},
        }
    }


class FakeClient:
    """Records lookups and replays a canned response (or raises)."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.settings = None
        self.requested: list[str] = []
        self.closed = False

    def __call__(self, settings):
        self.settings = settings
        return self

    def get_order(self, order_id: str):
        self.requested.append(order_id)
        if self.error is not None:
            raise self.error
        return self.response

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
