"""Flask app exposing POST /api/verify-order."""

from __future__ import annotations

import logging
from collections.abc import Callable

from flask import Flask, jsonify, request

from verifier.config import Settings
from verifier.lemonsqueezy import LemonSqueezyClient
from verifier.models import VerificationResult
from verifier.verification import METHOD_NOT_ALLOWED, verify_order

logger = logging.getLogger(__name__)

# Every verb is routed to the view so non-POST requests get the JSON 405 body.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _respond(result: VerificationResult):
    return jsonify(result.to_dict()), result.status_code


def create_app(
    settings_loader: Callable[[], Settings] = Settings.from_env,
    client_factory: Callable[[Settings], LemonSqueezyClient] = LemonSqueezyClient,
) -> Flask:
    """Build the app. Settings are loaded per request so env changes apply."""
    app = Flask(__name__)

    @app.route("/api/verify-order", methods=ALL_METHODS, provide_automatic_options=False)
    def verify_order_view():
        if request.method != "POST":
            return _respond(VerificationResult.failure(405, METHOD_NOT_ALLOWED))

        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            body = {}

        try:
            settings = settings_loader()
        except ValueError:
            # Treated like a missing API key: generic 500, details only in the log.
            logger.exception("Invalid verifier configuration")
            settings = Settings(ls_api_key=None)

        result = verify_order(body.get("orderId"), settings, client_factory)
        return _respond(result)

    @app.errorhandler(405)
    def method_not_allowed(_err):
        return _respond(VerificationResult.failure(405, METHOD_NOT_ALLOWED))

    return app
