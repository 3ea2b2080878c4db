"""Runtime settings read from environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.lemonsqueezy.com"
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Used when LS_TOKEN_SECRET is unset. Anyone who knows this string can mint
# tokens, so deployments must set their own secret.
DEFAULT_TOKEN_SECRET = "momentor-default-secret"


@dataclass(frozen=True)
class Settings:
    """Configuration for one verification request."""

    ls_api_key: str | None
    token_secret: str = DEFAULT_TOKEN_SECRET
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def using_default_secret(self) -> bool:
        return self.token_secret == DEFAULT_TOKEN_SECRET

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from env vars (os.environ unless a mapping is given).

        Raises:
            ValueError: if LS_API_TIMEOUT is not a positive number.
        """
        if environ is None:
            environ = os.environ

        secret = environ.get("LS_TOKEN_SECRET") or DEFAULT_TOKEN_SECRET
        if secret == DEFAULT_TOKEN_SECRET:
            logger.warning("LS_TOKEN_SECRET not set; signing with the built-in default secret")

        timeout_raw = environ.get("LS_API_TIMEOUT", "").strip()
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
        if timeout <= 0:
            raise ValueError(f"LS_API_TIMEOUT must be positive, got {timeout_raw!r}")

        base_url = environ.get("LS_API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL

        return cls(
            ls_api_key=environ.get("LS_API_KEY") or None,
            token_secret=secret,
            api_base_url=base_url.rstrip("/"),
            request_timeout=timeout,
        )
