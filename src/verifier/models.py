from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one order verification: an HTTP status plus a token or an error."""

    status_code: int
    token: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.token is not None

    @classmethod
    def success(cls, token: str) -> VerificationResult:
        return cls(status_code=200, token=token)

    @classmethod
    def failure(cls, status_code: int, error: str) -> VerificationResult:
        return cls(status_code=status_code, error=error)

    def to_dict(self) -> dict:
        """Serialize to the JSON response body."""
        if self.ok:
            return {"ok": True, "token": self.token}
        return {"ok": False, "error": self.error}
