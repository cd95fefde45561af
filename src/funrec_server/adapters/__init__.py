"""External API adapters."""

from __future__ import annotations


class AdapterError(RuntimeError):
    """Upstream failure tagged with a stable code.

    Codes: ``MISSING_API_KEY``, ``UPSTREAM_UNAVAILABLE`` (transport error or
    timeout), ``UPSTREAM_ERROR`` (non-2xx status), ``BAD_RESPONSE`` (body is not
    JSON or carries no features list).
    """

    def __init__(self, code: str, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
