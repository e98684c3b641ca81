"""
Exceptions raised by the DNS Zone Manager.

Remote failures are surfaced as ApiError and are never rewrapped by the
diff, SOA or change layers, so callers always see the backend status.
"""

from typing import Any, Dict, Optional


class DNSError(Exception):
    """Base exception for DNS operations"""
    pass


class ConfigurationError(DNSError):
    """Raised when the configuration file cannot be used."""
    pass


class RecordNotFoundError(DNSError):
    """Raised when an operation needs a live record that does not exist."""

    def __init__(self, name: str, record_type: str):
        self.name = name
        self.record_type = record_type
        super().__init__(f"No {record_type} record found for {name}")


class ApiError(DNSError):
    """A failed call to the DNS backend."""

    def __init__(
        self,
        status_code: Optional[int],
        message: str = "",
        reason: Optional[str] = None,
        body: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        self.message = message
        self.body = body or {}
        super().__init__(f"{status_code} {reason or ''}: {message}".strip())

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    @classmethod
    def from_response(cls, response) -> "ApiError":
        """
        Build an error from a non-2xx requests.Response.

        The Cloud DNS error envelope is ``{"error": {"code", "message",
        "errors": [{"reason", ...}]}}``; anything else falls back to the
        response text.
        """
        body: Dict[str, Any] = {}
        message = response.text or response.reason or ""
        reason = None
        try:
            body = response.json()
        except ValueError:
            body = {}

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            message = error.get("message", message)
            details = error.get("errors") or []
            if details and isinstance(details[0], dict):
                reason = details[0].get("reason")
            if reason is None:
                reason = error.get("status")

        return cls(response.status_code, message, reason=reason, body=body)
