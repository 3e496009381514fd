"""Structured error types for provider HTTP calls.

Clients raise these; provider adapters catch every one of them and degrade
to their static fallback matches, so callers of the lookup chain never see
them.

ERROR FLOW:
    ┌─────────────────────────────────────────────────────┐
    │ Adapter: credentials present?  → no: fallback table │
    └─────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌─────────────────────────────────────────────────────┐
    │ Cache / rate limiter           → denied: fallback   │
    └─────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌─────────────────────────────────────────────────────┐
    │ HTTP client       → ProviderRequestError            │
    │                     (RATE_LIMITED, TIMEOUT,         │
    │                      CONNECTION_ERROR, HTTP_ERROR,  │
    │                      API_ERROR, INVALID_RESPONSE)   │
    └─────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌─────────────────────────────────────────────────────┐
    │ Adapter catches → logs → fallback table             │
    └─────────────────────────────────────────────────────┘
"""

from enum import Enum
from typing import Any, Dict, Optional


class ProviderErrorCode(Enum):
    """Failure modes of a provider HTTP call.

    Codes are string values for easy serialization and logging.
    """

    RATE_LIMITED = "RATE_LIMITED"
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    API_ERROR = "API_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class ProviderRequestError(Exception):
    """Raised by HTTP clients when a provider call cannot produce data.

    Attributes:
        code: ProviderErrorCode identifying the failure
        message: Human-readable description
        context: Relevant details (provider, status code, query...)
    """

    def __init__(
        self,
        code: ProviderErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(f"[{code.value}] {message}")

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"context={self.context!r})"
        )

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status code, when the failure came from a response."""
        return self.context.get("status_code")

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logs and diagnostics.

        Returns:
            Dictionary with error code, message, and context
        """
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
        }
