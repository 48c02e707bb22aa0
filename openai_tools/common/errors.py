"""
Exception hierarchy for the library.

Every operation raises a subclass of ``OpenAIToolError``; the vendor's structured
error bodies surface as ``ApiError`` carrying the code, message, type and param.
"""

from typing import Any, Dict, Optional


class OpenAIToolError(Exception):
    """Base class for all library errors."""


class ConfigError(OpenAIToolError):
    """Missing or invalid credentials, endpoint or required request field."""


class AuthError(ConfigError):
    """Credentials were missing or rejected by the server."""


class SerializationError(OpenAIToolError):
    """A request could not be encoded."""


class TransportError(OpenAIToolError):
    """Network, TLS or HTTP-layer failure."""


class RealtimeConnectionError(TransportError):
    """The realtime websocket handshake failed."""


class DecodeError(OpenAIToolError):
    """A response body did not match the expected shape."""


class ApiError(OpenAIToolError):
    """The server returned a structured error."""

    def __init__(
        self,
        message: str,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
        param: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.type = error_type
        self.code = code
        self.param = param
        self.status_code = status_code

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], status_code: Optional[int] = None) -> "ApiError":
        """Build from an ``{"error": {...}}`` body or the inner error object."""
        error = payload.get("error", payload) if isinstance(payload, dict) else {}
        if not isinstance(error, dict):
            error = {"message": str(error)}
        code = error.get("code")
        return cls(
            message=error.get("message") or "Unknown API error",
            error_type=error.get("type"),
            code=str(code) if code is not None else None,
            param=error.get("param"),
            status_code=status_code,
        )

    def __str__(self) -> str:
        parts = [self.message]
        if self.type:
            parts.append(f"type={self.type}")
        if self.code:
            parts.append(f"code={self.code}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        return " ".join(parts)


class RealtimeError(OpenAIToolError):
    """Base class for realtime session state errors."""


class SendError(RealtimeError):
    """A client event could not be sent on the session."""


class ReceiveError(RealtimeError):
    """A server event could not be received from the session."""
