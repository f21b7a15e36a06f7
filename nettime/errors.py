"""
nettime Error Handling

All error codes and exception classes raised by the NTP client.
"""

from enum import IntEnum
from typing import Optional, Any


class ErrorCode(IntEnum):
    """Client error codes."""

    # 1xxx - General errors
    UNKNOWN_ERROR = 1000
    INVALID_PARAMETER = 1001

    # 2xxx - Exchange errors
    RESOLUTION_FAILED = 2001
    NTP_NETWORK_ERROR = 2002
    NTP_TIMEOUT = 2003
    MALFORMED_RESPONSE = 2004


class NetTimeError(Exception):
    """Base exception for all nettime errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# General Errors (1xxx)
# ==============================================================================

class InvalidParameterError(NetTimeError):
    def __init__(self, param: str, message: str = ""):
        msg = f"Invalid parameter: {param}"
        if message:
            msg += f" - {message}"
        super().__init__(ErrorCode.INVALID_PARAMETER, msg, {"parameter": param})


# ==============================================================================
# Exchange Errors (2xxx)
# ==============================================================================

class ResolutionError(NetTimeError):
    def __init__(self, server: str, error: str = "no addresses"):
        super().__init__(
            ErrorCode.RESOLUTION_FAILED,
            f"Cannot resolve {server}: {error}",
            {"server": server, "error": error}
        )


class NTPNetworkError(NetTimeError):
    def __init__(self, server: str, error: str, code: ErrorCode = ErrorCode.NTP_NETWORK_ERROR):
        super().__init__(
            code,
            f"NTP network error for {server}: {error}",
            {"server": server, "error": error}
        )


class NTPTimeoutError(NTPNetworkError):
    def __init__(self, server: str, timeout_ms: int):
        super().__init__(
            server,
            f"no reply within {timeout_ms}ms",
            code=ErrorCode.NTP_TIMEOUT,
        )
        self.details["timeout_ms"] = timeout_ms


class MalformedResponseError(NetTimeError):
    def __init__(self, length: int, required: int):
        super().__init__(
            ErrorCode.MALFORMED_RESPONSE,
            f"NTP response is too short: {length} < {required} bytes",
            {"length": length, "required": required}
        )
