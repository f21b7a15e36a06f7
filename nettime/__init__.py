"""
nettime - Network Time Protocol client

One UDP request to an NTP server, one reply: server time corrected by half
the round trip, the round-trip delay, and the offset from the local clock.
"""

__version__ = "1.0.0"
__author__ = "nettime"

from nettime.client import NtpClient, TimeLookup
from nettime.result import NtpResult
from nettime.errors import (
    ErrorCode,
    NetTimeError,
    InvalidParameterError,
    ResolutionError,
    NTPNetworkError,
    NTPTimeoutError,
    MalformedResponseError,
)

__all__ = [
    "NtpClient",
    "NtpResult",
    "TimeLookup",
    # Errors
    "ErrorCode",
    "NetTimeError",
    "InvalidParameterError",
    "ResolutionError",
    "NTPNetworkError",
    "NTPTimeoutError",
    "MalformedResponseError",
    "__version__",
]
