"""
nettime Constants

Wire-format constants and client defaults for the NTP exchange.
"""

from datetime import datetime, timezone
from typing import Final

# ==============================================================================
# CLIENT DEFAULTS
# ==============================================================================

DEFAULT_NTP_SERVER: Final[str] = "pool.ntp.org"
NTP_PORT: Final[int] = 123
NTP_QUERY_TIMEOUT_MS: Final[int] = 3000         # Receive timeout per exchange
MAX_PORT: Final[int] = 65535

# ==============================================================================
# WIRE FORMAT (RFC 5905, client/server mode)
# ==============================================================================

NTP_PACKET_SIZE: Final[int] = 48                # Minimum request/reply size
NTP_RECV_BUFFER_SIZE: Final[int] = 1024         # Replies may carry extensions

# Header byte 0: LI (2 bits) | VN (3 bits) | Mode (3 bits)
NTP_LEAP_NO_WARNING: Final[int] = 0
NTP_VERSION: Final[int] = 3
NTP_MODE_CLIENT: Final[int] = 3
NTP_CLIENT_REQUEST_HEADER: Final[int] = (
    (NTP_LEAP_NO_WARNING << 6) | (NTP_VERSION << 3) | NTP_MODE_CLIENT
)  # 0x1B

# Transmit timestamp (big-endian u32 seconds + u32 fraction)
NTP_TRANSMIT_SECONDS_OFFSET: Final[int] = 40
NTP_TRANSMIT_FRACTION_OFFSET: Final[int] = 44
NTP_FRACTION_SCALE: Final[int] = 0x100000000    # 2^32

# NTP era 0 starts at 1900-01-01T00:00:00Z
NTP_EPOCH: Final[datetime] = datetime(1900, 1, 1, tzinfo=timezone.utc)
