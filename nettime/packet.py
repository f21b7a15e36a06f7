"""
nettime Packet Codec

Builds the 48-byte client request and decodes the transmit timestamp of a
server reply. All NTP fields are network byte order (big-endian).
"""

from __future__ import annotations
import struct
import sys
from datetime import datetime, timedelta

from nettime.constants import (
    NTP_PACKET_SIZE,
    NTP_CLIENT_REQUEST_HEADER,
    NTP_TRANSMIT_SECONDS_OFFSET,
    NTP_TRANSMIT_FRACTION_OFFSET,
    NTP_FRACTION_SCALE,
    NTP_EPOCH,
)
from nettime.errors import MalformedResponseError


# ==============================================================================
# Request
# ==============================================================================

def build_request() -> bytes:
    """
    Build an NTP client request.

    Byte 0 is 0x1B (LI=0, VN=3, Mode=3); bytes 1-47 are zero.
    """
    return bytes([NTP_CLIENT_REQUEST_HEADER]) + bytes(NTP_PACKET_SIZE - 1)


# ==============================================================================
# Byte Order
# ==============================================================================

def swap_endianness(value: int) -> int:
    """Reverse the byte order of an unsigned 32-bit integer."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"u32 value out of range: {value}")
    return (
        ((value & 0x000000FF) << 24)
        | ((value & 0x0000FF00) << 8)
        | ((value & 0x00FF0000) >> 8)
        | ((value & 0xFF000000) >> 24)
    )


def network_to_host(value: int, byteorder: str = sys.byteorder) -> int:
    """
    Convert a u32 read in native order from a network-order field.

    Args:
        value: Integer as read with the host's native byte order
        byteorder: Host byte order ("little" or "big")

    Returns:
        The field's big-endian value
    """
    if byteorder == "little":
        return swap_endianness(value)
    return value


def read_uint32_be(buffer: bytes, offset: int) -> int:
    """Read a big-endian u32 at offset, independent of host byte order."""
    native = struct.unpack_from("=I", buffer, offset)[0]
    return network_to_host(native)


# ==============================================================================
# Reply
# ==============================================================================

def validate_response(buffer: bytes) -> None:
    """Raise MalformedResponseError if buffer is below the protocol minimum."""
    if len(buffer) < NTP_PACKET_SIZE:
        raise MalformedResponseError(len(buffer), NTP_PACKET_SIZE)


def transmit_timestamp_ms(buffer: bytes) -> int:
    """
    Milliseconds since the NTP epoch carried in the transmit timestamp.

    ms = seconds * 1000 + floor(fraction * 1000 / 2^32)
    """
    validate_response(buffer)
    seconds = read_uint32_be(buffer, NTP_TRANSMIT_SECONDS_OFFSET)
    fraction = read_uint32_be(buffer, NTP_TRANSMIT_FRACTION_OFFSET)
    return seconds * 1000 + (fraction * 1000) // NTP_FRACTION_SCALE


def decode_transmit_time(buffer: bytes) -> datetime:
    """Decode the transmit timestamp as an aware UTC datetime."""
    return NTP_EPOCH + timedelta(milliseconds=transmit_timestamp_ms(buffer))
