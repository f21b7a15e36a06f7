"""
nettime NTP Client

Single-sample SNTP exchange: one 48-byte request over UDP, one reply, the
transmit timestamp corrected by half the measured round trip (symmetric
latency assumed).

Each call resolves the server, opens its own socket and closes it before
returning. Nothing is shared between calls, so concurrent exchanges are
independent. There is no retry; callers decide whether to try again.
"""

from __future__ import annotations
import asyncio
import logging
import socket
import time
from datetime import datetime, timedelta
from typing import NamedTuple, Tuple

from nettime.config import ClientConfig
from nettime.constants import (
    DEFAULT_NTP_SERVER,
    NTP_PORT,
    NTP_QUERY_TIMEOUT_MS,
    NTP_RECV_BUFFER_SIZE,
)
from nettime.errors import (
    InvalidParameterError,
    ResolutionError,
    NTPNetworkError,
    NTPTimeoutError,
)
from nettime.packet import build_request, decode_transmit_time
from nettime.result import NtpResult

logger = logging.getLogger(__name__)


class TimeLookup(NamedTuple):
    """Best-effort lookup outcome; time is datetime.min when success is False."""
    success: bool
    time: datetime


class NtpClient:
    """
    Simple NTP client for retrieving time from one server.

    Args:
        server: Hostname or IP address of the NTP server
        port: UDP port of the server (usually 123)
        timeout_ms: Receive timeout in milliseconds

    Raises:
        InvalidParameterError: If server is empty, port is out of range
            or timeout_ms is negative
    """

    def __init__(
        self,
        server: str = DEFAULT_NTP_SERVER,
        port: int = NTP_PORT,
        timeout_ms: int = NTP_QUERY_TIMEOUT_MS
    ):
        config = ClientConfig(server=server, port=port, timeout_ms=timeout_ms)
        errors = config.field_errors()
        if errors:
            param, message = next(iter(errors.items()))
            raise InvalidParameterError(param, message)
        self.config = config

    @classmethod
    def from_config(cls, config: ClientConfig) -> NtpClient:
        return cls(config.server, config.port, config.timeout_ms)

    @property
    def server(self) -> str:
        return self.config.server

    @property
    def port(self) -> int:
        return self.config.port

    @property
    def timeout_ms(self) -> int:
        return self.config.timeout_ms

    def __repr__(self) -> str:
        return f"NtpClient({self.server}:{self.port}, timeout={self.timeout_ms}ms)"

    # =========================================================================
    # Exchange
    # =========================================================================

    async def _resolve(self) -> Tuple[int, tuple]:
        """Resolve the server to (family, sockaddr) of its first address."""
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(
                self.server, self.port,
                type=socket.SOCK_DGRAM
            )
        except (socket.gaierror, UnicodeError) as e:
            raise ResolutionError(self.server, str(e)) from e

        if not infos:
            raise ResolutionError(self.server)

        family, _type, _proto, _canonname, sockaddr = infos[0]
        logger.debug(f"Resolved {self.server} -> {sockaddr[0]} ({len(infos)} addresses)")
        return family, sockaddr

    def _transact(self, family: int, sockaddr: tuple, request: bytes) -> Tuple[bytes, int]:
        """
        Send one request and block for one reply.

        Returns:
            Tuple of (reply, round_trip_ns)
        """
        with socket.socket(family, socket.SOCK_DGRAM) as sock:
            sock.settimeout(self.timeout_ms / 1000.0)

            t0 = time.monotonic_ns()
            sock.sendto(request, sockaddr)
            data, _ = sock.recvfrom(NTP_RECV_BUFFER_SIZE)
            t1 = time.monotonic_ns()

        return data, t1 - t0

    async def get_full_network_time(self) -> NtpResult:
        """
        Query the server and return the full exchange result.

        Raises:
            ResolutionError: If the server name cannot be resolved
            NTPTimeoutError: If no reply arrives within timeout_ms
            NTPNetworkError: If sending or receiving fails
            MalformedResponseError: If the reply is shorter than 48 bytes
        """
        family, sockaddr = await self._resolve()
        request = build_request()

        loop = asyncio.get_running_loop()
        try:
            data, rtt_ns = await loop.run_in_executor(
                None,
                self._transact, family, sockaddr, request
            )
        except socket.timeout as e:
            raise NTPTimeoutError(self.server, self.timeout_ms) from e
        except OSError as e:
            raise NTPNetworkError(self.server, str(e) or type(e).__name__) from e

        logger.debug(f"Received {len(data)} bytes from {self.server}")

        server_time = decode_transmit_time(data)

        # Integer division truncates to whole microseconds
        round_trip = timedelta(microseconds=rtt_ns // 1000)
        server_time += round_trip // 2

        logger.debug(
            f"NTP {self.server}: time={server_time.isoformat()}, "
            f"rtt={round_trip / timedelta(milliseconds=1):.3f}ms"
        )

        return NtpResult(
            server=self.server,
            utc_time=server_time,
            round_trip_delay=round_trip
        )

    # =========================================================================
    # Convenience
    # =========================================================================

    async def get_network_time(self) -> datetime:
        """Current network time in the local time zone, delay corrected."""
        result = await self.get_full_network_time()
        return result.local_time

    def get_network_time_sync(self) -> datetime:
        """
        Synchronous wrapper for get_network_time().

        Raises:
            RuntimeError: If called while an event loop is running in
                this thread; await get_network_time() there instead
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.get_network_time())
        raise RuntimeError("get_network_time_sync() called from a running event loop")

    def try_get_network_time(self) -> TimeLookup:
        """
        Get the network time without raising.

        Returns:
            TimeLookup(True, local_time) on success,
            TimeLookup(False, datetime.min) on any failure
        """
        try:
            return TimeLookup(True, self.get_network_time_sync())
        except Exception as e:
            logger.debug(f"NTP query to {self.server} failed: {e}")
            return TimeLookup(False, datetime.min)

    async def get_offset_from_local(self) -> timedelta:
        """Difference between the local clock and the server time."""
        result = await self.get_full_network_time()
        return result.local_offset
