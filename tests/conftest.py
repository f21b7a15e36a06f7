"""
nettime Test Fixtures
"""

import socket
import struct
import threading
import time
from typing import Callable, List, Optional

import pytest

from nettime.constants import NTP_PACKET_SIZE


# 2024-01-01 00:00:00 UTC in NTP seconds
NTP_SECONDS_2024 = 3_913_056_000


def make_reply(seconds: int, fraction: int = 0, size: int = NTP_PACKET_SIZE) -> bytes:
    """Build a server reply with the given transmit timestamp."""
    packet = bytearray(max(size, NTP_PACKET_SIZE))
    packet[0] = 0x1C  # LI=0, VN=3, Mode=4 (server)
    packet[1] = 2     # stratum
    struct.pack_into("!II", packet, 40, seconds, fraction)
    return bytes(packet[:size])


class FakeNtpServer:
    """
    Loopback UDP server answering every datagram with a fixed reply.

    Received requests are recorded for inspection.
    """

    def __init__(self, reply: bytes, delay: float = 0.0):
        self.reply = reply
        self.delay = delay
        self.requests: List[bytes] = []
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.settimeout(0.1)
        self._running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.sock.getsockname()[1]

    def start(self) -> None:
        self._running = True
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._running = False
        if self._thread:
            self._thread.join(timeout=2)
        self.sock.close()

    def _serve(self) -> None:
        while self._running:
            try:
                data, addr = self.sock.recvfrom(1024)
            except socket.timeout:
                continue
            except OSError:
                break
            self.requests.append(data)
            if self.delay:
                time.sleep(self.delay)
            self.sock.sendto(self.reply, addr)


@pytest.fixture
def ntp_server_factory() -> Callable[..., FakeNtpServer]:
    """Start fake servers on demand; all are stopped at teardown."""
    servers: List[FakeNtpServer] = []

    def factory(reply: bytes, delay: float = 0.0) -> FakeNtpServer:
        server = FakeNtpServer(reply, delay)
        server.start()
        servers.append(server)
        return server

    yield factory

    for server in servers:
        server.stop()


@pytest.fixture
def ntp_server(ntp_server_factory) -> FakeNtpServer:
    """Fake server replying with 2024-01-01T00:00:00Z."""
    return ntp_server_factory(make_reply(NTP_SECONDS_2024))


@pytest.fixture
def silent_port() -> int:
    """A bound loopback UDP port that never answers."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    yield sock.getsockname()[1]
    sock.close()
