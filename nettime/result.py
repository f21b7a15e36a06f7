"""
nettime Exchange Result
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True, slots=True)
class NtpResult:
    """
    Outcome of one NTP exchange.

    utc_time already includes the half round-trip correction.
    """
    server: str
    utc_time: datetime
    round_trip_delay: timedelta

    @property
    def local_time(self) -> datetime:
        """Server time converted to the local time zone."""
        return self.utc_time.astimezone()

    @property
    def local_offset(self) -> timedelta:
        """
        Local clock minus server time.

        Recomputed on every read, so it grows with the time elapsed since
        the exchange.
        """
        return datetime.now(timezone.utc) - self.utc_time

    def to_dict(self) -> dict:
        """Export as JSON-serializable dict."""
        return {
            "server": self.server,
            "utc_time": self.utc_time.isoformat(),
            "round_trip_ms": self.round_trip_delay / timedelta(milliseconds=1),
        }

    def __repr__(self) -> str:
        rtt_ms = self.round_trip_delay / timedelta(milliseconds=1)
        return f"NtpResult({self.server}, {self.utc_time.isoformat()}, rtt={rtt_ms:.1f}ms)"
