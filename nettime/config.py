"""
nettime Client Configuration
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, List

from nettime.constants import (
    DEFAULT_NTP_SERVER,
    NTP_PORT,
    NTP_QUERY_TIMEOUT_MS,
    MAX_PORT,
)


@dataclass
class ClientConfig:
    """Server endpoint and receive timeout for one client."""
    server: str = DEFAULT_NTP_SERVER
    port: int = NTP_PORT
    timeout_ms: int = NTP_QUERY_TIMEOUT_MS

    def field_errors(self) -> Dict[str, str]:
        """Map each invalid field name to its error message."""
        errors = {}

        if not self.server or not self.server.strip():
            errors["server"] = "server cannot be empty"

        if self.port < 1 or self.port > MAX_PORT:
            errors["port"] = f"Invalid port: {self.port}"

        if self.timeout_ms < 0:
            errors["timeout_ms"] = f"timeout_ms cannot be negative: {self.timeout_ms}"

        return errors

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        return list(self.field_errors().values())

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return asdict(self)
