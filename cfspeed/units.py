"""Test types, payload sizes and byte formatting."""

from __future__ import annotations

import logging
from enum import Enum, IntEnum

_log = logging.getLogger(__name__)


def format_bytes(num_bytes: int) -> str:
    """Format a byte count as whole kilobytes, megabytes or plain bytes."""
    if 1_000 <= num_bytes <= 999_999:
        return f"{num_bytes // 1_000}KB"
    if 1_000_000 <= num_bytes <= 999_999_999:
        return f"{num_bytes // 1_000_000}MB"
    return f"{num_bytes} bytes"


class TestType(str, Enum):
    """Direction of a throughput test."""

    __test__ = False

    DOWNLOAD = "Download"
    UPLOAD = "Upload"

    def __str__(self) -> str:
        return self.value

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec)


class PayloadSize(IntEnum):
    """Supported payload sizes in bytes."""

    K100 = 100_000
    M1 = 1_000_000
    M10 = 10_000_000
    M25 = 25_000_000
    M100 = 100_000_000

    def __str__(self) -> str:
        return format_bytes(int(self))

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    @classmethod
    def parse(cls, text: str) -> "PayloadSize":
        """Parse a payload size such as ``10m``, ``100kb`` or ``25_000_000``."""
        try:
            return cls[_PAYLOAD_ALIASES[text.lower()]]
        except KeyError:
            raise ValueError("Value needs to be one of 100k, 1m, 10m, 25m or 100m") from None


_PAYLOAD_ALIASES = {
    alias: name
    for name, aliases in {
        "K100": ("100_000", "100000", "100k", "100kb"),
        "M1": ("1_000_000", "1000000", "1m", "1mb"),
        "M10": ("10_000_000", "10000000", "10m", "10mb"),
        "M25": ("25_000_000", "25000000", "25m", "25mb"),
        "M100": ("100_000_000", "100000000", "100m", "100mb"),
    }.items()
    for alias in aliases
}


def sizes_from_max(max_payload_size: PayloadSize) -> list[int]:
    """Return every payload size in bytes up to and including ``max_payload_size``."""
    _log.debug("Getting payload iterations for max_payload_size %r", max_payload_size)
    return [int(size) for size in PayloadSize if size <= max_payload_size]