"""Output formats and speed test options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cfspeed.units import PayloadSize


class OutputFormat(Enum):
    """How results are written."""

    CSV = "Csv"
    JSON = "Json"
    JSON_PRETTY = "JsonPretty"
    STDOUT = "StdOut"
    NONE = "None"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "OutputFormat":
        """Parse an output format name such as ``csv`` or ``json-pretty``."""
        try:
            return _FORMAT_ALIASES[text.lower()]
        except KeyError:
            raise ValueError("Value needs to be one of csv, json or json-pretty") from None


_FORMAT_ALIASES = {
    "csv": OutputFormat.CSV,
    "json": OutputFormat.JSON,
    "json_pretty": OutputFormat.JSON_PRETTY,
    "json-pretty": OutputFormat.JSON_PRETTY,
    "stdout": OutputFormat.STDOUT,
}


@dataclass
class SpeedTestOptions:
    """Configuration of a speed test run."""

    nr_tests: int = 10
    nr_latency_tests: int = 25
    max_payload_size: PayloadSize = PayloadSize.M25
    output_format: OutputFormat = OutputFormat.NONE
    verbose: bool = False
    ipv4: str | None = None
    ipv6: str | None = None
    disable_dynamic_max_payload_size: bool = False
    download_only: bool = False
    upload_only: bool = False

    def should_download(self) -> bool:
        """Whether download tests are to be run."""
        return self.download_only or not self.upload_only

    def should_upload(self) -> bool:
        """Whether upload tests are to be run."""
        return self.upload_only or not self.download_only