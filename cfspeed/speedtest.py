"""Latency and throughput tests against the Cloudflare speed test endpoints."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from time import perf_counter
from typing import Callable, Iterable

import requests

from cfspeed.measurements import Measurement, log_measurements
from cfspeed.options import OutputFormat, SpeedTestOptions
from cfspeed.units import TestType, format_bytes, sizes_from_max

BASE_URL = "https://speed.cloudflare.com"
DOWNLOAD_URL = "__down?bytes="
UPLOAD_URL = "__up"
TIME_THRESHOLD = 5.0
UNKNOWN = "<unknown>"

_SERVER_TIMING = re.compile(r"cfRequestDuration;dur=([\d.]+)")

_log = logging.getLogger(__name__)

TestFunction = Callable[[requests.Session, int, OutputFormat], float]


@dataclass(frozen=True)
class Metadata:
    """Connection details reported by the speed test server."""

    city: str = UNKNOWN
    country: str = UNKNOWN
    ip: str = UNKNOWN
    asn: str = UNKNOWN
    colo: str = UNKNOWN

    def __str__(self) -> str:
        return (
            f"City: {self.city}\nCountry: {self.country}\nIp: {self.ip}\n"
            f"Asn: {self.asn}\nColo: {self.colo}"
        )


def parse_server_timing(header_value: str) -> float:
    """Extract the server-side request duration in milliseconds from a Server-Timing header."""
    match = _SERVER_TIMING.search(header_value)
    if match is None:
        raise ValueError(f"no cfRequestDuration in Server-Timing header: {header_value!r}")
    return float(match.group(1))


def fetch_metadata(session: requests.Session) -> Metadata:
    """Ask the server where it sees the client coming from."""
    headers = session.get(BASE_URL).headers
    return Metadata(
        city=headers.get("cf-meta-city", UNKNOWN),
        country=headers.get("cf-meta-country", UNKNOWN),
        ip=headers.get("cf-meta-ip", UNKNOWN),
        asn=headers.get("cf-meta-asn", UNKNOWN),
        colo=headers.get("cf-meta-colo", UNKNOWN),
    )


def _elapsed_mbits(payload_size_bytes: int, seconds: float) -> float:
    megabits = payload_size_bytes * 8.0 / 1_000_000.0
    return megabits / seconds if seconds > 0 else math.inf


def _debug_current_speed(mbits: float, seconds: float, status_code: int, payload_size_bytes: int) -> None:
    _log.debug(
        "Speed: %.2f mbit/s, duration: %.2fs, status: %s, payload: %s",
        mbits,
        seconds,
        status_code,
        format_bytes(payload_size_bytes),
    )


def test_latency(session: requests.Session) -> float:
    """Round trip time of one empty request in milliseconds, minus server processing time."""
    url = f"{BASE_URL}/{DOWNLOAD_URL}0"
    start = perf_counter()
    response = session.get(url)
    duration_ms = (perf_counter() - start) * 1_000.0

    timing = response.headers.get("Server-Timing")
    if timing is None:
        raise ValueError("No Server-Timing in response header")
    latency = duration_ms - parse_server_timing(timing)
    return max(latency, 0.0)


test_latency.__test__ = False  # type: ignore[attr-defined]


def run_latency_test(
    session: requests.Session,
    nr_latency_tests: int,
    output_format: OutputFormat,
) -> tuple[list[float], float]:
    """Run ``nr_latency_tests + 1`` latency probes; return them and their mean."""
    measurements = []
    for i in range(nr_latency_tests + 1):
        _log.debug("Running latency test %d of %d", i, nr_latency_tests)
        measurements.append(test_latency(session))
    avg_latency = sum(measurements) / len(measurements)

    if output_format is OutputFormat.STDOUT:
        _log.debug(
            "Avg GET request latency %.2f ms (RTT excluding server processing time)",
            avg_latency,
        )
    return measurements, avg_latency


def test_download(session: requests.Session, payload_size_bytes: int, output_format: OutputFormat) -> float:
    """Download a payload of the given size and return the speed in megabits per second."""
    url = f"{BASE_URL}/{DOWNLOAD_URL}{int(payload_size_bytes)}"
    start = perf_counter()
    response = session.get(url)
    _ = response.content
    seconds = perf_counter() - start
    mbits = _elapsed_mbits(payload_size_bytes, seconds)
    if output_format is OutputFormat.STDOUT:
        _debug_current_speed(mbits, seconds, response.status_code, payload_size_bytes)
    return mbits


test_download.__test__ = False  # type: ignore[attr-defined]


def test_upload(session: requests.Session, payload_size_bytes: int, output_format: OutputFormat) -> float:
    """Upload a payload of the given size and return the speed in megabits per second."""
    url = f"{BASE_URL}/{UPLOAD_URL}"
    payload = b"\x01" * int(payload_size_bytes)
    start = perf_counter()
    response = session.post(url, data=payload)
    seconds = perf_counter() - start
    mbits = _elapsed_mbits(payload_size_bytes, seconds)
    if output_format is OutputFormat.STDOUT:
        _debug_current_speed(mbits, seconds, response.status_code, payload_size_bytes)
    return mbits


test_upload.__test__ = False  # type: ignore[attr-defined]


def run_tests(
    session: requests.Session,
    test_fn: TestFunction,
    test_type: TestType,
    payload_sizes: Iterable[int],
    nr_tests: int,
    output_format: OutputFormat,
    disable_dynamic_max_payload_size: bool,
) -> list[Measurement]:
    """Run ``nr_tests`` tests per payload size, smallest first.

    Unless disabled, larger payloads are skipped once one payload size took
    longer than ``TIME_THRESHOLD`` seconds in total.
    """
    measurements: list[Measurement] = []
    for payload_size in payload_sizes:
        _log.debug("Running tests for payload_size %d", payload_size)
        start = perf_counter()
        for i in range(nr_tests):
            _log.debug(
                "Running %s test %d of %d with payload %s",
                test_type,
                i + 1,
                nr_tests,
                format_bytes(payload_size),
            )
            mbit = test_fn(session, payload_size, output_format)
            measurements.append(Measurement(test_type, payload_size, mbit))
        duration = perf_counter() - start
        _log.debug(
            "Completed %d tests for %s with payload %s",
            nr_tests,
            test_type,
            format_bytes(payload_size),
        )

        if not disable_dynamic_max_payload_size and duration > TIME_THRESHOLD:
            _log.info("Exceeded time threshold of %ss. Skipping larger payloads.", TIME_THRESHOLD)
            break
    return measurements


def speed_test(session: requests.Session, options: SpeedTestOptions) -> list[Measurement]:
    """Run a full speed test: metadata, latency, downloads and uploads, then report."""
    metadata = fetch_metadata(session)
    if options.output_format is OutputFormat.STDOUT:
        _log.debug("Metadata: %s", metadata)
    run_latency_test(session, options.nr_latency_tests, options.output_format)
    payload_sizes = sizes_from_max(options.max_payload_size)

    measurements: list[Measurement] = []
    runs = (
        (options.should_download(), test_download, TestType.DOWNLOAD),
        (options.should_upload(), test_upload, TestType.UPLOAD),
    )
    for enabled, test_fn, test_type in runs:
        if enabled:
            measurements.extend(
                run_tests(
                    session,
                    test_fn,
                    test_type,
                    payload_sizes,
                    options.nr_tests,
                    options.output_format,
                    options.disable_dynamic_max_payload_size,
                )
            )

    log_measurements(measurements, payload_sizes, options.verbose, options.output_format)
    return measurements