"""Measurements, summary statistics and their output."""

from __future__ import annotations

import csv
import json
import logging
import math
import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import IO, Iterable, NamedTuple, Sequence

from cfspeed import boxplot
from cfspeed.options import OutputFormat
from cfspeed.units import TestType, format_bytes

_log = logging.getLogger(__name__)

_STAT_FIELDS = ("test_type", "payload_size", "min", "q1", "median", "q3", "max", "avg")


def _format_float(value: float) -> str:
    """Shortest decimal form without exponent or trailing zeros."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class Measurement:
    """One throughput sample in megabits per second."""

    test_type: TestType
    payload_size: int
    mbit: float

    def __str__(self) -> str:
        return f"{self.test_type}: \t{format_bytes(self.payload_size)}\t-> {_format_float(self.mbit)}"


@dataclass(frozen=True)
class StatMeasurement:
    """Summary statistics for one test type and payload size."""

    test_type: TestType
    payload_size: int
    min: float
    q1: float
    median: float
    q3: float
    max: float
    avg: float

    def as_dict(self) -> dict:
        """Plain mapping suitable for serialisation."""
        return {
            "test_type": self.test_type.value,
            "payload_size": self.payload_size,
            "min": self.min,
            "q1": self.q1,
            "median": self.median,
            "q3": self.q3,
            "max": self.max,
            "avg": self.avg,
        }


class Stats(NamedTuple):
    min: float
    q1: float
    median: float
    q3: float
    max: float
    avg: float


def median(data: Sequence[float]) -> float:
    """Median of already sorted data."""
    length = len(data)
    if length == 0:
        raise ValueError("median of empty data")
    middle = length // 2
    if length % 2 == 0:
        return (data[middle - 1] + data[middle]) / 2.0
    return data[middle]


def calc_stats(values: Sequence[float]) -> Stats | None:
    """Minimum, quartiles, maximum and mean of the values, or None if empty."""
    _log.debug("Calculating stats for %d measurements", len(values))
    length = len(values)
    if length == 0:
        return None

    ordered = sorted(values)
    avg = sum(values) / length

    if length == 1:
        only = ordered[0]
        return Stats(only, only, only, only, only, only)

    if length < 4:
        return Stats(ordered[0], ordered[0], median(ordered), ordered[-1], ordered[-1], avg)

    split = length // 2 if length % 2 == 0 else (length + 1) // 2
    return Stats(
        ordered[0],
        median(ordered[:split]),
        median(ordered),
        median(ordered[split:]),
        ordered[-1],
        avg,
    )


def stats_by_test_type(
    measurements: Iterable[Measurement],
    payload_sizes: Iterable[int],
    verbose: bool,
    output_format: OutputFormat,
    test_type: TestType,
) -> list[StatMeasurement]:
    """Summarise the measurements of one test type, per payload size."""
    of_type = [m for m in measurements if m.test_type == test_type]
    results: list[StatMeasurement] = []
    for payload_size in payload_sizes:
        stats = calc_stats([m.mbit for m in of_type if m.payload_size == payload_size])
        if stats is None:
            continue
        results.append(StatMeasurement(test_type, payload_size, *stats))
        if output_format is OutputFormat.STDOUT:
            _log.debug(
                "%s %s: min %.2f max %.2f avg %.2f",
                test_type,
                format_bytes(payload_size),
                stats.min,
                stats.max,
                stats.avg,
            )
            if verbose:
                _log.debug("Boxplot: %s", boxplot.render_plot(*stats[:5]))
    return results


def _json_ready(stat: StatMeasurement) -> dict:
    return {
        key: (None if isinstance(value, float) and not math.isfinite(value) else value)
        for key, value in stat.as_dict().items()
    }


def log_measurements(
    measurements: Sequence[Measurement],
    payload_sizes: Sequence[int],
    verbose: bool,
    output_format: OutputFormat,
    stream: IO[str] | None = None,
) -> list[StatMeasurement]:
    """Summarise measurements and write them in the chosen format.

    Test types keep the order in which they first appear. Returns the summaries.
    """
    out = sys.stdout if stream is None else stream
    if output_format is OutputFormat.STDOUT:
        _log.debug("Summary Statistics")
        _log.debug("Type     Payload |  min/max/avg in mbit/s")

    test_types = dict.fromkeys(m.test_type for m in measurements)
    stats = [
        stat
        for test_type in test_types
        for stat in stats_by_test_type(measurements, payload_sizes, verbose, output_format, test_type)
    ]

    if output_format is OutputFormat.CSV:
        if stats:
            writer = csv.writer(out, lineterminator="\n")
            writer.writerow(_STAT_FIELDS)
            writer.writerows([stat.as_dict()[field] for field in _STAT_FIELDS] for stat in stats)
        out.flush()
    elif output_format is OutputFormat.JSON:
        out.write(json.dumps([_json_ready(s) for s in stats], separators=(",", ":")))
        out.write("\n")
    elif output_format is OutputFormat.JSON_PRETTY:
        out.write(json.dumps([_json_ready(s) for s in stats], indent=2))
        out.write("\n")
    return stats