"""Command line entry point running a speed test and printing every measurement."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import requests

from cfspeed.options import OutputFormat, SpeedTestOptions
from cfspeed.speedtest import speed_test
from cfspeed.units import PayloadSize


def _payload_size(text: str) -> PayloadSize:
    try:
        return PayloadSize.parse(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def _output_format(text: str) -> OutputFormat:
    try:
        return OutputFormat.parse(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the speed test command."""
    parser = argparse.ArgumentParser(
        prog="cfspeed",
        description="Measure latency, download and upload speed against speed.cloudflare.com.",
    )
    parser.add_argument("-n", "--nr-tests", type=int, default=5, help="number of test runs per payload size")
    parser.add_argument("--nr-latency-tests", type=int, default=20, help="number of latency tests to run")
    parser.add_argument(
        "-m",
        "--max-payload-size",
        type=_payload_size,
        default=PayloadSize.M10,
        help="largest payload size: 100k, 1m, 10m, 25m or 100m",
    )
    parser.add_argument(
        "-o",
        "--output-format",
        type=_output_format,
        default=OutputFormat.NONE,
        help="summary output: csv, json, json-pretty or stdout",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose logging")
    parser.add_argument(
        "--disable-dynamic-max-payload-size",
        action="store_true",
        help="do not skip larger payloads when a payload size took longer than 5 seconds",
    )
    parser.add_argument("--download-only", action="store_true", help="test download speed only")
    parser.add_argument("--upload-only", action="store_true", help="test upload speed only")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the speed test and print every measurement."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    options = SpeedTestOptions(
        nr_tests=args.nr_tests,
        nr_latency_tests=args.nr_latency_tests,
        max_payload_size=args.max_payload_size,
        output_format=args.output_format,
        verbose=args.verbose,
        disable_dynamic_max_payload_size=args.disable_dynamic_max_payload_size,
        download_only=args.download_only,
        upload_only=args.upload_only,
    )

    print("Running speed test...")
    with requests.Session() as session:
        measurements = speed_test(session, options)

    print("\nResults:")
    for measurement in measurements:
        print(measurement)
    return 0


if __name__ == "__main__":
    sys.exit(main())