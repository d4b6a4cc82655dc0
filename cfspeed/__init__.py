"""Latency, download and upload measurements against the Cloudflare speed test service."""

__version__ = "0.1.0"