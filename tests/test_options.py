import pytest

from cfspeed.options import OutputFormat, SpeedTestOptions
from cfspeed.units import PayloadSize


@pytest.mark.parametrize(
    "text, expected",
    [
        ("csv", OutputFormat.CSV),
        ("CSV", OutputFormat.CSV),
        ("json", OutputFormat.JSON),
        ("Json", OutputFormat.JSON),
        ("json_pretty", OutputFormat.JSON_PRETTY),
        ("json-pretty", OutputFormat.JSON_PRETTY),
        ("JSON-PRETTY", OutputFormat.JSON_PRETTY),
        ("stdout", OutputFormat.STDOUT),
        ("StdOut", OutputFormat.STDOUT),
    ],
)
def test_parse_output_format(text, expected):
    assert OutputFormat.parse(text) is expected


@pytest.mark.parametrize("text", ["", "none", "xml", "jsonpretty"])
def test_parse_output_format_rejects_unknown(text):
    with pytest.raises(ValueError, match="Value needs to be one of csv, json or json-pretty"):
        OutputFormat.parse(text)


@pytest.mark.parametrize(
    "fmt, name",
    [
        (OutputFormat.CSV, "Csv"),
        (OutputFormat.JSON, "Json"),
        (OutputFormat.JSON_PRETTY, "JsonPretty"),
        (OutputFormat.STDOUT, "StdOut"),
        (OutputFormat.NONE, "None"),
    ],
)
def test_output_format_display(fmt, name):
    assert str(fmt) == name


@pytest.mark.parametrize(
    "fmt", [OutputFormat.CSV, OutputFormat.JSON, OutputFormat.JSON_PRETTY, OutputFormat.STDOUT]
)
def test_display_parses_back(fmt):
    assert OutputFormat.parse(str(fmt)) is fmt


def test_default_options():
    options = SpeedTestOptions()
    assert options.nr_tests == 10
    assert options.nr_latency_tests == 25
    assert options.max_payload_size is PayloadSize.M25
    assert options.output_format is OutputFormat.NONE
    assert options.verbose is False
    assert options.ipv4 is None
    assert options.ipv6 is None
    assert options.disable_dynamic_max_payload_size is False
    assert options.download_only is False
    assert options.upload_only is False


@pytest.mark.parametrize(
    "download_only, upload_only, download, upload",
    [
        (False, False, True, True),
        (True, False, True, False),
        (False, True, False, True),
        (True, True, True, True),
    ],
)
def test_should_download_and_upload(download_only, upload_only, download, upload):
    options = SpeedTestOptions(download_only=download_only, upload_only=upload_only)
    assert options.should_download() is download
    assert options.should_upload() is upload