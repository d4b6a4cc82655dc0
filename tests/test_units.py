import pytest

from cfspeed.units import PayloadSize, TestType, format_bytes, sizes_from_max


@pytest.mark.parametrize(
    "text, expected",
    [
        ("100_000", PayloadSize.K100),
        ("100000", PayloadSize.K100),
        ("100k", PayloadSize.K100),
        ("100kb", PayloadSize.K100),
        ("1_000_000", PayloadSize.M1),
        ("1000000", PayloadSize.M1),
        ("1m", PayloadSize.M1),
        ("1mb", PayloadSize.M1),
        ("10_000_000", PayloadSize.M10),
        ("10000000", PayloadSize.M10),
        ("10m", PayloadSize.M10),
        ("10mb", PayloadSize.M10),
        ("25_000_000", PayloadSize.M25),
        ("25000000", PayloadSize.M25),
        ("25m", PayloadSize.M25),
        ("25mb", PayloadSize.M25),
        ("100_000_000", PayloadSize.M100),
        ("100000000", PayloadSize.M100),
        ("100m", PayloadSize.M100),
        ("100mb", PayloadSize.M100),
    ],
)
def test_parse_aliases(text, expected):
    assert PayloadSize.parse(text) is expected


def test_parse_is_case_insensitive():
    assert PayloadSize.parse("10MB") is PayloadSize.M10
    assert PayloadSize.parse("100K") is PayloadSize.K100


@pytest.mark.parametrize("text", ["", "5m", "1gb", "abc", "100"])
def test_parse_rejects_unknown(text):
    with pytest.raises(ValueError, match="Value needs to be one of 100k, 1m, 10m, 25m or 100m"):
        PayloadSize.parse(text)


@pytest.mark.parametrize("size", list(PayloadSize))
def test_display_round_trips_through_parse(size):
    assert PayloadSize.parse(str(size)) is size


@pytest.mark.parametrize("size", list(PayloadSize))
def test_value_round_trips_through_parse(size):
    assert PayloadSize.parse(str(int(size))) is size


def test_sizes_from_max_all():
    assert sizes_from_max(PayloadSize.M100) == [
        100_000,
        1_000_000,
        10_000_000,
        25_000_000,
        100_000_000,
    ]


@pytest.mark.parametrize("size", list(PayloadSize))
def test_sizes_from_max_ends_at_max_and_is_sorted(size):
    sizes = sizes_from_max(size)
    assert sizes[-1] == int(size)
    assert sizes == sorted(sizes)
    assert sizes[0] == int(PayloadSize.K100)


def test_sizes_from_max_smallest():
    assert sizes_from_max(PayloadSize.K100) == [100_000]


def test_format_bytes_ranges():
    assert format_bytes(999).endswith(" bytes")
    assert format_bytes(1_000).endswith("KB")
    assert format_bytes(999_999).endswith("KB")
    assert format_bytes(1_000_000).endswith("MB")
    assert format_bytes(999_999_999).endswith("MB")
    assert format_bytes(1_000_000_000).endswith(" bytes")


def test_format_bytes_truncates():
    assert format_bytes(1_999) == format_bytes(1_000)
    assert format_bytes(25_999_999) == format_bytes(25_000_000)


def test_test_type_display():
    assert TestType.DOWNLOAD.__str__() == "Download"
    assert TestType.UPLOAD.__format__("") == "Upload"