# cfspeed

cfspeed measures your connection against the Cloudflare speed test endpoints
at `https://speed.cloudflare.com`. It reads the connection details that the
server reports. It then measures request latency, and times downloads and
uploads over a growing range of payload sizes. For each test type and payload
size it computes the minimum, first quartile, median, third quartile, maximum
and average throughput in Mbit/s.

## Installation

```
pip install .
```

## Command line

```
cfspeed
```

The command prints `Running speed test...` and runs a full test. It then
prints every single measurement, one per line, in this form:
`Download: <TAB>1MB<TAB>-> 93.4`. Run `cfspeed --help` to list the options:

- `-n`, `--nr-tests`: test runs per payload size (default 5)
- `--nr-latency-tests`: number of latency tests (default 20)
- `-m`, `--max-payload-size`: largest payload, one of `100k`, `1m`, `10m`,
  `25m`, `100m` (default `10m`)
- `-o`, `--output-format`: summary output, one of `csv`, `json`,
  `json-pretty`, `stdout` (by default no summary is written)
- `-v`, `--verbose`: log at debug level, and log box plots with `stdout` output
- `--disable-dynamic-max-payload-size`: never skip larger payloads
- `--download-only`, `--upload-only`: run only one direction

## Library use

```python
import requests

from cfspeed.options import OutputFormat, SpeedTestOptions
from cfspeed.speedtest import speed_test
from cfspeed.units import PayloadSize

options = SpeedTestOptions(
    nr_tests=5,
    nr_latency_tests=20,
    max_payload_size=PayloadSize.M10,
    output_format=OutputFormat.JSON,
)

with requests.Session() as session:
    measurements = speed_test(session, options)

for measurement in measurements:
    print(measurement)
```

`speed_test` returns a list of `Measurement` objects. Each one has a
`test_type` (`TestType.DOWNLOAD` or `TestType.UPLOAD`), a `payload_size` in
bytes and `mbit`. The defaults of `SpeedTestOptions` are 10 tests per size,
25 latency tests, a 25 MB maximum payload and no summary output.

You can also run single parts of the test yourself:

```python
import requests

from cfspeed.options import OutputFormat
from cfspeed.speedtest import fetch_metadata, run_latency_test, test_download
from cfspeed.units import PayloadSize

with requests.Session() as session:
    print(fetch_metadata(session))
    samples, average = run_latency_test(session, 20, OutputFormat.NONE)
    mbit = test_download(session, PayloadSize.M10.value, OutputFormat.NONE)
```

`run_latency_test(session, n, ...)` makes `n + 1` probes. Each latency is the
round trip time in milliseconds minus the server's own processing time, which
is read from the `Server-Timing` header. Values below zero count as zero.

`cfspeed.measurements` also exposes `calc_stats`, `median`,
`stats_by_test_type` and `log_measurements`. Use them to summarise
measurements you collected yourself. `log_measurements` accepts an optional
`stream` to write to instead of standard output. It returns the list of
`StatMeasurement` summaries.

### Payload sizes

`PayloadSize.parse` accepts these spellings, with any letter case:

- `100k` or `100kb`
- `1m` or `1mb`
- `10m` or `10mb`
- `25m` or `25mb`
- `100m` or `100mb`

It also accepts the same sizes written as plain or underscore-separated byte
counts, such as `10_000_000`. Any other value raises `ValueError`.

Tests run with every size up to the chosen maximum, smallest first
(`sizes_from_max`). Once the runs for one size have taken longer than five
seconds in total, larger sizes are skipped. Set
`disable_dynamic_max_payload_size=True` to turn this off.

### Output formats

`OutputFormat.parse` accepts these values, with any letter case:

- `csv`
- `json`
- `json-pretty` (also written `json_pretty`)
- `stdout`

Any other value raises `ValueError`.

- `csv` writes the summary statistics to the output stream with a header row
  (`test_type,payload_size,min,q1,median,q3,max,avg`). Nothing is written when
  there are no measurements.
- `json` writes the statistics as a compact JSON list. `json-pretty` writes
  the same list indented.
- `stdout` sends a summary to the `logging` debug log. This summary holds the
  connection details, the average latency, the speed of each run and the
  min/max/avg per payload size. When `verbose` is set, it also logs a text
  box plot for each payload size (`cfspeed.boxplot.render_plot`).

## Limitations

- `SpeedTestOptions` has `ipv4` and `ipv6` fields, but nothing uses them.
  Requests go over whatever address family `requests` picks. You cannot bind
  to a source address.
- No progress indicator is shown while the tests run.
- Network errors from `requests` are not caught. They end the run.

## Running the tests

```
pip install .[test]
pytest
```