[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cfspeed"
version = "0.1.0"
description = "Measure latency, download and upload speed against the Cloudflare speed test endpoints"
requires-python = ">=3.10"
keywords = ["speedtest", "speed-test", "cloudflare", "bandwidth", "latency"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
cfspeed = "cfspeed.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cfspeed"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
