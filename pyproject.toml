[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "theine"
version = "0.1.0"
description = "Building blocks for a W-TinyLFU cache: count-min sketch, bloom filter doorkeeper, SLRU lists, read buffers, reader-biased locks and single-flight calls."
requires-python = ">=3.10"
dependencies = []
keywords = ["cache", "tinylfu", "w-tinylfu", "count-min-sketch", "bloom-filter", "slru", "singleflight"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["theine"]

[tool.pytest.ini_options]
addopts = "-ra"
