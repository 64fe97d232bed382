[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mbpbook"
version = "0.1.0"
description = "Rebuild a market-by-price (MBP-10) book from a market-by-order (MBO) message stream"
requires-python = ">=3.10"
dependencies = []
keywords = ["order book", "market data", "mbo", "mbp", "trading"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mbpbook = "mbpbook.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mbpbook"]

[tool.pytest.ini_options]
addopts = "-ra"
