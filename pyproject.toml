[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glibutil"
version = "1.0.81"
description = "Compact integer and TLV encoding, version words, time-weighted integer history, integer arrays, and asyncio idle pools and queues"
requires-python = ">=3.10"
dependencies = []
keywords = ["mbn", "tlv", "varint", "idle", "asyncio", "history", "utilities"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["glibutil"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
