[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jimmybsc"
version = "0.1.0"
description = "Building blocks for a BNB Smart Chain pair watcher: websocket log subscriptions, address derivation, BNB formatting, caches, debug logs and UI state helpers."
requires-python = ">=3.10"
keywords = ["bsc", "bnb", "websocket", "eth_subscribe", "keccak", "trading"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Office/Business :: Financial :: Investment",
]
dependencies = [
    "websockets>=12.0",
    "cryptography>=42.0",
    "pycryptodome>=3.20",
]

[project.optional-dependencies]
test = [
    "pytest>=8.0",
    "pytest-asyncio>=0.23",
    "respx>=0.21",
]

[tool.hatch.build.targets.wheel]
packages = ["jimmybsc"]

[tool.hatch.build.targets.sdist]
include = ["jimmybsc", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
ignore_missing_imports = true
