[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uniswap-api"
version = "0.0.1"
description = "HTTP service that estimates Uniswap V2 swap output amounts from pool reserves"
requires-python = ">=3.10"
keywords = ["uniswap", "ethereum", "defi", "amm", "swap", "estimate", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Framework :: Flask",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business :: Financial :: Investment",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["uniswap_api"]

[tool.pytest.ini_options]
addopts = "-ra"
