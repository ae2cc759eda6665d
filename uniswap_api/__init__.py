"""Uniswap V2 swap output estimation, with a Flask HTTP API around it."""

__version__ = "0.0.1"