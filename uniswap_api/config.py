"""Application settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


class ConfigError(Exception):
    """Raised when the environment does not hold a valid configuration."""


@dataclass
class Environment:
    """Settings of the API process."""

    node_url: str
    app_name: str = "uniswap-api"
    port: int = 1337
    log_level: str = "trace"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    cors_methods: list[str] = field(default_factory=list)


def _parse_int(key: str, value: str) -> int:
    sign, text = ("", value) if value[:1] not in ("+", "-") else (value[0], value[1:])
    if len(text) > 1 and text[0] == "0" and (text[1].isdigit() or text[1] == "_"):
        text = "0o" + text[1:]
    try:
        number = int(sign + text, 0)
    except ValueError as exc:
        raise ConfigError(f"{key}: cannot parse {value!r} as int") from exc
    if not -(2**63) <= number < 2**63:
        raise ConfigError(f"{key}: value {value!r} out of range")
    return number


def _parse_list(value: str) -> list[str]:
    return value.split(",") if value.strip() else []


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Environment:
    """Build an ``Environment`` from ``environ`` (``os.environ`` by default)."""
    env = os.environ if environ is None else environ
    if "NODE_URL" not in env:
        raise ConfigError("required key NODE_URL missing value")

    settings = Environment(node_url=env["NODE_URL"])
    settings.app_name = env.get("APP_NAME", settings.app_name)
    settings.log_level = env.get("LOG_LEVEL", settings.log_level)
    if "PORT" in env:
        settings.port = _parse_int("PORT", env["PORT"])
    if "CORS_ORIGINS" in env:
        settings.cors_origins = _parse_list(env["CORS_ORIGINS"])
    if "CORS_METHODS" in env:
        settings.cors_methods = _parse_list(env["CORS_METHODS"])
    return settings