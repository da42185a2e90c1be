from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ConfigError(ValueError):
    """Raised when the server configuration cannot be used."""


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=0, le=65535)
    static_dir: Path = Path("front/dist")
    wasm_dir: Path = Path("wasm/pkg")
    api_prefix: str = "/-"
    wasm_prefix: str = "/wasm"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return level


# Environment variable -> ServerConfig field
ENV_FIELDS = {
    "HOST": "host",
    "PORT": "port",
    "STATIC_DIR": "static_dir",
    "WASM_DIR": "wasm_dir",
    "API_PREFIX": "api_prefix",
    "WASM_PREFIX": "wasm_prefix",
    "LOG_LEVEL": "log_level",
}


# Static segments only; braces would become path parameters.
PREFIX_PATTERN = re.compile(r"(/[A-Za-z0-9._~-]+)+")


def check_mount_prefixes(prefixes: list[str]) -> None:
    """Fail fast when two mounts would shadow each other.

    The root mount is implicit and always last, so every explicit prefix must
    be a non-root absolute path that neither equals nor contains another.
    """
    for prefix in prefixes:
        if not prefix.startswith("/"):
            raise ConfigError(f"mount prefix {prefix!r} must start with '/'")
        if prefix == "/" or prefix.endswith("/"):
            raise ConfigError(f"mount prefix {prefix!r} must not end with '/'")
        if not PREFIX_PATTERN.fullmatch(prefix):
            raise ConfigError(f"mount prefix {prefix!r} must be a literal path")
    for i, left in enumerate(prefixes):
        for right in prefixes[i + 1 :]:
            if left == right:
                raise ConfigError(f"mount prefix {left!r} is registered twice")
            if right.startswith(left + "/") or left.startswith(right + "/"):
                raise ConfigError(f"mount prefixes {left!r} and {right!r} overlap")


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    env = os.environ if environ is None else environ
    values = {field: env[name] for name, field in ENV_FIELDS.items() if env.get(name)}
    try:
        config = ServerConfig(**values)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    check_mount_prefixes([config.api_prefix, config.wasm_prefix])
    return config
