"""Configuration management for mpvipc."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore


DEFAULT_SOCKET_PATH = "/tmp/mpvsocket"


@dataclass
class ClientConfig:
    """Socket client settings."""

    socket_path: str = DEFAULT_SOCKET_PATH
    timeout: float | None = None
    chunk_size: int = 512
    match_request_id: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "warning"


@dataclass
class Config:
    """Full mpvipc configuration."""

    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the mpvipc config directory."""
    if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config) / "mpvipc"
    return Path.home() / ".config" / "mpvipc"


def load_config(path: Path | None = None) -> Config:
    """Load configuration from file."""
    config_file = path or get_config_dir() / "config.toml"

    if not config_file.exists():
        return Config()

    with open(config_file, "rb") as f:
        data = tomllib.load(f)

    return Config(
        client=ClientConfig(**data.get("client", {})),
        logging=LoggingConfig(**data.get("logging", {})),
    )


def get_socket_path(config: Config) -> str:
    """Get the socket path, letting MPVIPC_SOCKET override the config."""
    if env_socket := os.environ.get("MPVIPC_SOCKET"):
        return env_socket
    return config.client.socket_path
