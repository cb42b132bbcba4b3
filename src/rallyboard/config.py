"""Server configuration for rallyboard."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar

from rallyboard._constants import (
    DEFAULT_DATA_FILE,
    DEFAULT_HOST,
    DEFAULT_POLL_MS,
    DEFAULT_PORT,
    DEFAULT_PUBLIC_DIR,
    DEFAULT_REMOTE_TIMEOUT,
    DEFAULT_VIEWS,
)
from rallyboard.exceptions import RallyboardConfigError

T = TypeVar("T")


def _env_number(env: Mapping[str, str], key: str, parse: Callable[[str], T]) -> T | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    try:
        return parse(value.strip())
    except ValueError as exc:
        raise RallyboardConfigError(f"{key} must be a number, got {value!r}") from exc


def _split_views(value: str) -> tuple[str, ...]:
    return tuple(name.strip().strip("/") for name in value.split(",") if name.strip().strip("/"))


@dataclasses.dataclass(frozen=True)
class ServerConfig:
    """Server configuration.

    Parameters
    ----------
    host : str
        Interface the HTTP server binds to.
    port : int
        Listening port.
    data_file : Path
        Location of the persisted state document.
    public_dir : Path
        Directory holding the display pages (``<view>.html``) and their assets.
    remote_source_url : str
        URL of the remote scoreboard payload. Empty disables remote sync.
    remote_poll_ms : int
        Delay between the end of one sync cycle and the start of the next.
    remote_timeout : float
        Total timeout in seconds for one remote fetch.
    views : tuple of str
        Names of the display pages served as ``/<name>``.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    data_file: Path = Path(DEFAULT_DATA_FILE)
    public_dir: Path = Path(DEFAULT_PUBLIC_DIR)
    remote_source_url: str = ""
    remote_poll_ms: int = DEFAULT_POLL_MS
    remote_timeout: float = DEFAULT_REMOTE_TIMEOUT
    views: tuple[str, ...] = DEFAULT_VIEWS

    def __post_init__(self) -> None:
        # Normalise path-like inputs coming from the environment or argparse.
        object.__setattr__(self, "data_file", Path(self.data_file))
        object.__setattr__(self, "public_dir", Path(self.public_dir))
        object.__setattr__(self, "remote_source_url", (self.remote_source_url or "").strip())
        if not 0 <= self.port <= 65535:
            raise RallyboardConfigError(f"port must be between 0 and 65535, got {self.port}")
        if self.remote_poll_ms <= 0:
            raise RallyboardConfigError(f"remote_poll_ms must be positive, got {self.remote_poll_ms}")
        if self.remote_timeout <= 0:
            raise RallyboardConfigError(f"remote_timeout must be positive, got {self.remote_timeout}")

    @property
    def sync_enabled(self) -> bool:
        """Whether a remote source is configured."""
        return bool(self.remote_source_url)

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.remote_poll_ms / 1000.0

    @classmethod
    def from_env(cls, **overrides: Any) -> ServerConfig:
        """Create configuration from environment variables.

        Reads ``PORT``, ``REMOTE_SOURCE_URL`` and ``REMOTE_POLL_MS`` plus the
        optional ``HOST``, ``STATE_FILE``, ``PUBLIC_DIR``, ``REMOTE_TIMEOUT``
        and ``SCOREBOARD_VIEWS`` variables. Explicit keyword arguments
        override environment values; ``None`` overrides are ignored so
        unset command-line options fall through.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ServerConfig
            Populated configuration.
        """
        env = os.environ
        overrides = {key: value for key, value in overrides.items() if value is not None}

        _ENV_CONFIG_MAP = {
            "HOST": "host",
            "STATE_FILE": "data_file",
            "PUBLIC_DIR": "public_dir",
            "REMOTE_SOURCE_URL": "remote_source_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # An unparseable numeric value raises RallyboardConfigError.
        _ENV_NUMERIC_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "PORT": ("port", int),
            "REMOTE_POLL_MS": ("remote_poll_ms", int),
            "REMOTE_TIMEOUT": ("remote_timeout", float),
        }
        for env_key, (field_name, parse) in _ENV_NUMERIC_MAP.items():
            if field_name in overrides:
                continue
            parsed = _env_number(env, env_key, parse)
            if parsed is not None:
                config_kwargs[field_name] = parsed

        views_env = env.get("SCOREBOARD_VIEWS")
        if views_env is not None and "views" not in overrides:
            config_kwargs["views"] = _split_views(views_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
