"""rallyboard - Scoreboard state sync server for controller and display clients."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("rallyboard")
except PackageNotFoundError:
    __version__ = "0+local"
from rallyboard._transport import HttpRemoteSource, RemoteTransport
from rallyboard.config import ServerConfig
from rallyboard.exceptions import (
    RallyboardConfigError,
    RallyboardError,
    RallyboardStoreError,
    RallyboardTransportError,
)
from rallyboard.ingestion.remote import normalize_remote_payload
from rallyboard.ingestion.sync import RemoteSync
from rallyboard.models import ScoreboardState
from rallyboard.server import create_app
from rallyboard.state.store import StateStore

__all__ = [
    "__version__",
    "HttpRemoteSource",
    "RallyboardConfigError",
    "RallyboardError",
    "RallyboardStoreError",
    "RallyboardTransportError",
    "RemoteSync",
    "RemoteTransport",
    "ScoreboardState",
    "ServerConfig",
    "StateStore",
    "create_app",
    "normalize_remote_payload",
]
