"""Data models for the scoreboard state and the remote payload."""

from rallyboard.models.remote import MatchMetadata, RemotePlayer, RemotePlayers
from rallyboard.models.state import (
    ALL_FIELDS,
    ALLOWED_KEYS,
    DISPLAY_FIELDS,
    LOCAL_ONLY_FIELDS,
    PLAYER_STAT_FIELDS,
    REMOTE_FIELDS,
    ScoreboardState,
    default_player_name,
)

__all__ = [
    "ALL_FIELDS",
    "ALLOWED_KEYS",
    "DISPLAY_FIELDS",
    "LOCAL_ONLY_FIELDS",
    "PLAYER_STAT_FIELDS",
    "REMOTE_FIELDS",
    "MatchMetadata",
    "RemotePlayer",
    "RemotePlayers",
    "ScoreboardState",
    "default_player_name",
]
