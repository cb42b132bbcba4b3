"""Remote scoreboard payload models.

The remote source publishes one document per match::

    {
        "games": {"game_1": {"players": {"player_a": {...}, "player_b": {...}}}},
        "match_metadata": {"rally_count": 12}
    }

These models read one game's players and the match metadata. Counters that
are absent, null, falsy or unreadable resolve to ``0``; a legitimate ``0``
is therefore indistinguishable from a missing counter. Fractional counters
are truncated toward zero, since the state record stores whole numbers.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from rallyboard.ingestion.normalize import counter_or_zero, text_or_none


def _mapping_or_empty(value: Any) -> Any:
    return value if isinstance(value, dict) else {}


class RemotePlayer(BaseModel):
    """Raw counters for one player in one game.

    Parameters
    ----------
    name : str or None
        Player name; ``None`` when absent or falsy.
    points_on_serve, forced_errors, unforced_errors : int
        Serve points and error totals.
    smash_wins, lob_wins, drive_wins : int
        Shot-type win counts.
    net_errors, missed_errors, out_errors : int
        Error-type counts (remote keys ``net``, ``missed``, ``out``).
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str | None = None
    points_on_serve: int = 0
    forced_errors: int = 0
    unforced_errors: int = 0
    smash_wins: int = 0
    lob_wins: int = 0
    drive_wins: int = 0
    net_errors: int = Field(default=0, validation_alias=AliasChoices("net", "net_errors"))
    missed_errors: int = Field(default=0, validation_alias=AliasChoices("missed", "missed_errors"))
    out_errors: int = Field(default=0, validation_alias=AliasChoices("out", "out_errors"))

    @field_validator(
        "points_on_serve",
        "forced_errors",
        "unforced_errors",
        "smash_wins",
        "lob_wins",
        "drive_wins",
        "net_errors",
        "missed_errors",
        "out_errors",
        mode="before",
    )
    @classmethod
    def _coerce_counters(cls, value: Any) -> int:
        return counter_or_zero(value)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        return text_or_none(value)


class RemotePlayers(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    player_a: RemotePlayer = Field(default_factory=RemotePlayer)
    player_b: RemotePlayer = Field(default_factory=RemotePlayer)

    @field_validator("player_a", "player_b", mode="before")
    @classmethod
    def _ignore_non_mappings(cls, value: Any) -> Any:
        return _mapping_or_empty(value)


class MatchMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    rally_count: int = 0

    @field_validator("rally_count", mode="before")
    @classmethod
    def _coerce_rally_count(cls, value: Any) -> int:
        return counter_or_zero(value)
