"""Scoreboard state record.

:class:`ScoreboardState` is the flat record persisted to disk and served to
the controller and display clients. Every field carries a named default so a
record always holds the full field set.

Fields fall into two groups:

* remote-sourced statistics (:data:`REMOTE_FIELDS`), refreshed by the sync loop
* local-only selection and display settings (:data:`LOCAL_ONLY_FIELDS`),
  changed only by the controller
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

#: Per-player statistic suffixes, in persisted order.
PLAYER_STAT_FIELDS: tuple[str, ...] = (
    "points_on_serve",
    "forced_errors",
    "unforced_errors",
    "smash_wins",
    "lob_wins",
    "drive_wins",
    "net_errors",
    "missed_errors",
    "out_errors",
)

PLAYER_SIDES: tuple[str, ...] = ("a", "b")


class ScoreboardState(BaseModel):
    """Full application state.

    Assignment is validated, so ``setattr`` coerces the value to the field's
    type (``"3"`` to ``3``, ``"true"`` to ``True``) or raises
    :class:`pydantic.ValidationError`.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        coerce_numbers_to_str=True,
    )

    selected_game: int = 1
    rally_count: int = 0

    player_a_name: str = "Player A"
    player_a_points_on_serve: int = 0
    player_a_forced_errors: int = 0
    player_a_unforced_errors: int = 0
    player_a_smash_wins: int = 0
    player_a_lob_wins: int = 0
    player_a_drive_wins: int = 0
    player_a_net_errors: int = 0
    player_a_missed_errors: int = 0
    player_a_out_errors: int = 0

    player_b_name: str = "Player B"
    player_b_points_on_serve: int = 0
    player_b_forced_errors: int = 0
    player_b_unforced_errors: int = 0
    player_b_smash_wins: int = 0
    player_b_lob_wins: int = 0
    player_b_drive_wins: int = 0
    player_b_net_errors: int = 0
    player_b_missed_errors: int = 0
    player_b_out_errors: int = 0

    singlebar_visible: bool = True
    doublebar_visible: bool = True
    doublebar_metric: str = "points_on_serve"
    singleplayer_visible: bool = True
    singleplayer_player: str = "a"
    singleplayer_metric: str = "points_on_serve"
    triplebar_visible: bool = True
    triplebar_player: str = "a"
    triplebar_type: str = "shotwins"
    errorscomparison_visible: bool = True
    errorscomparison_player: str = "a"

    def to_document(self) -> dict[str, Any]:
        """Plain JSON-compatible dict in schema field order."""
        return self.model_dump(mode="json")


def default_player_name(side: str) -> str:
    """Placeholder name for player ``side`` (``"a"`` or ``"b"``)."""
    return f"Player {side.upper()}"


#: Every field of the record; also the write allow-list.
ALL_FIELDS: tuple[str, ...] = tuple(ScoreboardState.model_fields)
ALLOWED_KEYS: frozenset[str] = frozenset(ALL_FIELDS)

REMOTE_FIELDS: tuple[str, ...] = (
    "rally_count",
    *(f"player_{side}_{suffix}" for side in PLAYER_SIDES for suffix in ("name", *PLAYER_STAT_FIELDS)),
)

DISPLAY_FIELDS: tuple[str, ...] = tuple(
    name for name in ALL_FIELDS if name not in REMOTE_FIELDS and name != "selected_game"
)

#: Fields the sync loop must carry over unchanged from the current state.
LOCAL_ONLY_FIELDS: tuple[str, ...] = ("selected_game", *DISPLAY_FIELDS)
