"""Remote payload normalization.

Turns the nested remote document into a flat patch keyed by
:class:`rallyboard.models.state.ScoreboardState` field names. Only
remote-sourced fields are produced; local-only selection and display
settings never appear in a patch.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from rallyboard._constants import GAME_KEY_PREFIX
from rallyboard.models.remote import MatchMetadata, RemotePlayer, RemotePlayers
from rallyboard.models.state import PLAYER_STAT_FIELDS, default_player_name

_logger = logging.getLogger(__name__)


def game_key(selected_game: int) -> str:
    return f"{GAME_KEY_PREFIX}{selected_game}"


def _player_patch(side: str, player: RemotePlayer) -> dict[str, Any]:
    patch: dict[str, Any] = {f"player_{side}_name": player.name or default_player_name(side)}
    for suffix in PLAYER_STAT_FIELDS:
        patch[f"player_{side}_{suffix}"] = getattr(player, suffix)
    return patch


def normalize_remote_payload(payload: Any, selected_game: int) -> dict[str, Any] | None:
    """Build a state patch for ``selected_game`` from a remote payload.

    Returns ``None`` ("nothing to sync this cycle") when the payload is not
    an object, when ``games.game_<selected_game>`` is missing, or when that
    game carries no ``players`` object. The payload is never mutated.
    """
    if not isinstance(payload, Mapping):
        _logger.debug("Remote payload is not an object: %s", type(payload).__name__)
        return None

    games = payload.get("games")
    key = game_key(selected_game)
    game = games.get(key) if isinstance(games, Mapping) else None
    if not isinstance(game, Mapping):
        _logger.debug("Remote payload has no %s", key)
        return None

    players_raw = game.get("players")
    if not isinstance(players_raw, Mapping):
        _logger.debug("Remote %s has no players", key)
        return None

    players = RemotePlayers.model_validate(dict(players_raw))
    metadata_raw = payload.get("match_metadata")
    metadata = MatchMetadata.model_validate(dict(metadata_raw) if isinstance(metadata_raw, Mapping) else {})

    patch: dict[str, Any] = {"rally_count": metadata.rally_count}
    patch.update(_player_patch("a", players.player_a))
    patch.update(_player_patch("b", players.player_b))
    return patch
