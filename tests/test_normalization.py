from __future__ import annotations

import copy
from typing import Any

import pytest

from rallyboard.ingestion.normalize import counter_or_zero, text_or_none
from rallyboard.ingestion.remote import normalize_remote_payload
from rallyboard.models.state import LOCAL_ONLY_FIELDS, REMOTE_FIELDS


def _player(name: str, base: int) -> dict[str, Any]:
    return {
        "name": name,
        "points_on_serve": base + 1,
        "forced_errors": base + 2,
        "unforced_errors": base + 3,
        "smash_wins": base + 4,
        "lob_wins": base + 5,
        "drive_wins": base + 6,
        "net": base + 7,
        "missed": base + 8,
        "out": base + 9,
    }


def _payload() -> dict[str, Any]:
    return {
        "games": {
            "game_1": {"players": {"player_a": _player("Ann", 0), "player_b": _player("Bea", 10)}},
            "game_2": {"players": {"player_a": _player("Cid", 20), "player_b": _player("Dee", 30)}},
        },
        "match_metadata": {"rally_count": 42},
    }


def test_full_payload_maps_every_counter() -> None:
    patch = normalize_remote_payload(_payload(), 1)

    assert patch == {
        "rally_count": 42,
        "player_a_name": "Ann",
        "player_a_points_on_serve": 1,
        "player_a_forced_errors": 2,
        "player_a_unforced_errors": 3,
        "player_a_smash_wins": 4,
        "player_a_lob_wins": 5,
        "player_a_drive_wins": 6,
        "player_a_net_errors": 7,
        "player_a_missed_errors": 8,
        "player_a_out_errors": 9,
        "player_b_name": "Bea",
        "player_b_points_on_serve": 11,
        "player_b_forced_errors": 12,
        "player_b_unforced_errors": 13,
        "player_b_smash_wins": 14,
        "player_b_lob_wins": 15,
        "player_b_drive_wins": 16,
        "player_b_net_errors": 17,
        "player_b_missed_errors": 18,
        "player_b_out_errors": 19,
    }


def test_selected_game_picks_matching_sub_object() -> None:
    patch = normalize_remote_payload(_payload(), 2)

    assert patch is not None
    assert patch["player_a_name"] == "Cid"
    assert patch["player_b_out_errors"] == 39


def test_patch_holds_only_remote_fields() -> None:
    patch = normalize_remote_payload(_payload(), 1)

    assert patch is not None
    assert set(patch) == set(REMOTE_FIELDS)
    assert not set(patch) & set(LOCAL_ONLY_FIELDS)


@pytest.mark.parametrize("payload", [None, "text", 12, [1, 2], True])
def test_non_object_payload_returns_none(payload: Any) -> None:
    assert normalize_remote_payload(payload, 1) is None


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"games": None},
        {"games": []},
        {"games": {"game_2": {"players": {}}}},
        {"games": {"game_1": "broken"}},
    ],
)
def test_missing_game_returns_none(payload: dict[str, Any]) -> None:
    assert normalize_remote_payload(payload, 1) is None


@pytest.mark.parametrize("game", [{}, {"players": None}, {"players": "nope"}])
def test_missing_players_returns_none(game: dict[str, Any]) -> None:
    assert normalize_remote_payload({"games": {"game_1": game}}, 1) is None


def test_absent_and_falsy_counters_default_to_zero_and_placeholder_names() -> None:
    payload = {
        "games": {
            "game_1": {
                "players": {
                    "player_a": {"name": "", "points_on_serve": None, "smash_wins": False},
                    "player_b": {},
                }
            }
        }
    }

    patch = normalize_remote_payload(payload, 1)

    assert patch is not None
    assert patch["rally_count"] == 0
    assert patch["player_a_name"] == "Player A"
    assert patch["player_b_name"] == "Player B"
    assert patch["player_a_points_on_serve"] == 0
    assert patch["player_a_smash_wins"] == 0
    assert patch["player_b_net_errors"] == 0


def test_explicit_zero_counter_stays_zero() -> None:
    payload = _payload()
    payload["games"]["game_1"]["players"]["player_a"]["lob_wins"] = 0
    payload["match_metadata"]["rally_count"] = 0

    patch = normalize_remote_payload(payload, 1)

    assert patch is not None
    assert patch["player_a_lob_wins"] == 0
    assert patch["rally_count"] == 0


def test_empty_players_object_yields_defaults_for_both_players() -> None:
    patch = normalize_remote_payload({"games": {"game_1": {"players": {}}}}, 1)

    assert patch is not None
    assert patch["player_a_name"] == "Player A"
    assert patch["player_b_name"] == "Player B"
    assert all(patch[f"player_b_{suffix}"] == 0 for suffix in ("points_on_serve", "out_errors"))


def test_non_object_player_and_metadata_yield_defaults() -> None:
    payload = {
        "games": {"game_1": {"players": {"player_a": "gone", "player_b": _player("Bea", 0)}}},
        "match_metadata": ["unexpected"],
    }

    patch = normalize_remote_payload(payload, 1)

    assert patch is not None
    assert patch["player_a_name"] == "Player A"
    assert patch["player_a_drive_wins"] == 0
    assert patch["player_b_drive_wins"] == 6
    assert patch["rally_count"] == 0


def test_string_counters_are_coerced() -> None:
    payload = _payload()
    payload["games"]["game_1"]["players"]["player_a"]["forced_errors"] = "5"
    payload["games"]["game_1"]["players"]["player_a"]["unforced_errors"] = "n/a"

    patch = normalize_remote_payload(payload, 1)

    assert patch is not None
    assert patch["player_a_forced_errors"] == 5
    assert patch["player_a_unforced_errors"] == 0


def test_payload_is_not_mutated() -> None:
    payload = _payload()
    snapshot = copy.deepcopy(payload)

    normalize_remote_payload(payload, 1)

    assert payload == snapshot


def test_scalar_helpers() -> None:
    assert counter_or_zero("3.0") == 3
    assert counter_or_zero(float("nan")) == 0
    assert counter_or_zero(float("inf")) == 0
    assert counter_or_zero(None) == 0
    assert counter_or_zero("7") == 7
    assert counter_or_zero("abc") == 0
    assert text_or_none(0) is None
    assert text_or_none("Ann") == "Ann"
    assert text_or_none(12) == "12"


def test_fractional_counters_are_truncated() -> None:
    payload = _payload()
    player_a = payload["games"]["game_1"]["players"]["player_a"]
    player_a["smash_wins"] = 0.5
    player_a["lob_wins"] = "2.9"

    patch = normalize_remote_payload(payload, 1)

    assert patch is not None
    assert patch["player_a_smash_wins"] == 0
    assert patch["player_a_lob_wins"] == 2
