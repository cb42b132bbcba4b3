from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from aiohttp import test_utils, web

from rallyboard.config import ServerConfig
from rallyboard.server import SYNC_KEY, create_app


@dataclass
class FakeScoreboardBackend:
    """Remote scoreboard serving a mutable payload."""

    payload: dict[str, Any] = field(default_factory=dict)
    status: int = 200
    calls: int = 0

    async def handle(self, _request: web.Request) -> web.Response:
        self.calls += 1
        if self.status != 200:
            return web.Response(status=self.status, text="unavailable")
        return web.json_response(self.payload)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/exec", self.handle)
        return app


def _game(name_a: str, name_b: str, smash: int) -> dict[str, Any]:
    return {
        "players": {
            "player_a": {"name": name_a, "smash_wins": smash, "missed": 2},
            "player_b": {"name": name_b, "lob_wins": 1},
        }
    }


async def _wait_for(predicate: Any, client: test_utils.TestClient, timeout: float = 3.0) -> dict[str, Any]:
    deadline = asyncio.get_running_loop().time() + timeout
    while True:
        state = await (await client.get("/api/state")).json()
        if predicate(state) or asyncio.get_running_loop().time() > deadline:
            return state
        await asyncio.sleep(0.02)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_remote_sync_feeds_api_and_preserves_controller_settings(tmp_path: Path) -> None:
    backend = FakeScoreboardBackend(
        payload={"games": {"game_1": _game("Ann", "Bea", 3)}, "match_metadata": {"rally_count": 6}}
    )

    async with test_utils.TestServer(backend.app()) as remote:
        config = ServerConfig(
            data_file=tmp_path / "state.json",
            public_dir=tmp_path,
            remote_source_url=str(remote.make_url("/exec")),
            remote_poll_ms=20,
        )
        async with test_utils.TestClient(test_utils.TestServer(create_app(config))) as client:
            state = await _wait_for(lambda s: s["player_a_name"] == "Ann", client)
            assert state["player_a_smash_wins"] == 3
            assert state["player_a_missed_errors"] == 2
            assert state["player_b_lob_wins"] == 1
            assert state["rally_count"] == 6

            await client.post("/api/state", json={"singlebar_visible": False, "triplebar_player": "b"})
            backend.payload = {"games": {"game_1": _game("Ann", "Bea", 9)}}

            state = await _wait_for(lambda s: s["player_a_smash_wins"] == 9, client)
            assert state["player_a_smash_wins"] == 9
            assert state["rally_count"] == 0
            assert state["singlebar_visible"] is False
            assert state["triplebar_player"] == "b"

            assert client.server.app[SYNC_KEY].is_running

    assert backend.calls >= 2


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_selecting_missing_game_keeps_state(tmp_path: Path) -> None:
    backend = FakeScoreboardBackend(payload={"games": {"game_1": _game("Ann", "Bea", 3)}})

    async with test_utils.TestServer(backend.app()) as remote:
        config = ServerConfig(
            data_file=tmp_path / "state.json",
            public_dir=tmp_path,
            remote_source_url=str(remote.make_url("/exec")),
            remote_poll_ms=20,
        )
        async with test_utils.TestClient(test_utils.TestServer(create_app(config))) as client:
            await _wait_for(lambda s: s["player_a_name"] == "Ann", client)
            selected = await (await client.post("/api/state", json={"selected_game": 2})).json()

            calls = backend.calls
            await _wait_for(lambda _s: backend.calls >= calls + 3, client)
            state = await (await client.get("/api/state")).json()

    assert state == selected


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_unavailable_remote_keeps_serving_local_state(tmp_path: Path) -> None:
    backend = FakeScoreboardBackend(status=503)

    async with test_utils.TestServer(backend.app()) as remote:
        config = ServerConfig(
            data_file=tmp_path / "state.json",
            public_dir=tmp_path,
            remote_source_url=str(remote.make_url("/exec")),
            remote_poll_ms=20,
        )
        async with test_utils.TestClient(test_utils.TestServer(create_app(config))) as client:
            await client.post("/api/state", json={"player_b_name": "Bea"})
            await _wait_for(lambda _s: backend.calls >= 2, client)
            resp = await client.get("/api/state")
            state = await resp.json()

    assert resp.status == 200
    assert state["player_b_name"] == "Bea"
