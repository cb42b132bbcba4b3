"""aiohttp application serving the scoreboard state and display pages."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import aiohttp
from aiohttp import web

from rallyboard._transport import HttpRemoteSource, RemoteTransport
from rallyboard.config import ServerConfig
from rallyboard.ingestion.sync import RemoteSync
from rallyboard.state.merge import apply_client_update
from rallyboard.state.store import StateStore

_logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", ServerConfig)
STORE_KEY = web.AppKey("store", StateStore)
SYNC_KEY = web.AppKey("remote_sync", RemoteSync)

_NO_STORE = {"Cache-Control": "no-store"}

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


async def get_state(request: web.Request) -> web.Response:
    """Return the freshest on-disk state."""
    state = request.app[STORE_KEY].read()
    return web.json_response(state.to_document(), headers=_NO_STORE)


async def post_state(request: web.Request) -> web.Response:
    """Apply allowed keys from the JSON body and return the resulting state."""
    raw = await request.read()
    body: object = {}
    if raw.strip():
        try:
            # Undecodable bytes raise UnicodeDecodeError, a ValueError.
            body = json.loads(raw)
        except ValueError:
            return web.json_response({"error": "Request body is not valid JSON"}, status=400)
    if not isinstance(body, dict):
        _logger.debug("Ignoring non-object state update: %s", type(body).__name__)
        body = {}

    store = request.app[STORE_KEY]
    updated = apply_client_update(store.read(), body)
    store.write(updated)
    return web.json_response(updated.to_document(), headers=_NO_STORE)


def _view_handler(page: Path) -> Handler:
    async def handler(request: web.Request) -> web.StreamResponse:
        if not page.is_file():
            raise web.HTTPNotFound(text=f"{page.name} not found")
        return web.FileResponse(page)

    return handler


def _remote_sync_context(
    transport_factory: Callable[[aiohttp.ClientSession], RemoteTransport] | None,
) -> Callable[[web.Application], AsyncIterator[None]]:
    async def remote_sync(app: web.Application) -> AsyncIterator[None]:
        config = app[CONFIG_KEY]
        timeout = aiohttp.ClientTimeout(total=config.remote_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            if transport_factory is not None:
                transport = transport_factory(session)
            else:
                transport = HttpRemoteSource(config.remote_source_url, session)
            sync = RemoteSync(app[STORE_KEY], transport, interval=config.poll_interval)
            app[SYNC_KEY] = sync
            _logger.info(
                "Remote sync enabled: %s every %d ms",
                config.remote_source_url,
                config.remote_poll_ms,
            )
            sync.start()
            try:
                yield
            finally:
                await sync.stop()

    return remote_sync


def create_app(
    config: ServerConfig,
    *,
    store: StateStore | None = None,
    transport_factory: Callable[[aiohttp.ClientSession], RemoteTransport] | None = None,
) -> web.Application:
    """Build the application.

    The state file is bootstrapped here, so a store that cannot be created
    fails startup. The remote sync loop is attached to the application
    lifecycle when a remote URL is configured.

    Parameters
    ----------
    config
        Server configuration.
    store
        State store to serve; defaults to one at ``config.data_file``.
    transport_factory
        Builds the remote transport from the shared client session.
        Defaults to :class:`HttpRemoteSource` on ``config.remote_source_url``.
    """
    store = store if store is not None else StateStore(config.data_file)
    store.bootstrap()

    app = web.Application()
    app[CONFIG_KEY] = config
    app[STORE_KEY] = store

    app.router.add_get("/api/state", get_state)
    app.router.add_post("/api/state", post_state)
    for view in config.views:
        app.router.add_get(f"/{view}", _view_handler(config.public_dir / f"{view}.html"))

    if config.public_dir.is_dir():
        app.router.add_static("/", config.public_dir)
    else:
        _logger.warning("Public directory %s not found; display pages unavailable", config.public_dir)

    if config.sync_enabled:
        app.cleanup_ctx.append(_remote_sync_context(transport_factory))
    else:
        _logger.info("No remote source configured; remote sync disabled")

    return app
