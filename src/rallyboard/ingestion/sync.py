"""Remote sync loop.

This module owns the "fetch + normalize + merge" cycle that keeps the local
state in step with the remote scoreboard. The HTTP fetch lives in
:mod:`rallyboard._transport`; merging rules live in
:mod:`rallyboard.state.merge`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from rallyboard._transport import RemoteTransport
from rallyboard.exceptions import RallyboardStoreError, RallyboardTransportError
from rallyboard.ingestion.remote import normalize_remote_payload
from rallyboard.state.merge import merge_remote, serialize_state
from rallyboard.state.store import StateStore

_logger = logging.getLogger(__name__)


class RemoteSync:
    """Poll a remote source and fold its statistics into the state store.

    Usage::

        sync = RemoteSync(store, source, interval=1.0)
        sync.start()
        ...
        await sync.stop()

    The first cycle runs immediately; each following cycle starts
    ``interval`` seconds after the previous one finished.
    """

    def __init__(self, store: StateStore, transport: RemoteTransport, *, interval: float) -> None:
        self._store = store
        self._transport = transport
        self._interval = interval
        self._stopping = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> bool:
        """Run a single sync cycle. Returns ``True`` when the state changed."""
        try:
            payload = await self._transport.fetch()
        except RallyboardTransportError as exc:
            _logger.warning("Remote poll failed: %s", exc)
            return False

        # Selected game is read fresh from disk every cycle.
        current = self._store.read()
        patch = normalize_remote_payload(payload, current.selected_game or 1)
        if patch is None:
            _logger.debug("No usable remote data for game %s", current.selected_game)
            return False

        next_state = merge_remote(current, patch)
        if serialize_state(next_state) == serialize_state(current):
            return False

        try:
            self._store.write(next_state)
        except RallyboardStoreError as exc:
            _logger.warning("Remote sync could not persist state: %s", exc)
            return False
        _logger.debug("State updated from remote game %s", current.selected_game)
        return True

    async def run(self) -> None:
        """Loop until :meth:`stop` is called."""
        while not self._stopping.is_set():
            try:
                await self.run_once()
            except Exception:
                _logger.exception("Remote sync cycle failed")
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._stopping.wait(), timeout=self._interval)

    def start(self) -> asyncio.Task[None]:
        """Spawn the background loop task."""
        if self._task is not None and not self._task.done():
            return self._task
        self._stopping.clear()
        self._task = asyncio.create_task(self.run(), name="rallyboard-remote-sync")
        return self._task

    async def stop(self) -> None:
        """Signal the loop to exit and wait for it."""
        self._stopping.set()
        task = self._task
        self._task = None
        if task is None:
            return
        try:
            await asyncio.wait_for(task, timeout=self._interval + 5.0)
        except TimeoutError:
            # The in-flight fetch did not finish in time.
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
