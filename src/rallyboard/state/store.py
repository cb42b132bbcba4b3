"""File-backed state store.

This is the single owner of the scoreboard state: the on-disk JSON document
is the source of truth and :attr:`StateStore.cached` mirrors the last record
read or written.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path

from rallyboard.exceptions import RallyboardStoreError
from rallyboard.models.state import ScoreboardState
from rallyboard.state.merge import state_from_document

_logger = logging.getLogger(__name__)


def _dump(state: ScoreboardState) -> str:
    return json.dumps(state.to_document(), indent=2)


class StateStore:
    """Read and write the persisted scoreboard state.

    Store methods are synchronous; callers on the event loop complete a
    read-modify-write without yielding, so no lock is taken.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._cached = ScoreboardState()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def cached(self) -> ScoreboardState:
        """Last record read from or written to disk."""
        return self._cached

    def bootstrap(self) -> ScoreboardState:
        """Create the document with the default record if it does not exist."""
        if not self._path.exists():
            _logger.info("Creating state file %s with defaults", self._path)
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise RallyboardStoreError(
                    f"Cannot create state directory {self._path.parent}: {exc}",
                    path=self._path,
                ) from exc
            self.write(ScoreboardState())
        return self.read()

    def read(self) -> ScoreboardState:
        """Load the persisted document overlaid on defaults.

        Never raises: an unreadable or malformed document yields the default
        record.
        """
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            _logger.error("Failed to read state file %s. Falling back to defaults.", self._path, exc_info=True)
            state = ScoreboardState()
        else:
            if isinstance(document, dict):
                state = state_from_document(document)
            else:
                _logger.error(
                    "State file %s does not hold an object (%s). Falling back to defaults.",
                    self._path,
                    type(document).__name__,
                )
                state = ScoreboardState()
        self._cached = state
        return state

    def write(self, state: ScoreboardState) -> None:
        """Replace the persisted document with ``state``.

        The document is written to a sibling temporary file and renamed over
        the target, so readers see either the old or the new record.
        """
        text = _dump(state)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
        except OSError as exc:
            raise RallyboardStoreError(f"Cannot write state file {self._path}: {exc}", path=self._path) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise RallyboardStoreError(f"Cannot write state file {self._path}: {exc}", path=self._path) from exc
        self._cached = state
