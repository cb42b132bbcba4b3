"""Field-by-field state reconciliation.

All state changes go through :func:`apply_patch`: each key is checked against
an allow-list and coerced to the schema type on its own, so one bad value
never discards the rest of an update.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from rallyboard.models.state import ALLOWED_KEYS, LOCAL_ONLY_FIELDS, ScoreboardState

_logger = logging.getLogger(__name__)


def apply_patch(
    base: ScoreboardState,
    patch: Mapping[str, Any],
    *,
    allowed: Iterable[str] = ALLOWED_KEYS,
) -> ScoreboardState:
    """Return a copy of ``base`` with the allowed keys of ``patch`` applied.

    Unknown keys are dropped silently. Values that cannot be coerced to the
    field type are dropped with a warning and the base value is kept.
    """
    allowed_keys = allowed if isinstance(allowed, (set, frozenset)) else frozenset(allowed)
    result = base.model_copy()
    for key, value in patch.items():
        if key not in allowed_keys:
            _logger.debug("Ignoring unknown state key %r", key)
            continue
        try:
            setattr(result, key, value)
        except ValidationError:
            _logger.warning("Ignoring invalid value for %s: %r", key, value)
    return result


def state_from_document(document: Mapping[str, Any]) -> ScoreboardState:
    """Overlay a persisted document on the default record."""
    return apply_patch(ScoreboardState(), document)


def apply_client_update(current: ScoreboardState, body: Mapping[str, Any]) -> ScoreboardState:
    """Apply a controller write on top of ``current``."""
    return apply_patch(current, body)


def merge_remote(current: ScoreboardState, remote_patch: Mapping[str, Any]) -> ScoreboardState:
    """Merge a normalized remote patch into ``current``.

    Non-null remote values overwrite; local-only fields (selected game and
    every display setting) are then re-asserted from ``current``.
    """
    overlay = {key: value for key, value in remote_patch.items() if value is not None}
    merged = apply_patch(current, overlay)
    preserved = {name: getattr(current, name) for name in LOCAL_ONLY_FIELDS}
    return apply_patch(merged, preserved)


def serialize_state(state: ScoreboardState) -> str:
    """Canonical serialized form used for change detection."""
    return state.model_dump_json()
