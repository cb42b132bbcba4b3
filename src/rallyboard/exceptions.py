"""Custom exception hierarchy for rallyboard."""

from __future__ import annotations

from pathlib import Path


class RallyboardError(Exception):
    """Base exception for all rallyboard errors."""


class RallyboardConfigError(RallyboardError):
    """Invalid or missing configuration."""


class RallyboardTransportError(RallyboardError):
    """Remote source failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class RallyboardStoreError(RallyboardError):
    """The persisted state document could not be written."""

    def __init__(self, message: str, *, path: Path | str = "") -> None:
        self.path = Path(path) if path else None
        super().__init__(message)
