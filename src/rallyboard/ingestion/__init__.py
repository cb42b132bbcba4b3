"""Ingestion layer.

This package contains the adapters that bring remote scoreboard data in:
payload normalization and the periodic sync loop.
"""

__all__: list[str] = []
