"""State/store layer.

This package is the single source of truth for how controller writes and
remote sync updates are reconciled into the persisted scoreboard state.
"""
