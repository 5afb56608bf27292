"""Errors raised by the claim selection engine."""

from __future__ import annotations

from typing import Any


class ClaimSelectionError(ValueError):
    """Base class for rejected selection requests."""
    pass


class InvalidCountError(ClaimSelectionError):
    """Raised when the requested quantity is not a positive integer."""

    def __init__(self, count: Any):
        self.count = count
        super().__init__(f"count must be a positive integer, got {count!r}")


class UnknownDifficultyModeError(ClaimSelectionError):
    """Raised when the difficulty mode is outside easy|medium|hard|mixed."""

    def __init__(self, mode: Any):
        self.mode = mode
        super().__init__(
            f"unknown difficulty mode {mode!r} (expected one of: easy, medium, hard, mixed)"
        )


class CatalogLoadError(Exception):
    """Raised when a claim catalog file cannot be read."""
    pass
