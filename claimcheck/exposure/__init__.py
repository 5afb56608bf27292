"""Exposure history persistence (individual and group seen-id sets)."""

from claimcheck.exposure.store import ExposureStore

__all__ = ["ExposureStore"]
