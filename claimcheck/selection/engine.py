"""
Selection engine facade.

Binds a materialised catalog, settings and a random source so callers can
issue requests without threading those through every call. Holds no state
between requests beyond the random generator.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from loguru import logger

from claimcheck.config import Settings, get_settings

from .models import Claim, ExposureStats, SelectionRequest, SelectionResult
from .planner import select_claims
from .pool import get_exposure_stats


class SelectionEngine:
    """
    Claim selection over a fixed catalog.

    Usage:
        engine = SelectionEngine(catalog.claims, rng=random.Random(7))
        result = engine.select(SelectionRequest(count=10, difficulty_mode="mixed"))
    """

    def __init__(
        self,
        catalog: Sequence[Claim],
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the engine.

        Args:
            catalog: Base claim catalog
            settings: Settings or None for the cached defaults
            rng: Random source; seeded from settings.selection_seed when omitted
        """
        self.catalog = list(catalog)
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.selection_seed)

        logger.debug(f"SelectionEngine ready with {len(self.catalog)} claim(s)")

    def select(self, request: SelectionRequest) -> SelectionResult:
        """Select claims for one request."""
        return select_claims(request, self.catalog, rng=self.rng)

    def exposure_stats(
        self,
        seen_ids: Iterable,
        *,
        subjects: Iterable[str] = (),
        grade_level: str | None = None,
        contributed_items: Iterable[Claim] = (),
    ) -> ExposureStats:
        """Exposure statistics over the pool a request would draw from."""
        return get_exposure_stats(
            self.catalog,
            seen_ids,
            subjects=tuple(subjects),
            grade_level=grade_level,
            contributed_items=contributed_items,
        )
