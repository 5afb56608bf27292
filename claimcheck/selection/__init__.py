"""
Claim selection engine.

Pure functions over explicit inputs:
- pool: Pool Builder and exposure statistics
- selector: unseen-first unique selection primitive
- planner: difficulty-mode planning, fallbacks and final checks
"""

from claimcheck.selection.engine import SelectionEngine
from claimcheck.selection.errors import (
    CatalogLoadError,
    ClaimSelectionError,
    InvalidCountError,
    UnknownDifficultyModeError,
)
from claimcheck.selection.models import (
    DEFAULT_GRADE_LEVEL,
    Claim,
    Difficulty,
    DifficultyMode,
    ExposureStats,
    GradeLevel,
    Provenance,
    SelectionRequest,
    SelectionResult,
    Verdict,
)
from claimcheck.selection.planner import (
    TrancheCounts,
    parse_difficulty_mode,
    select_claims,
    split_progressive_counts,
)
from claimcheck.selection.pool import build_pool, get_exposure_stats
from claimcheck.selection.selector import select_unique, shuffled

__all__ = [
    "DEFAULT_GRADE_LEVEL",
    "CatalogLoadError",
    "Claim",
    "ClaimSelectionError",
    "Difficulty",
    "DifficultyMode",
    "ExposureStats",
    "GradeLevel",
    "InvalidCountError",
    "Provenance",
    "SelectionEngine",
    "SelectionRequest",
    "SelectionResult",
    "TrancheCounts",
    "UnknownDifficultyModeError",
    "Verdict",
    "build_pool",
    "get_exposure_stats",
    "parse_difficulty_mode",
    "select_claims",
    "select_unique",
    "shuffled",
]
