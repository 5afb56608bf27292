"""
claimcheck: claim-pool selection for truth-judgement quizzes.

Given a claim catalog, a requested quantity, a difficulty mode, optional
subject and grade constraints, and what a learner and their group have
already seen, the engine returns a duplicate-free, unseen-first selection
of exactly the requested size whenever the catalog allows it.
"""

from claimcheck.selection import (
    DEFAULT_GRADE_LEVEL,
    Claim,
    ClaimSelectionError,
    Difficulty,
    DifficultyMode,
    ExposureStats,
    GradeLevel,
    InvalidCountError,
    SelectionEngine,
    SelectionRequest,
    SelectionResult,
    UnknownDifficultyModeError,
    get_exposure_stats,
    select_claims,
)

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_GRADE_LEVEL",
    "Claim",
    "ClaimSelectionError",
    "Difficulty",
    "DifficultyMode",
    "ExposureStats",
    "GradeLevel",
    "InvalidCountError",
    "SelectionEngine",
    "SelectionRequest",
    "SelectionResult",
    "UnknownDifficultyModeError",
    "get_exposure_stats",
    "select_claims",
]
