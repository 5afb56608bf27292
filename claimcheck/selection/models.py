"""
Data models for claim selection.

A Claim is the atomic unit the engine selects. Requests and results are
ephemeral value objects built fresh for every call.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Difficulty(str, Enum):
    """Difficulty tier of a single claim."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DifficultyMode(str, Enum):
    """Difficulty mode of a selection request."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    MIXED = "mixed"  # Progressive blend: easy -> medium -> hard

    @property
    def tier(self) -> Difficulty | None:
        """Single tier this mode draws from, or None for mixed."""
        if self is DifficultyMode.MIXED:
            return None
        return Difficulty(self.value)


class GradeLevel(str, Enum):
    """Audience grade level of a claim."""

    ELEMENTARY = "elementary"
    MIDDLE = "middle"
    HIGH = "high"
    COLLEGE = "college"


class Provenance(str, Enum):
    """Where a claim came from."""

    AI_GENERATED = "ai-generated"
    EXPERT_SOURCED = "expert-sourced"
    USER_CONTRIBUTED = "user-contributed"


class Verdict(str, Enum):
    """Correct judgement for a claim."""

    TRUE = "true"
    FALSE = "false"
    MIXED = "mixed"


# Claims that carry no grade level are treated as middle-school content.
DEFAULT_GRADE_LEVEL = GradeLevel.MIDDLE


def has_usable_id(claim_id: Any) -> bool:
    """Check whether an id can identify a claim for deduplication."""
    if claim_id is None or isinstance(claim_id, bool):
        return False
    if isinstance(claim_id, str):
        return bool(claim_id.strip())
    return isinstance(claim_id, int)


def _value(raw: Any) -> Any:
    return raw.value if isinstance(raw, Enum) else raw


def _items(raw: Any) -> Any:
    # A lone string is one item, not a sequence of characters
    if isinstance(raw, str):
        return (raw,) if raw else ()
    return raw or ()


# =============================================================================
# Claim
# =============================================================================


@dataclass
class Claim:
    """
    A short factual statement a learner judges as true, false or mixed.

    Only ``id``, ``difficulty``, ``subject`` and ``grade_level`` matter to
    selection; the remaining fields ride along for presentation.
    """

    id: Hashable | None
    text: str = ""
    verdict: str = Verdict.TRUE.value
    provenance: str = Provenance.EXPERT_SOURCED.value
    subject: str = ""
    difficulty: str = Difficulty.MEDIUM.value
    grade_level: str | None = None
    explanation: str = ""
    error_pattern: str | None = None
    citation: str | None = None
    last_verified: str | None = None
    reviewed_by: list[str] = field(default_factory=list)

    @property
    def effective_grade_level(self) -> str:
        """Grade level used for filtering, falling back to the default."""
        return _value(self.grade_level) or DEFAULT_GRADE_LEVEL.value

    @property
    def is_eligible(self) -> bool:
        """Whether this claim may be placed into a selection."""
        return has_usable_id(self.id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Claim:
        """
        Create a Claim from a catalog mapping.

        Accepts the catalog's camelCase keys as well as snake_case ones.
        The verdict may arrive upper-cased (``"TRUE"``) and is normalised.

        Args:
            data: Dictionary from a catalog file or contributed-content source

        Returns:
            Claim instance (possibly without a usable id)
        """
        verdict = data.get("verdict", data.get("answer", Verdict.TRUE.value))
        reviewed_by = data.get("reviewed_by", data.get("reviewedBy")) or []

        return cls(
            id=data.get("id"),
            text=data.get("text", ""),
            verdict=str(_value(verdict)).lower(),
            provenance=_value(data.get("provenance", data.get("source", Provenance.EXPERT_SOURCED.value))),
            subject=data.get("subject", ""),
            difficulty=_value(data.get("difficulty", Difficulty.MEDIUM.value)),
            grade_level=_value(data.get("grade_level", data.get("gradeLevel"))),
            explanation=data.get("explanation", ""),
            error_pattern=data.get("error_pattern", data.get("errorPattern")),
            citation=data.get("citation"),
            last_verified=data.get("last_verified", data.get("lastVerified")),
            reviewed_by=list(reviewed_by) if isinstance(reviewed_by, (list, tuple)) else [],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the catalog's camelCase mapping."""
        return {
            "id": self.id,
            "text": self.text,
            "answer": str(self.verdict).upper(),
            "source": self.provenance,
            "subject": self.subject,
            "difficulty": self.difficulty,
            "gradeLevel": self.effective_grade_level,
            "explanation": self.explanation,
            "errorPattern": self.error_pattern,
            "citation": self.citation,
            "lastVerified": self.last_verified,
            "reviewedBy": list(self.reviewed_by),
        }


# =============================================================================
# Request / Result
# =============================================================================


@dataclass(frozen=True)
class SelectionRequest:
    """
    One call's worth of selection inputs.

    List-like inputs are frozen on construction so a request can never be
    mutated after it is handed to the engine.
    """

    count: Any
    difficulty_mode: Any = DifficultyMode.MIXED
    subjects: tuple[str, ...] = ()
    individual_seen: frozenset = frozenset()
    group_seen: frozenset = frozenset()
    contributed_items: tuple[Claim, ...] = ()
    grade_level: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "subjects", tuple(_items(self.subjects)))
        object.__setattr__(self, "individual_seen", frozenset(_items(self.individual_seen)))
        object.__setattr__(self, "group_seen", frozenset(_items(self.group_seen)))
        object.__setattr__(self, "contributed_items", tuple(self.contributed_items or ()))
        object.__setattr__(self, "grade_level", _value(self.grade_level))

    @property
    def combined_seen(self) -> frozenset:
        """Union of individual and group exposure for this call."""
        return self.individual_seen | self.group_seen


@dataclass(frozen=True)
class SelectionResult(Sequence):
    """Ordered, duplicate-free claims returned by a selection."""

    claims: tuple[Claim, ...]
    requested: int
    fallback_used: bool = False

    def __len__(self) -> int:
        return len(self.claims)

    def __iter__(self) -> Iterator[Claim]:
        return iter(self.claims)

    def __getitem__(self, index):
        return self.claims[index]

    @property
    def ids(self) -> list[Hashable]:
        return [claim.id for claim in self.claims]

    @property
    def shortfall(self) -> int:
        """How many claims short of the request the result is."""
        return max(0, self.requested - len(self.claims))


@dataclass(frozen=True)
class ExposureStats:
    """How much of a pool a learner or group has already seen."""

    total: int
    unseen: int
    seen: int
    percent_seen: int

    @classmethod
    def from_counts(cls, total: int, unseen: int) -> ExposureStats:
        seen = total - unseen
        # Half-up rounding, not banker's rounding
        percent = math.floor(100 * seen / total + 0.5) if total > 0 else 0
        return cls(total=total, unseen=unseen, seen=seen, percent_seen=percent)

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "unseen": self.unseen,
            "seen": self.seen,
            "percentSeen": self.percent_seen,
        }
