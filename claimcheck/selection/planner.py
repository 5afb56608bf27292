"""
Distribution Planner.

Turns a SelectionRequest into a SelectionResult:

1. Reject bad counts and unknown difficulty modes before touching the pool
2. Build the candidate pool (grade, contributed items, subjects)
3. Draw one tier, or the progressive easy -> medium -> hard blend
4. Top up from any tier when the tiered draw falls short
5. Widen to the whole catalog when subjects still leave a shortfall
6. Drop repeated ids, then truncate to the requested count

The used-id ledger lives only inside one select_claims() call.
"""

from __future__ import annotations

import random
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .errors import InvalidCountError, UnknownDifficultyModeError
from .models import Claim, Difficulty, DifficultyMode, SelectionRequest, SelectionResult
from .pool import build_pool, eligible
from .selector import select_unique

# Progressive mode shares, in tenths (30% easy, 40% medium, rest hard)
EASY_SHARE_TENTHS = 3
MEDIUM_SHARE_TENTHS = 4


@dataclass(frozen=True)
class TrancheCounts:
    """Per-tier quotas for progressive mode."""

    easy: int
    medium: int
    hard: int

    @property
    def total(self) -> int:
        return self.easy + self.medium + self.hard

    def items(self) -> list[tuple[Difficulty, int]]:
        """Tiers with their quotas, in draw order."""
        return [
            (Difficulty.EASY, self.easy),
            (Difficulty.MEDIUM, self.medium),
            (Difficulty.HARD, self.hard),
        ]


def _ceil_tenths(count: int, tenths: int) -> int:
    return -(-count * tenths // 10)


def split_progressive_counts(count: int) -> TrancheCounts:
    """
    Split a count into easy/medium/hard quotas.

    Easy and medium are ceilings of their shares; hard takes the remainder.
    For very small counts easy + medium can exceed count by one, in which
    case hard is zero and the final truncation trims the surplus.

    Args:
        count: Requested number of claims

    Returns:
        TrancheCounts for the three tiers
    """
    easy = _ceil_tenths(count, EASY_SHARE_TENTHS)
    medium = _ceil_tenths(count, MEDIUM_SHARE_TENTHS)
    hard = max(0, count - easy - medium)
    return TrancheCounts(easy=easy, medium=medium, hard=hard)


# =============================================================================
# Request validation
# =============================================================================


def validate_count(count: Any) -> int:
    """Return count if it is a positive integer, else raise InvalidCountError."""
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise InvalidCountError(count)
    return count


def parse_difficulty_mode(mode: Any) -> DifficultyMode:
    """Resolve a difficulty mode token, raising UnknownDifficultyModeError."""
    if isinstance(mode, DifficultyMode):
        return mode
    if isinstance(mode, str):
        try:
            return DifficultyMode(mode)
        except ValueError:
            pass
    raise UnknownDifficultyModeError(mode)


# =============================================================================
# Planning
# =============================================================================


def _of_tier(pool: Iterable[Claim], tier: Difficulty) -> list[Claim]:
    return [claim for claim in pool if claim.difficulty == tier.value]


def dedupe_by_id(claims: Iterable[Claim]) -> list[Claim]:
    """Keep the first claim for each id, preserving order."""
    kept: list[Claim] = []
    ids: set[Hashable] = set()
    for claim in claims:
        if claim.id in ids:
            continue
        ids.add(claim.id)
        kept.append(claim)
    return kept


def _draw_tiered(
    pool: Sequence[Claim],
    count: int,
    mode: DifficultyMode,
    *,
    seen: frozenset,
    ledger: set[Hashable],
    rng: random.Random,
) -> list[Claim]:
    selected: list[Claim] = []

    if mode is DifficultyMode.MIXED:
        tranches = split_progressive_counts(count)
        logger.debug(
            f"Progressive split for {count}: "
            f"{tranches.easy} easy, {tranches.medium} medium, {tranches.hard} hard"
        )
        for tier, quota in tranches.items():
            selected.extend(
                select_unique(_of_tier(pool, tier), quota, seen=seen, ledger=ledger, rng=rng)
            )
    else:
        selected.extend(
            select_unique(_of_tier(pool, mode.tier), count, seen=seen, ledger=ledger, rng=rng)
        )

    if len(selected) < count:
        # Top up from any tier
        selected.extend(
            select_unique(pool, count - len(selected), seen=seen, ledger=ledger, rng=rng)
        )

    return selected


def select_claims(
    request: SelectionRequest,
    catalog: Sequence[Claim],
    *,
    rng: random.Random | None = None,
) -> SelectionResult:
    """
    Select claims for one quiz.

    Args:
        request: What to select
        catalog: Base claim catalog (already materialised)
        rng: Random source; a fresh unseeded Random is used when omitted

    Returns:
        SelectionResult with 0..count unique claims

    Raises:
        InvalidCountError: count is not a positive integer
        UnknownDifficultyModeError: difficulty mode is not easy|medium|hard|mixed
    """
    count = validate_count(request.count)
    mode = parse_difficulty_mode(request.difficulty_mode)
    rng = rng or random.Random()

    pool = build_pool(
        catalog,
        subjects=request.subjects,
        grade_level=request.grade_level,
        contributed_items=request.contributed_items,
    )
    seen = request.combined_seen
    ledger: set[Hashable] = set()

    logger.debug(
        f"Selecting {count} {mode.value} claim(s) from pool of {len(pool)} "
        f"({len(seen)} id(s) already seen)"
    )

    selected = _draw_tiered(pool, count, mode, seen=seen, ledger=ledger, rng=rng)

    fallback_used = False
    if len(selected) < count and request.subjects:
        # No grade or subject narrowing here
        unrestricted = eligible([*catalog, *request.contributed_items])
        extra = select_unique(
            unrestricted,
            count - len(selected),
            seen=seen,
            ledger=ledger,
            rng=rng,
            prefer_unseen=False,
        )
        if extra:
            fallback_used = True
            logger.warning(
                f"Subjects {list(request.subjects)} supplied {len(selected)} of {count} claim(s); "
                f"filled {len(extra)} from outside the subject filter"
            )
        selected.extend(extra)

    unique = dedupe_by_id(selected)
    if len(unique) < len(selected):
        logger.warning(f"Dropped {len(selected) - len(unique)} duplicate claim id(s)")

    result = SelectionResult(
        claims=tuple(unique[:count]),
        requested=count,
        fallback_used=fallback_used,
    )
    if result.shortfall:
        logger.info(f"Only {len(result)} of {count} claim(s) available")

    return result
