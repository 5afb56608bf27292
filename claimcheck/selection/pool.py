"""
Pool Builder.

Assembles the candidate pool a selection draws from:
- Base catalog, optionally narrowed to one grade level
- Contributed items appended unconditionally (never grade-filtered)
- Subject membership filter over the combined pool

Exposure statistics reuse the same construction so they always describe
the pool the engine would actually draw from.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence

from loguru import logger

from .models import Claim, ExposureStats


def narrow_by_grade(
    catalog: Iterable[Claim],
    grade_level: str,
    subject: str | None = None,
) -> list[Claim]:
    """
    Narrow a catalog to one grade level.

    Claims without a grade level count as the default level.

    Args:
        catalog: Base claims
        grade_level: Grade level to keep
        subject: Optional single subject to apply in the same pass

    Returns:
        Claims matching the grade (and subject, when given)
    """
    return [
        claim for claim in catalog
        if claim.effective_grade_level == grade_level
        and (subject is None or claim.subject == subject)
    ]


def filter_by_subjects(pool: Iterable[Claim], subjects: Collection[str]) -> list[Claim]:
    """Keep claims whose subject is requested. No subjects means no filter."""
    if not subjects:
        return list(pool)
    wanted = set(subjects)
    return [claim for claim in pool if claim.subject in wanted]


def eligible(pool: Iterable[Claim]) -> list[Claim]:
    """Drop claims that have no usable id."""
    return [claim for claim in pool if claim.is_eligible]


def build_pool(
    catalog: Sequence[Claim],
    *,
    subjects: Collection[str] = (),
    grade_level: str | None = None,
    contributed_items: Iterable[Claim] = (),
) -> list[Claim]:
    """
    Build the candidate pool for one request.

    Args:
        catalog: Base catalog
        subjects: Requested subjects (empty = no restriction)
        grade_level: Optional grade level for the base catalog
        contributed_items: Extra claims merged in before subject filtering

    Returns:
        Eligible candidate claims in catalog order, contributed items last
    """
    subjects = tuple(subjects or ())

    if grade_level:
        # A single subject can be applied while narrowing; the subject
        # filter below is idempotent on what survives.
        only_subject = subjects[0] if len(subjects) == 1 else None
        base = narrow_by_grade(catalog, grade_level, only_subject)
    else:
        base = list(catalog)

    pool = filter_by_subjects([*base, *contributed_items], subjects)
    candidates = eligible(pool)

    dropped = len(pool) - len(candidates)
    if dropped:
        logger.debug(f"Excluded {dropped} claim(s) without a usable id")

    return candidates


def get_exposure_stats(
    catalog: Sequence[Claim],
    seen_ids: Iterable,
    *,
    subjects: Collection[str] = (),
    grade_level: str | None = None,
    contributed_items: Iterable[Claim] = (),
) -> ExposureStats:
    """
    Report how much of a pool has already been seen.

    Args:
        catalog: Base catalog
        seen_ids: Exposure set (individual, group, or their union)
        subjects: Requested subjects (empty = no restriction)
        grade_level: Optional grade level
        contributed_items: Extra claims merged into the pool

    Returns:
        ExposureStats over the distinct ids in the pool
    """
    pool = build_pool(
        catalog,
        subjects=subjects,
        grade_level=grade_level,
        contributed_items=contributed_items,
    )
    ids = {claim.id for claim in pool}
    seen = set(seen_ids)
    unseen = len(ids - seen)

    return ExposureStats.from_counts(total=len(ids), unseen=unseen)
