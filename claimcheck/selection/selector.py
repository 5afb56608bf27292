"""
Unique Selector.

The reusable selection primitive. Each call shuffles unseen and seen claims
separately, puts unseen first, and collects claims whose ids are not yet in
the call-scoped ledger.
"""

from __future__ import annotations

import random
from collections.abc import Collection, Hashable, Iterable, Sequence
from typing import TypeVar

from .models import Claim

T = TypeVar("T")


def shuffled(items: Iterable[T], rng: random.Random) -> list[T]:
    """
    Return a uniformly shuffled copy of items (Fisher-Yates).

    Args:
        items: Items to shuffle
        rng: Random source; pass a seeded Random for reproducible order

    Returns:
        New list, input left untouched
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def select_unique(
    source_pool: Sequence[Claim],
    max_count: int,
    *,
    seen: Collection[Hashable],
    ledger: set[Hashable],
    rng: random.Random,
    prefer_unseen: bool = True,
) -> list[Claim]:
    """
    Pick up to max_count claims not already in the ledger.

    The ledger is updated in place with every id picked.

    Args:
        source_pool: Claims to draw from
        max_count: Maximum number of claims to return
        seen: Combined exposure set for this call
        ledger: Ids already placed into the result
        rng: Random source
        prefer_unseen: Put unseen claims ahead of seen ones

    Returns:
        Between 0 and max_count claims; fewer is a normal outcome
    """
    if max_count <= 0:
        return []

    if prefer_unseen:
        unseen = [claim for claim in source_pool if claim.id not in seen]
        already_seen = [claim for claim in source_pool if claim.id in seen]
    else:
        unseen = []
        already_seen = list(source_pool)

    picked: list[Claim] = []
    for claim in shuffled(unseen, rng) + shuffled(already_seen, rng):
        if len(picked) >= max_count:
            break
        if claim.id in ledger:
            continue
        ledger.add(claim.id)
        picked.append(claim)

    return picked
