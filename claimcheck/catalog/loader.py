"""
Claim Catalog: JSON catalog provider.

Loads claims from a JSON file holding either a bare array of claim objects
or ``{"claims": [...]}``. The catalog keeps every claim it can parse,
including ones without a usable id; the selection engine excludes those
itself.

Features:
- Grade-level pre-filter for callers that narrow before selection
- Subject listing and per-tier counts
- Integrity audit (duplicate ids, bad verdicts, unknown error patterns)
- Subjects outside the known subject list, reported without failing
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from claimcheck.config import BUNDLED_CATALOG_PATH
from claimcheck.selection.errors import CatalogLoadError
from claimcheck.selection.models import Claim, Difficulty, Provenance, Verdict

from .constants import ALL_SUBJECTS, ERROR_PATTERN_IDS


@dataclass
class CatalogIssue:
    """A single integrity problem found in a catalog."""

    index: int
    claim_id: Hashable | None
    reason: str


@dataclass
class CatalogReport:
    """Result of auditing a catalog."""

    total_claims: int
    duplicates: list[Hashable] = field(default_factory=list)
    issues: list[CatalogIssue] = field(default_factory=list)
    verdicts: dict[str, int] = field(default_factory=dict)
    subjects: list[str] = field(default_factory=list)
    unlisted_subjects: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.duplicates and not self.issues


class ClaimCatalog:
    """
    A collection of claims loaded from JSON.

    Usage:
        catalog = ClaimCatalog.load()
        engine = SelectionEngine(catalog.claims)
    """

    def __init__(self, claims: list[Claim] | None = None, source: Path | None = None):
        self._claims: list[Claim] = list(claims or [])
        self._by_id: dict[Hashable, Claim] = {}
        self.source = source

        for claim in self._claims:
            if claim.is_eligible:
                self._by_id.setdefault(claim.id, claim)

    @classmethod
    def load(cls, path: Path | None = None) -> ClaimCatalog:
        """
        Load a catalog file.

        Args:
            path: JSON file (default: bundled catalog)

        Returns:
            ClaimCatalog

        Raises:
            CatalogLoadError: File missing, unreadable, or not JSON
        """
        path = Path(path) if path else BUNDLED_CATALOG_PATH

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Failed to load catalog {path}: {e}") from e

        entries = data if isinstance(data, list) else data.get("claims", []) if isinstance(data, dict) else []

        claims: list[Claim] = []
        skipped = 0
        for entry in entries:
            if not isinstance(entry, dict):
                skipped += 1
                continue
            claims.append(Claim.from_dict(entry))

        if skipped:
            logger.warning(f"Skipped {skipped} non-object entr(ies) in {path}")
        logger.info(f"ClaimCatalog loaded: {len(claims)} claims from {path.name}")

        return cls(claims, source=path)

    @property
    def claims(self) -> list[Claim]:
        """All claims, in file order."""
        return list(self._claims)

    def get(self, claim_id: Hashable) -> Claim | None:
        """Get a claim by id."""
        return self._by_id.get(claim_id)

    def __iter__(self) -> Iterator[Claim]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __contains__(self, claim_id: Hashable) -> bool:
        return claim_id in self._by_id

    # =========================================================================
    # Views
    # =========================================================================

    def subjects(self) -> list[str]:
        """Distinct subjects, sorted."""
        return sorted({claim.subject for claim in self._claims if claim.subject})

    def for_grade(self, grade_level: str) -> list[Claim]:
        """Claims for one grade level (claims without one count as middle)."""
        return [c for c in self._claims if c.effective_grade_level == grade_level]

    def by_subject(self, subject: str) -> list[Claim]:
        """Claims tagged with exactly this subject."""
        return [c for c in self._claims if c.subject == subject]

    def difficulty_distribution(self, subject: str | None = None) -> dict[str, int]:
        """
        Count claims per difficulty tier.

        Args:
            subject: Restrict to one subject (default: whole catalog)

        Returns:
            Mapping of tier -> count, every tier present
        """
        claims = self.by_subject(subject) if subject else self._claims
        counts = Counter(claim.difficulty for claim in claims)
        return {tier.value: counts.get(tier.value, 0) for tier in Difficulty}

    # =========================================================================
    # Integrity
    # =========================================================================

    def validate(self) -> CatalogReport:
        """
        Audit the catalog.

        Selection does not depend on this passing; it is a content-team tool.

        Returns:
            CatalogReport listing duplicates and malformed claims; subjects
            missing from ALL_SUBJECTS are listed but do not make it invalid
        """
        report = CatalogReport(total_claims=len(self._claims), subjects=self.subjects())
        ids: set[Hashable] = set()
        verdicts: Counter[str] = Counter()
        valid_verdicts = {v.value for v in Verdict}
        valid_tiers = {t.value for t in Difficulty}

        for index, claim in enumerate(self._claims):
            if not claim.is_eligible or not claim.text:
                report.issues.append(
                    CatalogIssue(index, claim.id, "Missing required field (id or text)")
                )
                continue

            if claim.id in ids:
                report.duplicates.append(claim.id)
            else:
                ids.add(claim.id)

            verdicts[claim.verdict] += 1
            if claim.verdict not in valid_verdicts:
                report.issues.append(CatalogIssue(index, claim.id, f"Invalid verdict: {claim.verdict}"))

            if claim.difficulty not in valid_tiers:
                report.issues.append(CatalogIssue(index, claim.id, f"Invalid difficulty: {claim.difficulty}"))

            if (
                claim.provenance == Provenance.AI_GENERATED.value
                and claim.error_pattern
                and claim.error_pattern not in ERROR_PATTERN_IDS
            ):
                report.issues.append(
                    CatalogIssue(index, claim.id, f"Invalid error pattern: {claim.error_pattern}")
                )

        report.verdicts = {v.value: verdicts.get(v.value, 0) for v in Verdict}
        report.unlisted_subjects = [s for s in report.subjects if s not in ALL_SUBJECTS]
        return report


def load_contributed(entries: list[dict[str, Any]]) -> list[Claim]:
    """
    Turn contributed-content mappings into claims.

    Entries without an explicit provenance are marked user-contributed.
    Moderation happens upstream; nothing is filtered here.
    """
    claims = []
    for entry in entries:
        claim = Claim.from_dict(entry)
        if "source" not in entry and "provenance" not in entry:
            claim.provenance = Provenance.USER_CONTRIBUTED.value
        claims.append(claim)
    return claims
