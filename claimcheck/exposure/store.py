"""
SQLite Exposure Store for claimcheck.

Provides portable persistence for:
- Individual exposure history (claims one learner has seen)
- Group exposure history (claims a whole class has seen)

The selection engine only reads snapshots from here; recording happens after
a quiz completes. Group history may be extended concurrently by many
learners, so a snapshot can be slightly stale.

Database location: ~/.claimcheck/exposure.db
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

INDIVIDUAL = "individual"
GROUP = "group"


class ExposureStore:
    """
    SQLite-backed exposure history.

    Handles:
    - Seen-id sets per learner and per group
    - Idempotent recording of newly seen claims
    """

    DEFAULT_DB_PATH = Path.home() / ".claimcheck" / "exposure.db"

    def __init__(self, db_path: Path | None = None):
        """
        Initialize the exposure store.

        Args:
            db_path: Custom database path (defaults to ~/.claimcheck/exposure.db)
        """
        self.db_path = Path(db_path) if db_path else self.DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn: sqlite3.Connection | None = None
        self._init_schema()

        logger.debug(f"ExposureStore initialized at {self.db_path}")

    @property
    def conn(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_schema(self) -> None:
        """Initialize database schema."""
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS exposure (
                scope TEXT NOT NULL,
                owner_id TEXT NOT NULL,
                claim_id TEXT NOT NULL,
                seen_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (scope, owner_id, claim_id)
            )
        """)

        self.conn.commit()

    # =========================================================================
    # Reads
    # =========================================================================

    def _seen(self, scope: str, owner_id: str) -> frozenset[str]:
        cursor = self.conn.cursor()
        cursor.execute(
            "SELECT claim_id FROM exposure WHERE scope = ? AND owner_id = ?",
            (scope, owner_id),
        )
        return frozenset(row["claim_id"] for row in cursor.fetchall())

    def get_individual_seen(self, learner_id: str) -> frozenset[str]:
        """Claim ids one learner has already seen."""
        return self._seen(INDIVIDUAL, learner_id)

    def get_group_seen(self, group_id: str) -> frozenset[str]:
        """Claim ids anyone in a group has already seen."""
        return self._seen(GROUP, group_id)

    # =========================================================================
    # Writes
    # =========================================================================

    def record_seen(
        self,
        claim_ids: Iterable,
        learner_id: str | None = None,
        group_id: str | None = None,
    ) -> int:
        """
        Record that claims were seen.

        Args:
            claim_ids: Ids shown in a completed quiz
            learner_id: Learner to credit (optional)
            group_id: Group to credit (optional)

        Returns:
            Number of new (scope, owner, claim) rows written
        """
        ids = [str(claim_id) for claim_id in claim_ids]
        owners = [(INDIVIDUAL, learner_id), (GROUP, group_id)]
        rows = [
            (scope, owner, claim_id)
            for scope, owner in owners
            if owner
            for claim_id in ids
        ]
        if not rows:
            return 0

        cursor = self.conn.cursor()
        before = self.conn.total_changes
        cursor.executemany(
            "INSERT OR IGNORE INTO exposure (scope, owner_id, claim_id) VALUES (?, ?, ?)",
            rows,
        )
        self.conn.commit()

        written = self.conn.total_changes - before
        logger.debug(f"Recorded {written} new exposure row(s)")
        return written

    def clear(self, learner_id: str | None = None, group_id: str | None = None) -> None:
        """Forget exposure history for a learner and/or group."""
        cursor = self.conn.cursor()
        if learner_id:
            cursor.execute(
                "DELETE FROM exposure WHERE scope = ? AND owner_id = ?", (INDIVIDUAL, learner_id)
            )
        if group_id:
            cursor.execute(
                "DELETE FROM exposure WHERE scope = ? AND owner_id = ?", (GROUP, group_id)
            )
        self.conn.commit()

    def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
