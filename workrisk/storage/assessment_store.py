"""
Assessment Store — persistent assessment history via SQLite
============================================================
Append-only history of ``OverallAssessment`` objects so that:

1. The latest result survives restarts (``load``)
2. Trend analysis can look back days or weeks (``history``)

SQLite keeps this zero-configuration and in the standard library.  Every
sqlite error is re-raised as ``PersistenceError``; the orchestrator logs
it and still returns the freshly computed result to its caller.
"""

from __future__ import annotations

import json
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from workrisk.core.exceptions import PersistenceError
from workrisk.core.models import OverallAssessment
from workrisk.utils.helpers import setup_logging

logger = setup_logging()

_DEFAULT_DB_PATH = "data/assessments.db"


class ResultSink(ABC):
    """Where computed assessments go and are read back from."""

    @abstractmethod
    def save(self, user_id: str, assessment: OverallAssessment) -> None:
        ...

    @abstractmethod
    def load(self, user_id: str) -> Optional[OverallAssessment]:
        """Latest assessment for the user, or None."""

    @abstractmethod
    def history(self, user_id: str, range_days: int,
                now: Optional[datetime] = None) -> list:
        """Assessments from the last *range_days*, oldest first."""


class AssessmentStore(ResultSink):
    """SQLite-backed result sink."""

    def __init__(self, db_path: str = _DEFAULT_DB_PATH):
        self.db_path = str(db_path)
        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._init_db()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Cannot open assessment store {self.db_path}: {e}") from e
        logger.info("Assessment store ready: %s", self.db_path)

    # ------------------------------------------------------------------
    # Database setup
    # ------------------------------------------------------------------

    def _init_db(self):
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS assessments (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    created_ts REAL NOT NULL,
                    overall_score INTEGER,
                    overall_tier TEXT,
                    neural_tier TEXT,
                    missing_domains TEXT,
                    full_assessment TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_user_time
                ON assessments(user_id, created_ts)
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def save(self, user_id: str, assessment: OverallAssessment) -> None:
        data = assessment.to_dict()
        try:
            with self._connect() as conn:
                cursor = conn.execute("""
                    INSERT INTO assessments (
                        user_id, created_at, created_ts, overall_score,
                        overall_tier, neural_tier, missing_domains, full_assessment
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    user_id,
                    assessment.created_at.isoformat(),
                    assessment.created_at.timestamp(),
                    assessment.score,
                    assessment.tier.value,
                    assessment.neural.tier.value if assessment.neural else None,
                    json.dumps(data["missing_domains"]),
                    json.dumps(data),
                ))
                logger.info("Assessment saved (id=%d, user=%s, tier=%s)",
                            cursor.lastrowid, user_id, assessment.tier.value)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not save assessment for {user_id}: {e}") from e

    def clear_history(self, user_id: Optional[str] = None) -> int:
        """Delete history for one user (or everyone); returns rows removed."""
        try:
            with self._connect() as conn:
                if user_id is None:
                    cursor = conn.execute("DELETE FROM assessments")
                else:
                    cursor = conn.execute("DELETE FROM assessments WHERE user_id = ?", (user_id,))
                deleted = cursor.rowcount
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not clear history: {e}") from e
        logger.info("Cleared %d assessment(s)%s", deleted,
                    f" for {user_id}" if user_id else "")
        return deleted

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def _query(self, sql: str, params: tuple) -> list:
        try:
            with self._connect() as conn:
                conn.row_factory = sqlite3.Row
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Assessment store read failed: {e}") from e
        return [self._row_to_assessment(row) for row in rows]

    def load(self, user_id: str) -> Optional[OverallAssessment]:
        rows = self._query("""
            SELECT full_assessment FROM assessments
            WHERE user_id = ?
            ORDER BY created_ts DESC, id DESC
            LIMIT 1
        """, (user_id,))
        return rows[0] if rows else None

    def history(self, user_id: str, range_days: int,
                now: Optional[datetime] = None) -> list:
        now = now or datetime.now(timezone.utc)
        cutoff = (now - timedelta(days=range_days)).timestamp()
        return self._query("""
            SELECT full_assessment FROM assessments
            WHERE user_id = ? AND created_ts >= ?
            ORDER BY created_ts ASC, id ASC
        """, (user_id, cutoff))

    def count(self, user_id: Optional[str] = None) -> int:
        try:
            with self._connect() as conn:
                if user_id is None:
                    row = conn.execute("SELECT COUNT(*) FROM assessments").fetchone()
                else:
                    row = conn.execute(
                        "SELECT COUNT(*) FROM assessments WHERE user_id = ?", (user_id,)
                    ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Assessment store read failed: {e}") from e
        return row[0]

    @staticmethod
    def _row_to_assessment(row) -> OverallAssessment:
        try:
            return OverallAssessment.from_dict(json.loads(row["full_assessment"]))
        except (ValueError, KeyError, TypeError) as e:
            raise PersistenceError(f"Corrupt assessment row: {e}") from e
