"""
Answer Source — where completed surveys come from
==================================================
The engine only needs "latest completed record of this domain for this
user".  The production backend implements ``AnswerSource``; the in-memory
implementation backs the CLI and tests.
"""

from __future__ import annotations

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from workrisk.core.models import AnswerRecord, Domain
from workrisk.utils.helpers import setup_logging

logger = setup_logging()


class AnswerSource(ABC):

    @abstractmethod
    def get_latest(self, user_id: str, domain: Domain) -> Optional[AnswerRecord]:
        """Most recent completed record, or None if the user never answered."""

    def get_all_latest(self, user_id: str) -> dict:
        """``{Domain: AnswerRecord}`` for every domain the user answered."""
        found = {}
        for domain in Domain:
            record = self.get_latest(user_id, domain)
            if record is not None:
                found[domain] = record
        return found


class InMemoryAnswerSource(AnswerSource):
    """Keeps only the newest record per (user, domain)."""

    def __init__(self, records: Iterable[AnswerRecord] = ()):
        self._lock = threading.Lock()
        self._latest: dict = {}
        self.add_many(records)

    def add(self, record: AnswerRecord) -> bool:
        """Store *record*; returns False if a newer one is already held."""
        key = (record.user_id, record.domain)
        with self._lock:
            held = self._latest.get(key)
            if held is not None and held.completed_at > record.completed_at:
                return False
            self._latest[key] = record
            return True

    def add_many(self, records: Iterable[AnswerRecord]) -> int:
        return sum(1 for r in records if self.add(r))

    def get_latest(self, user_id: str, domain: Domain) -> Optional[AnswerRecord]:
        with self._lock:
            return self._latest.get((user_id, Domain(domain)))

    @classmethod
    def from_json(cls, path) -> "InMemoryAnswerSource":
        """Load a JSON list of records (``AnswerRecord.from_dict`` shape)."""
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("records", [])
        source = cls(AnswerRecord.from_dict(item) for item in data)
        logger.info("Loaded %d answer records from %s", len(source._latest), path)
        return source
