"""
Storage Module — Engine I/O Boundaries
=======================================
  - AnswerSource / InMemoryAnswerSource: latest survey records per user
  - ResultSink / AssessmentStore:       append-only assessment history (SQLite)
  - ModelStore:                          classifier checkpoint file
"""

from workrisk.storage.answer_source import AnswerSource, InMemoryAnswerSource
from workrisk.storage.assessment_store import AssessmentStore, ResultSink
from workrisk.storage.model_store import ModelStore

__all__ = [
    "AnswerSource",
    "InMemoryAnswerSource",
    "AssessmentStore",
    "ResultSink",
    "ModelStore",
]
