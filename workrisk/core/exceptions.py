"""Engine exceptions.

Only the orchestrator turns these into user-facing outcomes; components
raise them and let them propagate.
"""

from __future__ import annotations

from typing import Iterable


class WorkriskError(Exception):
    """Base exception for the scoring engine."""


class MissingInputError(WorkriskError):
    """One or more required answer records are absent."""

    def __init__(self, missing_domains: Iterable, message: str = ""):
        self.missing_domains = tuple(missing_domains)
        names = ", ".join(getattr(d, "value", str(d)) for d in self.missing_domains)
        super().__init__(message or f"Missing answers for: {names}")


class ClassifierNotReadyError(WorkriskError):
    """Inference was requested before the classifier was trained or loaded."""


class PersistenceError(WorkriskError):
    """A result sink or model store read/write failed."""


class ValidationError(WorkriskError):
    """A value violated a structural invariant (wrong vector length, bad record)."""
