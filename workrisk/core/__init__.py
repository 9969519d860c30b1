"""
Core Module — Data Model, Errors & Orchestration
==================================================
  - models:        Domain, AnswerRecord, DomainScore, OverallAssessment, ...
  - exceptions:    WorkriskError and its four subclasses
  - Explainer:     human-readable explanations for assessments
  - orchestrator:  ScoringOrchestrator (import it from
                   ``workrisk.core.orchestrator``; it depends on every
                   other package, which in turn depend on ``core.models``)
"""

from workrisk.core.exceptions import (
    ClassifierNotReadyError,
    MissingInputError,
    PersistenceError,
    ValidationError,
    WorkriskError,
)
from workrisk.core.explainer import Explainer
from workrisk.core.models import (
    AnswerRecord,
    AssessmentOutcome,
    ClassifierPrediction,
    Domain,
    DomainScore,
    ImpactTier,
    OutcomeStatus,
    OverallAssessment,
    Polarity,
    Priority,
    Recommendation,
    RiskFactor,
    RiskTier,
)

__all__ = [
    "AnswerRecord", "AssessmentOutcome", "ClassifierPrediction", "Domain",
    "DomainScore", "ImpactTier", "OutcomeStatus", "OverallAssessment",
    "Polarity", "Priority", "Recommendation", "RiskFactor", "RiskTier",
    "Explainer",
    "WorkriskError", "MissingInputError", "ClassifierNotReadyError",
    "PersistenceError", "ValidationError",
]
