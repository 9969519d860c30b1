"""
Assessment Data Model
======================
Value objects shared by every stage of the engine:

  - Domain / Polarity / RiskTier / ImpactTier / Priority enumerations
  - AnswerRecord:       one completed survey instance (immutable)
  - DomainScore:        0-100 score + tier for one life domain
  - RiskFactor:         a named, thresholded finding
  - Recommendation:     a prioritised, actionable suggestion
  - ClassifierPrediction: output of the neural risk classifier
  - OverallAssessment:  the complete result of one recomputation
  - AssessmentOutcome:  available / partial / unavailable wrapper for callers

Keeping the data model separate from logic makes it easy to serialise to
JSON, store in SQLite, or hand to a presentation layer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from workrisk.core.exceptions import ValidationError


class Domain(str, Enum):
    """The nine surveyed life areas."""

    ERGONOMICS = "ergonomics"
    MUSCULOSKELETAL = "musculoskeletal"
    VISUAL = "visual"
    WORKLOAD = "workload"
    STRESS = "stress"
    SLEEP = "sleep"
    PHYSICAL_ACTIVITY = "physical_activity"
    WORK_LIFE_BALANCE = "work_life_balance"
    GENERAL_HEALTH = "general_health"

    @property
    def display_name(self) -> str:
        return _DOMAIN_NAMES[self]


_DOMAIN_NAMES = {
    Domain.ERGONOMICS: "Ergonomics",
    Domain.MUSCULOSKELETAL: "Musculoskeletal Symptoms",
    Domain.VISUAL: "Visual Symptoms",
    Domain.WORKLOAD: "Workload",
    Domain.STRESS: "Stress & Mental Health",
    Domain.SLEEP: "Sleep",
    Domain.PHYSICAL_ACTIVITY: "Physical Activity",
    Domain.WORK_LIFE_BALANCE: "Work-Life Balance",
    Domain.GENERAL_HEALTH: "General Health",
}


class Polarity(str, Enum):
    """Meaning of a higher value for a feature or domain score."""

    HIGHER_IS_WORSE = "higher_is_worse"
    HIGHER_IS_BETTER = "higher_is_better"
    NEUTRAL = "neutral"

    def to_risk(self, value: float) -> float:
        """Convert a normalised [0, 1] value into risk direction."""
        if self is Polarity.HIGHER_IS_BETTER:
            return 1.0 - value
        return value

    def to_risk_score(self, score: int) -> int:
        """Convert a 0-100 score into risk direction."""
        if self is Polarity.HIGHER_IS_BETTER:
            return 100 - score
        return score


class RiskTier(str, Enum):
    """Four-level classification; LOW always means "good"."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    @property
    def display_name(self) -> str:
        return f"{self.value.title()} Risk"


_TIER_ORDER = [RiskTier.LOW, RiskTier.MODERATE, RiskTier.HIGH, RiskTier.CRITICAL]


class ImpactTier(str, Enum):
    """Qualitative weight of a single risk factor."""

    CRITICAL = "critical"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Higher rank = more serious."""
        return {"low": 0, "moderate": 1, "high": 2, "critical": 3}[self.value]


class Priority(str, Enum):
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Lower rank = act first."""
        return {"urgent": 0, "high": 1, "medium": 2, "low": 3}[self.value]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        # epoch milliseconds, as the mobile client stores them
        dt = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    else:
        dt = datetime.fromisoformat(str(value))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True)
class AnswerRecord:
    """One completed survey instance.

    A newer record of the same domain for the same user supersedes this
    one; records are never edited in place.
    """

    domain: Domain
    user_id: str
    answers: Mapping[str, Any]
    completed_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if not isinstance(self.domain, Domain):
            try:
                object.__setattr__(self, "domain", Domain(self.domain))
            except ValueError as e:
                raise ValidationError(f"Unknown survey domain: {self.domain!r}") from e
        object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))
        object.__setattr__(self, "completed_at", _parse_time(self.completed_at))

    @classmethod
    def from_dict(cls, data: dict) -> "AnswerRecord":
        return cls(
            domain=data["domain"],
            user_id=str(data["user_id"]),
            answers=data.get("answers", {}),
            completed_at=data.get("completed_at", _utcnow()),
        )

    def to_dict(self) -> dict:
        return {
            "domain": self.domain.value,
            "user_id": self.user_id,
            "answers": dict(self.answers),
            "completed_at": self.completed_at.isoformat(),
        }


@dataclass(frozen=True)
class DomainScore:
    """Score and tier for one domain.

    ``score`` is reported in the domain's own polarity (ergonomics is a
    quality score, higher = better); ``risk_score`` is always risk
    direction and is what tiers and the overall score are built from.
    """

    domain: Domain
    score: int
    tier: RiskTier
    weight: float
    polarity: Polarity = Polarity.HIGHER_IS_WORSE

    @property
    def risk_score(self) -> int:
        return self.polarity.to_risk_score(self.score)

    def to_dict(self) -> dict:
        return {
            "domain": self.domain.value,
            "score": self.score,
            "risk_score": self.risk_score,
            "tier": self.tier.value,
            "weight": self.weight,
            "polarity": self.polarity.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DomainScore":
        return cls(
            domain=Domain(data["domain"]),
            score=int(data["score"]),
            tier=RiskTier(data["tier"]),
            weight=float(data["weight"]),
            polarity=Polarity(data.get("polarity", Polarity.HIGHER_IS_WORSE.value)),
        )


@dataclass(frozen=True)
class RiskFactor:
    name: str
    domain: Domain
    severity: float                # 0-1, risk direction
    impact: ImpactTier
    description: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "domain": self.domain.value,
            "severity": round(self.severity, 4),
            "impact": self.impact.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RiskFactor":
        return cls(
            name=data["name"],
            domain=Domain(data["domain"]),
            severity=float(data["severity"]),
            impact=ImpactTier(data["impact"]),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    priority: Priority
    domain: Domain
    actions: tuple = ()

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "domain": self.domain.value,
            "actions": list(self.actions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Recommendation":
        return cls(
            title=data["title"],
            description=data.get("description", ""),
            priority=Priority(data["priority"]),
            domain=Domain(data["domain"]),
            actions=tuple(data.get("actions", ())),
        )


@dataclass(frozen=True)
class ClassifierPrediction:
    """Probability distribution from the neural classifier plus its label."""

    prob_low: float
    prob_moderate: float
    prob_high: float
    tier: RiskTier
    model_version: int = 0

    @property
    def probabilities(self) -> dict[str, float]:
        return {
            "low": self.prob_low,
            "moderate": self.prob_moderate,
            "high": self.prob_high,
        }

    def to_dict(self) -> dict:
        return {
            "prob_low": round(self.prob_low, 4),
            "prob_moderate": round(self.prob_moderate, 4),
            "prob_high": round(self.prob_high, 4),
            "tier": self.tier.value,
            "model_version": self.model_version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ClassifierPrediction":
        return cls(
            prob_low=float(data["prob_low"]),
            prob_moderate=float(data["prob_moderate"]),
            prob_high=float(data["prob_high"]),
            tier=RiskTier(data["tier"]),
            model_version=int(data.get("model_version", 0)),
        )


@dataclass(frozen=True)
class OverallAssessment:
    """Complete result of one recomputation.

    Created fresh every time; older assessments are kept as history and
    never modified.
    """

    user_id: str
    score: int                                           # 0-100, risk direction
    tier: RiskTier
    domain_scores: dict = field(default_factory=dict)    # {Domain: DomainScore}
    risk_factors: tuple = ()
    recommendations: tuple = ()
    created_at: datetime = field(default_factory=_utcnow)

    # --- Partial data ---
    missing_domains: tuple = ()
    effective_weights: dict = field(default_factory=dict)  # {Domain: float}, sums to 1
    top_concerns: tuple = ()

    # --- Confirmatory neural path (independent of the rule-based tier) ---
    neural: Optional[ClassifierPrediction] = None

    # --- Inputs, kept for later retraining on real outcomes ---
    features: dict = field(default_factory=dict)

    @property
    def is_partial(self) -> bool:
        return bool(self.missing_domains)

    @property
    def tiers_agree(self) -> Optional[bool]:
        """Whether the rule-based and neural tiers match (None if no neural result)."""
        if self.neural is None:
            return None
        return self.neural.tier is self.tier

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "score": self.score,
            "tier": self.tier.value,
            "domain_scores": {
                d.value: s.to_dict() for d, s in self.domain_scores.items()
            },
            "risk_factors": [f.to_dict() for f in self.risk_factors],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "created_at": self.created_at.isoformat(),
            "missing_domains": [d.value for d in self.missing_domains],
            "effective_weights": {
                d.value: round(w, 6) for d, w in self.effective_weights.items()
            },
            "top_concerns": [d.value for d in self.top_concerns],
            "neural": self.neural.to_dict() if self.neural else None,
            "tiers_agree": self.tiers_agree,
            "features": dict(self.features),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict) -> "OverallAssessment":
        neural = data.get("neural")
        return cls(
            user_id=data["user_id"],
            score=int(data["score"]),
            tier=RiskTier(data["tier"]),
            domain_scores={
                Domain(k): DomainScore.from_dict(v)
                for k, v in data.get("domain_scores", {}).items()
            },
            risk_factors=tuple(RiskFactor.from_dict(f) for f in data.get("risk_factors", [])),
            recommendations=tuple(
                Recommendation.from_dict(r) for r in data.get("recommendations", [])
            ),
            created_at=_parse_time(data["created_at"]),
            missing_domains=tuple(Domain(d) for d in data.get("missing_domains", [])),
            effective_weights={
                Domain(k): float(v) for k, v in data.get("effective_weights", {}).items()
            },
            top_concerns=tuple(Domain(d) for d in data.get("top_concerns", [])),
            neural=ClassifierPrediction.from_dict(neural) if neural else None,
            features={k: float(v) for k, v in data.get("features", {}).items()},
        )


class OutcomeStatus(str, Enum):
    AVAILABLE = "available"
    PARTIAL = "partial"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class AssessmentOutcome:
    """What the presentation layer sees; engine exceptions never leak past it."""

    status: OutcomeStatus
    assessment: Optional[OverallAssessment] = None
    missing_domains: tuple = ()
    reason: str = ""

    @property
    def is_available(self) -> bool:
        return self.assessment is not None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "assessment": self.assessment.to_dict() if self.assessment else None,
            "missing_domains": [d.value for d in self.missing_domains],
            "reason": self.reason,
        }
