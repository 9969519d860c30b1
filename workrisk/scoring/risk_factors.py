"""
Risk Factor Identifier
=======================
Independent threshold rules over the feature vector.  Every rule reads
values in risk direction (``FeatureVector.risk``) so a "low support" rule
is written as ``social_support >= 0.6`` risk, i.e. raw support <= 0.4.

Result order: impact tier descending, ties in rule declaration order.
Rules whose domain had no answers are skipped; the neutral fill value is
not evidence of anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from workrisk.core.models import Domain, ImpactTier, RiskFactor
from workrisk.features.schema import FEATURE_SPECS, FeatureVector

_EPS = 1e-9


@dataclass(frozen=True)
class RiskRule:
    """One named threshold check.

    mode ``"mean"``: fires when the mean risk of ``features`` reaches
    ``threshold``.  mode ``"any"``: fires when any feature reaches its own
    entry in ``per_feature`` (falling back to ``threshold``).  Severity is
    always the mean risk of the features.  ``critical_at`` promotes the
    impact to Critical once severity reaches it.
    """

    name: str
    domain: Domain
    features: tuple
    threshold: float
    impact: ImpactTier
    description: str
    mode: str = "mean"
    per_feature: Optional[dict] = None
    critical_at: Optional[float] = None

    def __post_init__(self):
        for name in self.features:
            if name not in FEATURE_SPECS:
                raise ValueError(f"{self.name}: unknown feature {name!r}")
        if self.mode not in ("mean", "any"):
            raise ValueError(f"{self.name}: unknown mode {self.mode!r}")

    def evaluate(self, vector: FeatureVector) -> Optional[RiskFactor]:
        risks = [vector.risk(f) for f in self.features]
        severity = sum(risks) / len(risks)

        if self.mode == "mean":
            fired = severity >= self.threshold - _EPS
        else:
            limits = self.per_feature or {}
            fired = any(
                r >= limits.get(f, self.threshold) - _EPS
                for f, r in zip(self.features, risks)
            )
        if not fired:
            return None

        impact = self.impact
        if self.critical_at is not None and severity >= self.critical_at - _EPS:
            impact = ImpactTier.CRITICAL
        return RiskFactor(
            name=self.name,
            domain=self.domain,
            severity=severity,
            impact=impact,
            description=self.description,
        )


DEFAULT_RULES: tuple = (
    RiskRule(
        name="High Stress Level",
        domain=Domain.STRESS,
        features=("stress_level",),
        threshold=0.7,
        impact=ImpactTier.HIGH,
        critical_at=0.9,
        description="Your self-reported stress level is high and sustained stress is the main driver of burnout.",
    ),
    RiskRule(
        name="Emotional Exhaustion",
        domain=Domain.STRESS,
        features=("emotional_exhaustion",),
        threshold=0.6,
        impact=ImpactTier.HIGH,
        critical_at=0.8,
        description="You frequently feel emotionally drained by your work.",
    ),
    RiskRule(
        name="Loss of Motivation",
        domain=Domain.STRESS,
        features=("motivation_loss",),
        threshold=0.7,
        impact=ImpactTier.HIGH,
        description="Your interest and motivation at work have dropped noticeably.",
    ),
    RiskRule(
        name="Work Overload",
        domain=Domain.WORKLOAD,
        features=("workload",),
        threshold=0.7,
        impact=ImpactTier.HIGH,
        description="Your workload is higher than can be sustained over time.",
    ),
    RiskRule(
        name="Excessive Overtime",
        domain=Domain.WORKLOAD,
        features=("overtime_hours",),
        threshold=0.6,
        impact=ImpactTier.MODERATE,
        description="You regularly work many hours outside your schedule.",
    ),
    RiskRule(
        name="Low Social Support",
        domain=Domain.WORKLOAD,
        features=("social_support",),
        threshold=0.6,
        impact=ImpactTier.HIGH,
        description="You get little support from your supervisor and colleagues.",
    ),
    RiskRule(
        name="Poor Sleep",
        domain=Domain.SLEEP,
        features=("sleep_quality", "sleep_hours"),
        threshold=0.6,
        mode="any",
        per_feature={"sleep_quality": 0.6, "sleep_hours": 0.5},
        impact=ImpactTier.HIGH,
        description="Your sleep is short or of poor quality, which limits recovery.",
    ),
    RiskRule(
        name="Work-Life Imbalance",
        domain=Domain.WORK_LIFE_BALANCE,
        features=("work_life_balance",),
        threshold=0.7,
        impact=ImpactTier.HIGH,
        description="Work takes up most of your time and energy.",
    ),
    RiskRule(
        name="Musculoskeletal Pain",
        domain=Domain.MUSCULOSKELETAL,
        features=("neck_pain", "back_pain", "shoulder_pain", "wrist_pain"),
        threshold=0.6,
        impact=ImpactTier.MODERATE,
        description="You report frequent neck, back, shoulder or wrist pain.",
    ),
    RiskRule(
        name="Physical Inactivity",
        domain=Domain.PHYSICAL_ACTIVITY,
        features=("exercise_frequency",),
        threshold=0.7,
        impact=ImpactTier.MODERATE,
        description="You rarely exercise, which reduces your resilience to stress.",
    ),
    RiskRule(
        name="Poor Workstation Ergonomics",
        domain=Domain.ERGONOMICS,
        features=("ergonomics_score", "chair_quality"),
        threshold=0.6,
        impact=ImpactTier.MODERATE,
        description="Your chair, screen and break setup put strain on your body.",
    ),
    RiskRule(
        name="Visual Strain",
        domain=Domain.VISUAL,
        features=("visual_fatigue", "dry_eyes", "blurred_vision"),
        threshold=0.6,
        impact=ImpactTier.LOW,
        description="You often have tired, dry or blurry eyes after screen work.",
    ),
    RiskRule(
        name="Health Conditions",
        domain=Domain.GENERAL_HEALTH,
        features=("general_health", "clinical_risk"),
        threshold=0.6,
        impact=ImpactTier.MODERATE,
        description="Your general health and existing conditions add to your overall risk.",
    ),
)


class RiskFactorIdentifier:

    def __init__(self, rules: Optional[tuple] = None):
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES

    def identify(self, vector: FeatureVector) -> list:
        found = []
        for rule in self.rules:
            if not vector.has_domain(rule.domain):
                continue
            factor = rule.evaluate(vector)
            if factor is not None:
                found.append(factor)
        # sorted() is stable, so declaration order breaks ties.
        return sorted(found, key=lambda f: -f.impact.rank)
