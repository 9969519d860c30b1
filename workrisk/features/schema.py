"""
Feature Schema — the fixed 42-slot vector every model consumes
================================================================
Each slot has a stable name, the domain it belongs to and an explicit
polarity.  Downstream code (aggregator, risk rules, classifier) never
assumes "higher is worse": it asks the schema.

Ergonomics, sleep quality/hours, activity, work-life balance and the
job-resource features (autonomy, support, satisfaction) are quality
measures where 1.0 is the best answer; everything else is a symptom or
demand where 1.0 is the worst.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union

import numpy as np

from workrisk.core.exceptions import ValidationError
from workrisk.core.models import Domain, Polarity
from workrisk.utils.helpers import clamp

_BETTER = Polarity.HIGHER_IS_BETTER
_WORSE = Polarity.HIGHER_IS_WORSE


@dataclass(frozen=True)
class FeatureSpec:
    name: str
    domain: Domain
    polarity: Polarity


FEATURES: tuple = (
    # Ergonomics (workstation quality)
    FeatureSpec("ergonomics_score", Domain.ERGONOMICS, _BETTER),
    FeatureSpec("chair_quality", Domain.ERGONOMICS, _BETTER),
    FeatureSpec("monitor_quality", Domain.ERGONOMICS, _BETTER),
    FeatureSpec("lighting_quality", Domain.ERGONOMICS, _BETTER),
    FeatureSpec("break_frequency", Domain.ERGONOMICS, _BETTER),
    # Musculoskeletal symptoms
    FeatureSpec("neck_pain", Domain.MUSCULOSKELETAL, _WORSE),
    FeatureSpec("back_pain", Domain.MUSCULOSKELETAL, _WORSE),
    FeatureSpec("shoulder_pain", Domain.MUSCULOSKELETAL, _WORSE),
    FeatureSpec("wrist_pain", Domain.MUSCULOSKELETAL, _WORSE),
    FeatureSpec("muscle_stiffness", Domain.MUSCULOSKELETAL, _WORSE),
    FeatureSpec("movement_limitation", Domain.MUSCULOSKELETAL, _WORSE),
    # Visual symptoms
    FeatureSpec("visual_fatigue", Domain.VISUAL, _WORSE),
    FeatureSpec("dry_eyes", Domain.VISUAL, _WORSE),
    FeatureSpec("blurred_vision", Domain.VISUAL, _WORSE),
    FeatureSpec("light_sensitivity", Domain.VISUAL, _WORSE),
    # Workload: demands
    FeatureSpec("workload", Domain.WORKLOAD, _WORSE),
    FeatureSpec("time_pressure", Domain.WORKLOAD, _WORSE),
    FeatureSpec("overtime_hours", Domain.WORKLOAD, _WORSE),
    FeatureSpec("weekend_work", Domain.WORKLOAD, _WORSE),
    # Workload: resources
    FeatureSpec("autonomy", Domain.WORKLOAD, _BETTER),
    FeatureSpec("social_support", Domain.WORKLOAD, _BETTER),
    FeatureSpec("job_satisfaction", Domain.WORKLOAD, _BETTER),
    # Stress & mental health
    FeatureSpec("stress_level", Domain.STRESS, _WORSE),
    FeatureSpec("emotional_fatigue", Domain.STRESS, _WORSE),
    FeatureSpec("concentration_difficulty", Domain.STRESS, _WORSE),
    FeatureSpec("irritability", Domain.STRESS, _WORSE),
    FeatureSpec("anxiety", Domain.STRESS, _WORSE),
    FeatureSpec("motivation_loss", Domain.STRESS, _WORSE),
    FeatureSpec("overwhelm", Domain.STRESS, _WORSE),
    FeatureSpec("depersonalization", Domain.STRESS, _WORSE),
    FeatureSpec("emotional_exhaustion", Domain.STRESS, _WORSE),
    # Sleep
    FeatureSpec("sleep_quality", Domain.SLEEP, _BETTER),
    FeatureSpec("sleep_hours", Domain.SLEEP, _BETTER),
    FeatureSpec("sleep_onset_difficulty", Domain.SLEEP, _WORSE),
    # Physical activity
    FeatureSpec("exercise_frequency", Domain.PHYSICAL_ACTIVITY, _BETTER),
    FeatureSpec("activity_level", Domain.PHYSICAL_ACTIVITY, _BETTER),
    # Work-life balance
    FeatureSpec("work_life_balance", Domain.WORK_LIFE_BALANCE, _BETTER),
    FeatureSpec("free_time", Domain.WORK_LIFE_BALANCE, _BETTER),
    FeatureSpec("disconnect_ability", Domain.WORK_LIFE_BALANCE, _BETTER),
    # General health
    FeatureSpec("age_group", Domain.GENERAL_HEALTH, Polarity.NEUTRAL),
    FeatureSpec("general_health", Domain.GENERAL_HEALTH, _WORSE),
    FeatureSpec("clinical_risk", Domain.GENERAL_HEALTH, _WORSE),
)

FEATURE_NAMES: tuple = tuple(f.name for f in FEATURES)
FEATURE_COUNT: int = len(FEATURES)
FEATURE_INDEX: dict = {name: i for i, name in enumerate(FEATURE_NAMES)}
FEATURE_SPECS: dict = {f.name: f for f in FEATURES}

# Reported polarity of each domain score.  Only ergonomics is shown as a
# quality score; every other domain score is already in risk direction.
DOMAIN_POLARITY: dict = {
    d: (_BETTER if d is Domain.ERGONOMICS else _WORSE) for d in Domain
}

# Value used for every slot of a domain that has no answers.
MISSING_FILL = 0.5

assert FEATURE_COUNT == 42
assert len(set(FEATURE_NAMES)) == FEATURE_COUNT


def features_for(domain: Domain) -> tuple:
    """Names of the features that belong to *domain*, in vector order."""
    return tuple(f.name for f in FEATURES if f.domain is domain)


@dataclass(frozen=True)
class FeatureVector:
    """Ordered, clamped [0, 1] feature values.

    ``missing_domains`` lists the domains whose slots were filled with
    :data:`MISSING_FILL` because no answers were available.
    """

    values: tuple
    missing_domains: tuple = ()

    def __post_init__(self):
        if len(self.values) != FEATURE_COUNT:
            raise ValidationError(
                f"Feature vector must have {FEATURE_COUNT} values, got {len(self.values)}"
            )
        clamped = tuple(
            clamp(float(v), 0.0, 1.0, label=name)
            for name, v in zip(FEATURE_NAMES, self.values)
        )
        object.__setattr__(self, "values", clamped)
        missing = tuple(sorted({Domain(d) for d in self.missing_domains},
                               key=list(Domain).index))
        object.__setattr__(self, "missing_domains", missing)

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, float],
        default: float = MISSING_FILL,
        missing_domains=(),
    ) -> "FeatureVector":
        """Build a vector from ``{name: value}``; unnamed slots get *default*."""
        unknown = set(values) - set(FEATURE_NAMES)
        if unknown:
            raise ValidationError(f"Unknown feature names: {sorted(unknown)}")
        return cls(
            values=tuple(values.get(name, default) for name in FEATURE_NAMES),
            missing_domains=tuple(missing_domains),
        )

    def __getitem__(self, key: Union[str, int]) -> float:
        if isinstance(key, str):
            try:
                return self.values[FEATURE_INDEX[key]]
            except KeyError as e:
                raise KeyError(f"Unknown feature: {key}") from e
        return self.values[key]

    def __len__(self) -> int:
        return FEATURE_COUNT

    def risk(self, name: str) -> float:
        """Value of *name* oriented so that 1.0 is always the worst."""
        return FEATURE_SPECS[name].polarity.to_risk(self[name])

    @property
    def is_complete(self) -> bool:
        return not self.missing_domains

    @property
    def present_domains(self) -> tuple:
        return tuple(d for d in Domain if d not in self.missing_domains)

    def has_domain(self, domain: Domain) -> bool:
        return domain not in self.missing_domains

    def to_array(self, dtype=np.float32) -> np.ndarray:
        return np.asarray(self.values, dtype=dtype)

    def to_dict(self, domain: Optional[Domain] = None) -> dict:
        names = features_for(domain) if domain is not None else FEATURE_NAMES
        return {name: self[name] for name in names}
