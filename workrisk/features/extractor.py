"""
Feature Extractor — survey answers to the 42-slot feature vector
=================================================================
Pure and deterministic: the same answer records always give the same
vector.  Malformed or unknown answers never raise; each field degrades to
its documented default.  Domains with no answer record are filled with
the neutral midpoint and reported in ``FeatureVector.missing_domains`` so
the caller can decide what to do with a partial vector.

Answer keys per domain (raw record -> feature):

  ergonomics          chair_type, lumbar_support, monitor_type, monitor_height,
                      main_lighting, screen_glare, active_breaks, break_duration
  musculoskeletal     *_intensity scales 0-5, pain_limits_activities
  visual              *_intensity / *_frequency scales 0-5
  workload            current_workload, time_pressure, after_hours_work,
                      works_weekends, decides_how_to_work, supervisor_support,
                      coworker_relations, overall_satisfaction
  stress              general_stress_level (0-10), 0-5 scales,
                      depersonalization, emotional_exhaustion
  sleep               sleep_quality, weeknight_sleep_hours, falling_asleep_difficulty
  physical_activity   exercise_frequency, exercise_duration
  work_life_balance   work_life_balance, free_time_quality, can_disconnect
  general_health      age_range, general_health_status, energy_level, bmi_category,
                      smoking_status, alcohol_consumption, preexisting_conditions,
                      medications, recent_surgery, had_covid, blood_pressure,
                      cholesterol_level, blood_glucose
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from workrisk.core.exceptions import ValidationError
from workrisk.core.models import AnswerRecord, Domain
from workrisk.features import questions as q
from workrisk.features.normalizers import fold, mean_scale, scale, truthy
from workrisk.features.schema import (
    FEATURE_NAMES,
    MISSING_FILL,
    FeatureVector,
    features_for,
)
from workrisk.utils.helpers import setup_logging

logger = setup_logging()

# Clinical-risk points, normalised by their sum.
_CONDITION_POINTS = 5
_CONDITION_CAP = 25
_MEDICATION_POINTS = 10
_SURGERY_POINTS = 5
_LONG_COVID_POINTS = 10
_BLOOD_PRESSURE_POINTS = 5
_CHOLESTEROL_POINTS = 3
_GLUCOSE_POINTS = 5
_CLINICAL_MAX = (
    _CONDITION_CAP + _MEDICATION_POINTS + _SURGERY_POINTS + _LONG_COVID_POINTS
    + _BLOOD_PRESSURE_POINTS + _CHOLESTEROL_POINTS + _GLUCOSE_POINTS
)

# Lifestyle points (BMI, tobacco, alcohol).
_BMI_POINTS = 15
_SMOKING_POINTS = 15
_ALCOHOL_POINTS = 5


def _mean(*values: float) -> float:
    return sum(values) / len(values)


def _as_list(raw: Any) -> list:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [part for part in (p.strip() for p in raw.split(",")) if part]
    try:
        return list(raw)
    except TypeError:
        return [raw]


# ------------------------------------------------------------------
# Per-domain extractors: answers mapping -> {feature name: value}
# ------------------------------------------------------------------

def _ergonomics(a: Mapping[str, Any]) -> dict:
    chair = q.CHAIR_TYPE.score_from(a)
    height = q.MONITOR_HEIGHT.score_from(a)
    breaks = q.BREAK_INTERVAL.score_from(a)
    return {
        "ergonomics_score": _mean(chair, height, breaks),
        "chair_quality": _mean(chair, q.LUMBAR_SUPPORT.score_from(a)),
        "monitor_quality": _mean(q.MONITOR_TYPE.score_from(a), height),
        "lighting_quality": _mean(q.LIGHTING.score_from(a), q.SCREEN_GLARE.score_from(a)),
        "break_frequency": _mean(breaks, q.BREAK_DURATION.score_from(a)),
    }


def _musculoskeletal(a: Mapping[str, Any]) -> dict:
    return {
        "neck_pain": scale(a.get("neck_pain_intensity")),
        "back_pain": mean_scale([a.get("upper_back_pain_intensity"),
                                 a.get("lower_back_pain_intensity")]),
        "shoulder_pain": scale(a.get("shoulder_pain_intensity")),
        "wrist_pain": scale(a.get("wrist_pain_intensity")),
        "muscle_stiffness": mean_scale([a.get("neck_stiffness_intensity"),
                                        a.get("morning_back_stiffness_intensity")]),
        "movement_limitation": q.PAIN_LIMITS_ACTIVITIES.score_from(a),
    }


def _visual(a: Mapping[str, Any]) -> dict:
    return {
        "visual_fatigue": mean_scale([a.get("dry_eyes_intensity"),
                                      a.get("eye_burning_intensity")]),
        "dry_eyes": scale(a.get("dry_eyes_frequency")),
        "blurred_vision": scale(a.get("blurred_vision_frequency")),
        "light_sensitivity": scale(a.get("light_sensitivity_frequency")),
    }


def _workload(a: Mapping[str, Any]) -> dict:
    return {
        "workload": q.WORKLOAD.score_from(a),
        "time_pressure": q.TIME_PRESSURE.score_from(a),
        "overtime_hours": q.OVERTIME.score_from(a),
        "weekend_work": q.WEEKEND_WORK.score_from(a),
        "autonomy": q.AUTONOMY.score_from(a),
        "social_support": _mean(q.SUPERVISOR_SUPPORT.score_from(a),
                                q.COWORKER_RELATIONS.score_from(a)),
        "job_satisfaction": q.JOB_SATISFACTION.score_from(a),
    }


def _stress(a: Mapping[str, Any]) -> dict:
    return {
        "stress_level": scale(a.get("general_stress_level"), maximum=10.0),
        "emotional_fatigue": scale(a.get("fatigue")),
        "concentration_difficulty": scale(a.get("concentration_difficulty")),
        "irritability": scale(a.get("irritability")),
        "anxiety": scale(a.get("work_anxiety")),
        "motivation_loss": scale(a.get("motivation_loss")),
        "overwhelm": scale(a.get("overwhelmed")),
        "depersonalization": q.DEPERSONALIZATION.score_from(a),
        "emotional_exhaustion": q.EMOTIONAL_EXHAUSTION.score_from(a),
    }


def _sleep(a: Mapping[str, Any]) -> dict:
    return {
        "sleep_quality": q.SLEEP_QUALITY.score_from(a),
        "sleep_hours": q.SLEEP_HOURS.score_from(a),
        "sleep_onset_difficulty": scale(a.get("falling_asleep_difficulty")),
    }


def _physical_activity(a: Mapping[str, Any]) -> dict:
    return {
        "exercise_frequency": q.EXERCISE_FREQUENCY.score_from(a),
        "activity_level": q.EXERCISE_DURATION.score_from(a),
    }


def _work_life_balance(a: Mapping[str, Any]) -> dict:
    return {
        "work_life_balance": q.WORK_LIFE_BALANCE.score_from(a),
        "free_time": q.FREE_TIME.score_from(a),
        "disconnect_ability": q.DISCONNECT.score_from(a),
    }


def _lifestyle(a: Mapping[str, Any]) -> float:
    bmi_raw = a.get("bmi_category", a.get("bmi"))
    points = (
        q.BMI_CATEGORY.score(bmi_raw) * _BMI_POINTS
        + q.SMOKING.score_from(a) * _SMOKING_POINTS
        + q.ALCOHOL.score_from(a) * _ALCOHOL_POINTS
    )
    return points / (_BMI_POINTS + _SMOKING_POINTS + _ALCOHOL_POINTS)


def _clinical_points(a: Mapping[str, Any]) -> float:
    serious = sum(q.CONDITION.score(c) for c in _as_list(a.get("preexisting_conditions")))
    points = min(serious * _CONDITION_POINTS, _CONDITION_CAP)

    medications = [m for m in _as_list(a.get("medications"))
                   if fold(m) not in ("ninguno", "none")]
    if len(medications) > 2:
        points += _MEDICATION_POINTS
    if truthy(a.get("recent_surgery", False)):
        points += _SURGERY_POINTS
    points += q.COVID_HISTORY.score_from(a) * _LONG_COVID_POINTS
    points += q.BLOOD_PRESSURE.score_from(a) * _BLOOD_PRESSURE_POINTS
    points += q.CHOLESTEROL.score_from(a) * _CHOLESTEROL_POINTS
    points += q.BLOOD_GLUCOSE.score_from(a) * _GLUCOSE_POINTS
    return points


def _general_health(a: Mapping[str, Any]) -> dict:
    return {
        "age_group": q.AGE_RANGE.score(a.get("age_range", a.get("age"))),
        "general_health": _mean(
            q.HEALTH_STATUS.score_from(a),
            q.ENERGY_LEVEL.score_from(a),
            _lifestyle(a),
        ),
        "clinical_risk": _clinical_points(a) / _CLINICAL_MAX,
    }


_DOMAIN_EXTRACTORS: dict[Domain, Callable[[Mapping[str, Any]], dict]] = {
    Domain.ERGONOMICS: _ergonomics,
    Domain.MUSCULOSKELETAL: _musculoskeletal,
    Domain.VISUAL: _visual,
    Domain.WORKLOAD: _workload,
    Domain.STRESS: _stress,
    Domain.SLEEP: _sleep,
    Domain.PHYSICAL_ACTIVITY: _physical_activity,
    Domain.WORK_LIFE_BALANCE: _work_life_balance,
    Domain.GENERAL_HEALTH: _general_health,
}


class FeatureExtractor:
    """Maps ``{Domain: AnswerRecord}`` to a :class:`FeatureVector`."""

    def __init__(self, config: Optional[dict] = None):
        # No tunables yet; accepted so every component is built the same way.
        self.config = config or {}

    def extract(self, answers: Mapping[Domain, AnswerRecord]) -> FeatureVector:
        values: dict[str, float] = {}
        missing = []

        for domain in Domain:
            record = answers.get(domain)
            if record is None:
                record = answers.get(domain.value)  # tolerate string keys
            names = features_for(domain)
            if record is None:
                missing.append(domain)
                values.update({name: MISSING_FILL for name in names})
                continue
            domain_values = _DOMAIN_EXTRACTORS[domain](record.answers)
            if set(domain_values) != set(names):
                raise ValidationError(f"{domain.value} extractor produced {sorted(domain_values)}")
            values.update(domain_values)

        if missing:
            logger.info("Feature extraction: %d/%d domains missing (%s)",
                        len(missing), len(Domain), ", ".join(d.value for d in missing))

        return FeatureVector(
            values=tuple(values[name] for name in FEATURE_NAMES),
            missing_domains=tuple(missing),
        )

    def extract_domain(self, record: AnswerRecord) -> dict:
        """Features of a single record, useful for per-survey previews."""
        return _DOMAIN_EXTRACTORS[record.domain](record.answers)
