"""
Generate Sample Answers — for smoke testing the scoring engine.

Creates, under ``data/samples/``:
  • low_risk_answers.json   — all nine surveys, healthy respondent
  • high_risk_answers.json  — all nine surveys, strained respondent
  • partial_answers.json    — three surveys only (partial assessment)

Each file is a JSON object with a ``records`` list, loadable with
``InMemoryAnswerSource.from_json``.
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_PROJECT_ROOT))

from workrisk.utils.helpers import ensure_dir, setup_logging

logger = setup_logging()


LOW_RISK = {
    "ergonomics": {
        "chair_type": "ergonomic_adjustable", "lumbar_support": "adjustable",
        "monitor_type": "external", "monitor_height": "eye_level",
        "main_lighting": "natural_abundant", "screen_glare": "rarely",
        "active_breaks": "every_30_60_min", "break_duration": 10,
    },
    "musculoskeletal": {
        "neck_pain_intensity": 1, "upper_back_pain_intensity": 0,
        "lower_back_pain_intensity": 1, "shoulder_pain_intensity": 0,
        "wrist_pain_intensity": 0, "neck_stiffness_intensity": 1,
        "morning_back_stiffness_intensity": 0, "pain_limits_activities": "no",
    },
    "visual": {
        "dry_eyes_intensity": 1, "eye_burning_intensity": 0, "dry_eyes_frequency": 1,
        "blurred_vision_frequency": 0, "light_sensitivity_frequency": 0,
    },
    "workload": {
        "current_workload": "adequate", "time_pressure": "low", "after_hours_work": 0,
        "works_weekends": "no", "decides_how_to_work": "mostly",
        "supervisor_support": "good", "coworker_relations": "very_good",
        "overall_satisfaction": "satisfied",
    },
    "stress": {
        "general_stress_level": 2, "fatigue": 1, "concentration_difficulty": 1,
        "irritability": 0, "work_anxiety": 1, "motivation_loss": 0, "overwhelmed": 1,
        "depersonalization": "never", "emotional_exhaustion": "rarely",
    },
    "sleep": {
        "sleep_quality": "good", "weeknight_sleep_hours": 7.5, "falling_asleep_difficulty": 1,
    },
    "physical_activity": {"exercise_frequency": 4, "exercise_duration": 45},
    "work_life_balance": {
        "work_life_balance": "good", "free_time_quality": 18, "can_disconnect": "mostly",
    },
    "general_health": {
        "age_range": 30, "general_health_status": "good", "energy_level": "high",
        "bmi_category": 23.4, "smoking_status": "non_smoker", "alcohol_consumption": "occasional",
        "preexisting_conditions": [], "medications": [], "recent_surgery": False,
        "had_covid": "recovered", "blood_pressure": "normal", "cholesterol_level": "normal",
        "blood_glucose": "normal",
    },
}

# Labels exactly as the (Spanish) survey forms send them.
HIGH_RISK = {
    "ergonomics": {
        "chair_type": "Silla de comedor", "lumbar_support": "No tiene soporte lumbar",
        "monitor_type": "Laptop sin soporte",
        "monitor_height": "Más de 15 cm por debajo de los ojos",
        "main_lighting": "Iluminación insuficiente", "screen_glare": "Constantemente",
        "active_breaks": "Nunca", "break_duration": 0,
    },
    "musculoskeletal": {
        "neck_pain_intensity": 4, "upper_back_pain_intensity": 3,
        "lower_back_pain_intensity": 5, "shoulder_pain_intensity": 4,
        "wrist_pain_intensity": 3, "neck_stiffness_intensity": 4,
        "morning_back_stiffness_intensity": 4,
        "pain_limits_activities": "Sí, significativamente",
    },
    "visual": {
        "dry_eyes_intensity": 4, "eye_burning_intensity": 3, "dry_eyes_frequency": 4,
        "blurred_vision_frequency": 3, "light_sensitivity_frequency": 3,
    },
    "workload": {
        "current_workload": "Excesiva", "time_pressure": "Muy alta", "after_hours_work": 15,
        "works_weekends": "Sí, frecuentemente", "decides_how_to_work": "Nada",
        "supervisor_support": "Muy mala", "coworker_relations": "Regular",
        "overall_satisfaction": "Muy insatisfecho",
    },
    "stress": {
        "general_stress_level": 9, "fatigue": 5, "concentration_difficulty": 4,
        "irritability": 4, "work_anxiety": 4, "motivation_loss": 4, "overwhelmed": 5,
        "depersonalization": "Frecuentemente", "emotional_exhaustion": "Siempre",
    },
    "sleep": {
        "sleep_quality": "Mala", "weeknight_sleep_hours": "Menos de 5 horas",
        "falling_asleep_difficulty": 4,
    },
    "physical_activity": {"exercise_frequency": "Nunca", "exercise_duration": 0},
    "work_life_balance": {
        "work_life_balance": "Solo trabajo, sin tiempo personal",
        "free_time_quality": "Menos de 5 horas", "can_disconnect": "Nunca",
    },
    "general_health": {
        "age_range": "46-55", "general_health_status": "Mala", "energy_level": "Muy bajo",
        "bmi_category": "Sobrepeso", "smoking_status": "Menos de 10 cigarrillos al día",
        "alcohol_consumption": "Frecuente",
        "preexisting_conditions": ["Hipertensión", "Ansiedad/Depresión"],
        "medications": ["Losartán", "Sertralina", "Omeprazol"], "recent_surgery": False,
        "had_covid": "Sí, con secuelas persistentes", "blood_pressure": "Alta",
        "cholesterol_level": "Alto", "blood_glucose": "Normal",
    },
}


def _records(user_id: str, answers_by_domain: dict, domains=None) -> list:
    now = datetime.now(timezone.utc)
    records = []
    for i, (domain, answers) in enumerate(answers_by_domain.items()):
        if domains is not None and domain not in domains:
            continue
        records.append({
            "domain": domain,
            "user_id": user_id,
            "answers": answers,
            "completed_at": (now - timedelta(minutes=10 * i)).isoformat(),
        })
    return records


def _write(path: Path, records: list) -> Path:
    path.write_text(json.dumps({"records": records}, indent=2), encoding="utf-8")
    return path


if __name__ == "__main__":
    out_dir = ensure_dir(_PROJECT_ROOT / "data" / "samples")

    files = [
        _write(out_dir / "low_risk_answers.json", _records("demo-low", LOW_RISK)),
        _write(out_dir / "high_risk_answers.json", _records("demo-high", HIGH_RISK)),
        _write(out_dir / "partial_answers.json",
               _records("demo-partial", HIGH_RISK, domains={"stress", "workload", "sleep"})),
    ]
    for path in files:
        logger.info("Created %s", path)
