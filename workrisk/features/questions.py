"""
Survey Question Catalogue
==========================
One ``Enum`` per categorical question plus its score table.  Scores are
in the feature's own polarity (see ``schema.FEATURES``): workstation and
lifestyle quality questions score 1.0 for the best answer, symptom and
demand questions score 1.0 for the worst.

Keyword tables accept the labels the survey forms actually send (Spanish)
as well as English; order matters, more specific phrases come first.
"""

from __future__ import annotations

from enum import Enum

from workrisk.features.normalizers import CategoricalQuestion


# ============================================================
# Shared answer vocabularies
# ============================================================

class Frequency(Enum):
    CONSTANTLY = "constantly"
    FREQUENTLY = "frequently"
    OCCASIONALLY = "occasionally"
    RARELY = "rarely"
    NEVER = "never"


FREQUENCY_KEYWORDS = (
    ("constantemente", Frequency.CONSTANTLY),
    ("siempre", Frequency.CONSTANTLY),
    ("always", Frequency.CONSTANTLY),
    ("frecuentemente", Frequency.FREQUENTLY),
    ("often", Frequency.FREQUENTLY),
    ("ocasionalmente", Frequency.OCCASIONALLY),
    ("a veces", Frequency.OCCASIONALLY),
    ("sometimes", Frequency.OCCASIONALLY),
    ("rara vez", Frequency.RARELY),
    ("casi nunca", Frequency.RARELY),
    ("seldom", Frequency.RARELY),
    ("nunca", Frequency.NEVER),
)


class Occurrence(Enum):
    """Yes / sometimes / a little / no answers."""

    YES = "yes"
    SOMETIMES = "sometimes"
    A_LITTLE = "a_little"
    NO = "no"


OCCURRENCE_KEYWORDS = (
    ("significativamente", Occurrence.YES),
    ("frecuentemente", Occurrence.YES),
    ("frequently", Occurrence.YES),
    ("a veces", Occurrence.SOMETIMES),
    ("algunas veces", Occurrence.SOMETIMES),
    ("moderadamente", Occurrence.SOMETIMES),
    ("moderately", Occurrence.SOMETIMES),
    ("poco", Occurrence.A_LITTLE),
    ("ocasionalmente", Occurrence.A_LITTLE),
    ("occasionally", Occurrence.A_LITTLE),
    ("si", Occurrence.YES),
    ("no", Occurrence.NO),
    ("nunca", Occurrence.NO),
    ("never", Occurrence.NO),
)


class Rating(Enum):
    VERY_GOOD = "very_good"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    VERY_POOR = "very_poor"


RATING_KEYWORDS = (
    ("muy bueno", Rating.VERY_GOOD),
    ("muy buena", Rating.VERY_GOOD),
    ("excelente", Rating.VERY_GOOD),
    ("excellent", Rating.VERY_GOOD),
    ("muy malo", Rating.VERY_POOR),
    ("muy mala", Rating.VERY_POOR),
    ("very bad", Rating.VERY_POOR),
    ("bueno", Rating.GOOD),
    ("buena", Rating.GOOD),
    ("regular", Rating.FAIR),
    ("malo", Rating.POOR),
    ("mala", Rating.POOR),
    ("bad", Rating.POOR),
)


# ============================================================
# Ergonomics
# ============================================================

class ChairType(Enum):
    ERGONOMIC_ADJUSTABLE = "ergonomic_adjustable"
    HEIGHT_AND_BACKREST = "height_and_backrest"
    HEIGHT_ONLY = "height_only"
    BASIC = "basic"
    NON_OFFICE = "non_office"


CHAIR_TYPE = CategoricalQuestion(
    key="chair_type",
    choices=ChairType,
    scores={
        ChairType.ERGONOMIC_ADJUSTABLE: 1.0,
        ChairType.HEIGHT_AND_BACKREST: 0.75,
        ChairType.HEIGHT_ONLY: 0.5,
        ChairType.BASIC: 0.25,
        ChairType.NON_OFFICE: 0.0,
    },
    default=0.0,
    keywords=(
        ("ergonomica ajustable", ChairType.ERGONOMIC_ADJUSTABLE),
        ("fully adjustable", ChairType.ERGONOMIC_ADJUSTABLE),
        ("ajuste de altura y respaldo", ChairType.HEIGHT_AND_BACKREST),
        ("height and backrest", ChairType.HEIGHT_AND_BACKREST),
        ("ajuste de altura solamente", ChairType.HEIGHT_ONLY),
        ("height only", ChairType.HEIGHT_ONLY),
        ("basica", ChairType.BASIC),
        ("comedor", ChairType.NON_OFFICE),
        ("sofa", ChairType.NON_OFFICE),
    ),
)


class LumbarSupport(Enum):
    ADJUSTABLE = "adjustable"
    FIXED = "fixed"
    NONE = "none"


LUMBAR_SUPPORT = CategoricalQuestion(
    key="lumbar_support",
    choices=LumbarSupport,
    scores={LumbarSupport.ADJUSTABLE: 1.0, LumbarSupport.FIXED: 0.6, LumbarSupport.NONE: 0.0},
    default=0.0,
    keywords=(
        ("no tiene", LumbarSupport.NONE),
        ("sin soporte", LumbarSupport.NONE),
        ("ajustable", LumbarSupport.ADJUSTABLE),
        ("fijo", LumbarSupport.FIXED),
    ),
)


class MonitorType(Enum):
    EXTERNAL = "external"
    LAPTOP_WITH_EXTERNAL = "laptop_with_external"
    LAPTOP_ON_STAND = "laptop_on_stand"
    LAPTOP_NO_STAND = "laptop_no_stand"
    OTHER = "other"


MONITOR_TYPE = CategoricalQuestion(
    key="monitor_type",
    choices=MonitorType,
    scores={
        MonitorType.EXTERNAL: 1.0,
        MonitorType.LAPTOP_WITH_EXTERNAL: 0.8,
        MonitorType.LAPTOP_ON_STAND: 0.5,
        MonitorType.LAPTOP_NO_STAND: 0.2,
        MonitorType.OTHER: 0.1,
    },
    default=0.1,
    keywords=(
        ("laptop con monitor externo", MonitorType.LAPTOP_WITH_EXTERNAL),
        ("laptop with external monitor", MonitorType.LAPTOP_WITH_EXTERNAL),
        ("sin soporte", MonitorType.LAPTOP_NO_STAND),
        ("without stand", MonitorType.LAPTOP_NO_STAND),
        ("con soporte", MonitorType.LAPTOP_ON_STAND),
        ("on stand", MonitorType.LAPTOP_ON_STAND),
        ("monitor externo", MonitorType.EXTERNAL),
        ("external monitor", MonitorType.EXTERNAL),
    ),
)


class MonitorHeight(Enum):
    EYE_LEVEL = "eye_level"
    SLIGHTLY_BELOW = "slightly_below"
    FAR_BELOW = "far_below"
    ABOVE = "above"
    UNSURE = "unsure"


MONITOR_HEIGHT = CategoricalQuestion(
    key="monitor_height",
    choices=MonitorHeight,
    scores={
        MonitorHeight.EYE_LEVEL: 1.0,
        MonitorHeight.SLIGHTLY_BELOW: 0.8,
        MonitorHeight.FAR_BELOW: 0.4,
        MonitorHeight.ABOVE: 0.3,
        MonitorHeight.UNSURE: 0.5,
    },
    default=0.5,
    keywords=(
        ("altura de los ojos", MonitorHeight.EYE_LEVEL),
        ("eye level", MonitorHeight.EYE_LEVEL),
        ("mas de 15 cm", MonitorHeight.FAR_BELOW),
        ("more than 15 cm", MonitorHeight.FAR_BELOW),
        ("10 15 cm", MonitorHeight.SLIGHTLY_BELOW),
        ("por encima", MonitorHeight.ABOVE),
        ("no se", MonitorHeight.UNSURE),
    ),
)


class Lighting(Enum):
    NATURAL_ABUNDANT = "natural_abundant"
    NATURAL_MODERATE = "natural_moderate"
    MIXED = "mixed"
    ARTIFICIAL = "artificial"
    POOR = "poor"


LIGHTING = CategoricalQuestion(
    key="main_lighting",
    choices=Lighting,
    scores={
        Lighting.NATURAL_ABUNDANT: 1.0,
        Lighting.NATURAL_MODERATE: 0.8,
        Lighting.MIXED: 0.7,
        Lighting.ARTIFICIAL: 0.6,
        Lighting.POOR: 0.3,
    },
    default=0.3,
    keywords=(
        ("natural abundante", Lighting.NATURAL_ABUNDANT),
        ("abundant natural", Lighting.NATURAL_ABUNDANT),
        ("natural moderada", Lighting.NATURAL_MODERATE),
        ("moderate natural", Lighting.NATURAL_MODERATE),
        ("mezcla", Lighting.MIXED),
        ("insuficiente", Lighting.POOR),
        ("artificial", Lighting.ARTIFICIAL),
    ),
)

SCREEN_GLARE = CategoricalQuestion(
    key="screen_glare",
    choices=Frequency,
    scores={
        Frequency.NEVER: 1.0,
        Frequency.RARELY: 0.85,
        Frequency.OCCASIONALLY: 0.7,
        Frequency.FREQUENTLY: 0.4,
        Frequency.CONSTANTLY: 0.2,
    },
    default=0.2,
    keywords=FREQUENCY_KEYWORDS,
)


class BreakInterval(Enum):
    EVERY_30_60_MIN = "every_30_60_min"
    EVERY_1_2_HOURS = "every_1_2_hours"
    EVERY_3_4_HOURS = "every_3_4_hours"
    BATHROOM_ONLY = "bathroom_only"
    NEVER = "never"


BREAK_INTERVAL = CategoricalQuestion(
    key="active_breaks",
    choices=BreakInterval,
    scores={
        BreakInterval.EVERY_30_60_MIN: 1.0,
        BreakInterval.EVERY_1_2_HOURS: 0.7,
        BreakInterval.EVERY_3_4_HOURS: 0.4,
        BreakInterval.BATHROOM_ONLY: 0.2,
        BreakInterval.NEVER: 0.0,
    },
    default=0.0,
    keywords=(
        ("30 60 minutos", BreakInterval.EVERY_30_60_MIN),
        ("30 60 minutes", BreakInterval.EVERY_30_60_MIN),
        ("1 2 horas", BreakInterval.EVERY_1_2_HOURS),
        ("1 2 hours", BreakInterval.EVERY_1_2_HOURS),
        ("3 4 horas", BreakInterval.EVERY_3_4_HOURS),
        ("3 4 hours", BreakInterval.EVERY_3_4_HOURS),
        ("bano", BreakInterval.BATHROOM_ONLY),
        ("bathroom", BreakInterval.BATHROOM_ONLY),
        ("nunca", BreakInterval.NEVER),
    ),
)


class BreakDuration(Enum):
    FIVE_TO_TEN_MIN = "5_10_min"
    TWO_TO_FIVE_MIN = "2_5_min"
    UNDER_TWO_MIN = "under_2_min"
    NONE = "none"


def _break_minutes(minutes: float) -> BreakDuration:
    if minutes >= 5:
        return BreakDuration.FIVE_TO_TEN_MIN
    if minutes >= 2:
        return BreakDuration.TWO_TO_FIVE_MIN
    if minutes > 0:
        return BreakDuration.UNDER_TWO_MIN
    return BreakDuration.NONE


BREAK_DURATION = CategoricalQuestion(
    key="break_duration",
    choices=BreakDuration,
    scores={
        BreakDuration.FIVE_TO_TEN_MIN: 1.0,
        BreakDuration.TWO_TO_FIVE_MIN: 0.6,
        BreakDuration.UNDER_TWO_MIN: 0.3,
        BreakDuration.NONE: 0.0,
    },
    default=0.0,
    keywords=(
        ("5 10 minutos", BreakDuration.FIVE_TO_TEN_MIN),
        ("5 10 minutes", BreakDuration.FIVE_TO_TEN_MIN),
        ("2 5 minutos", BreakDuration.TWO_TO_FIVE_MIN),
        ("2 5 minutes", BreakDuration.TWO_TO_FIVE_MIN),
        ("menos de 2", BreakDuration.UNDER_TWO_MIN),
        ("less than 2", BreakDuration.UNDER_TWO_MIN),
    ),
    bands=_break_minutes,
)


# ============================================================
# Musculoskeletal / yes-no style
# ============================================================

PAIN_LIMITS_ACTIVITIES = CategoricalQuestion(
    key="pain_limits_activities",
    choices=Occurrence,
    scores={Occurrence.YES: 1.0, Occurrence.SOMETIMES: 0.6, Occurrence.A_LITTLE: 0.3, Occurrence.NO: 0.0},
    default=0.0,
    keywords=OCCURRENCE_KEYWORDS,
)


# ============================================================
# Workload
# ============================================================

class Workload(Enum):
    EXCESSIVE = "excessive"
    HIGH = "high"
    ADEQUATE = "adequate"
    LOW = "low"
    VERY_LOW = "very_low"


WORKLOAD = CategoricalQuestion(
    key="current_workload",
    choices=Workload,
    scores={
        Workload.EXCESSIVE: 1.0,
        Workload.HIGH: 0.75,
        Workload.ADEQUATE: 0.5,
        Workload.LOW: 0.25,
        Workload.VERY_LOW: 0.1,
    },
    default=0.1,
    keywords=(
        ("excesiva", Workload.EXCESSIVE),
        ("muy alta", Workload.EXCESSIVE),
        ("muy baja", Workload.VERY_LOW),
        ("alta", Workload.HIGH),
        ("adecuada", Workload.ADEQUATE),
        ("baja", Workload.LOW),
    ),
)


class Level(Enum):
    VERY_HIGH = "very_high"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    NONE = "none"


TIME_PRESSURE = CategoricalQuestion(
    key="time_pressure",
    choices=Level,
    scores={Level.VERY_HIGH: 1.0, Level.HIGH: 0.75, Level.MODERATE: 0.5, Level.LOW: 0.25, Level.NONE: 0.0},
    default=0.0,
    keywords=(
        ("muy alta", Level.VERY_HIGH),
        ("constante", Level.VERY_HIGH),
        ("constant", Level.VERY_HIGH),
        ("alta", Level.HIGH),
        ("moderada", Level.MODERATE),
        ("baja", Level.LOW),
        ("ninguna", Level.NONE),
    ),
)


class Overtime(Enum):
    OVER_12_HOURS = "over_12_hours"
    HOURS_8_12 = "8_12_hours"
    HOURS_4_7 = "4_7_hours"
    HOURS_1_3 = "1_3_hours"
    NONE = "none"


def _overtime_hours(hours: float) -> Overtime:
    if hours > 12:
        return Overtime.OVER_12_HOURS
    if hours >= 8:
        return Overtime.HOURS_8_12
    if hours >= 4:
        return Overtime.HOURS_4_7
    if hours >= 1:
        return Overtime.HOURS_1_3
    return Overtime.NONE


OVERTIME = CategoricalQuestion(
    key="after_hours_work",
    choices=Overtime,
    scores={
        Overtime.OVER_12_HOURS: 1.0,
        Overtime.HOURS_8_12: 0.75,
        Overtime.HOURS_4_7: 0.5,
        Overtime.HOURS_1_3: 0.25,
        Overtime.NONE: 0.0,
    },
    default=0.0,
    keywords=(
        ("mas de 12", Overtime.OVER_12_HOURS),
        ("more than 12", Overtime.OVER_12_HOURS),
        ("8 12", Overtime.HOURS_8_12),
        ("4 7", Overtime.HOURS_4_7),
        ("1 3", Overtime.HOURS_1_3),
    ),
    bands=_overtime_hours,
)

WEEKEND_WORK = CategoricalQuestion(
    key="works_weekends",
    choices=Occurrence,
    scores={Occurrence.YES: 1.0, Occurrence.SOMETIMES: 0.6, Occurrence.A_LITTLE: 0.3, Occurrence.NO: 0.0},
    default=0.0,
    keywords=OCCURRENCE_KEYWORDS,
)


class Autonomy(Enum):
    FULL = "full"
    MOSTLY = "mostly"
    PARTIALLY = "partially"
    LITTLE = "little"
    NONE = "none"


AUTONOMY = CategoricalQuestion(
    key="decides_how_to_work",
    choices=Autonomy,
    scores={
        Autonomy.FULL: 1.0,
        Autonomy.MOSTLY: 0.75,
        Autonomy.PARTIALLY: 0.5,
        Autonomy.LITTLE: 0.25,
        Autonomy.NONE: 0.0,
    },
    default=0.0,
    keywords=(
        ("total autonomia", Autonomy.FULL),
        ("full autonomy", Autonomy.FULL),
        ("mayoria", Autonomy.MOSTLY),
        ("parcialmente", Autonomy.PARTIALLY),
        ("poco", Autonomy.LITTLE),
        ("nada", Autonomy.NONE),
    ),
)

SUPERVISOR_SUPPORT = CategoricalQuestion(
    key="supervisor_support",
    choices=Rating,
    scores={Rating.VERY_GOOD: 1.0, Rating.GOOD: 0.75, Rating.FAIR: 0.5, Rating.POOR: 0.25, Rating.VERY_POOR: 0.0},
    default=0.0,
    keywords=RATING_KEYWORDS,
)

COWORKER_RELATIONS = CategoricalQuestion(
    key="coworker_relations",
    choices=Rating,
    scores={Rating.VERY_GOOD: 1.0, Rating.GOOD: 0.75, Rating.FAIR: 0.5, Rating.POOR: 0.25, Rating.VERY_POOR: 0.0},
    default=0.5,
    keywords=RATING_KEYWORDS,
)


class Satisfaction(Enum):
    VERY_SATISFIED = "very_satisfied"
    SATISFIED = "satisfied"
    NEUTRAL = "neutral"
    DISSATISFIED = "dissatisfied"
    VERY_DISSATISFIED = "very_dissatisfied"


JOB_SATISFACTION = CategoricalQuestion(
    key="overall_satisfaction",
    choices=Satisfaction,
    scores={
        Satisfaction.VERY_SATISFIED: 1.0,
        Satisfaction.SATISFIED: 0.75,
        Satisfaction.NEUTRAL: 0.5,
        Satisfaction.DISSATISFIED: 0.25,
        Satisfaction.VERY_DISSATISFIED: 0.0,
    },
    default=0.0,
    keywords=(
        ("muy insatisfecho", Satisfaction.VERY_DISSATISFIED),
        ("insatisfecho", Satisfaction.DISSATISFIED),
        ("muy satisfecho", Satisfaction.VERY_SATISFIED),
        ("satisfecho", Satisfaction.SATISFIED),
    ),
)


# ============================================================
# Stress & mental health
# ============================================================

_FREQUENCY_RISK = {
    Frequency.CONSTANTLY: 1.0,
    Frequency.FREQUENTLY: 0.75,
    Frequency.OCCASIONALLY: 0.5,
    Frequency.RARELY: 0.25,
    Frequency.NEVER: 0.0,
}

DEPERSONALIZATION = CategoricalQuestion(
    key="depersonalization",
    choices=Frequency,
    scores=_FREQUENCY_RISK,
    default=0.0,
    keywords=FREQUENCY_KEYWORDS,
)

EMOTIONAL_EXHAUSTION = CategoricalQuestion(
    key="emotional_exhaustion",
    choices=Frequency,
    scores=_FREQUENCY_RISK,
    default=0.0,
    keywords=FREQUENCY_KEYWORDS,
)


# ============================================================
# Sleep
# ============================================================

SLEEP_QUALITY = CategoricalQuestion(
    key="sleep_quality",
    choices=Rating,
    scores={Rating.VERY_GOOD: 1.0, Rating.GOOD: 0.75, Rating.FAIR: 0.5, Rating.POOR: 0.25, Rating.VERY_POOR: 0.1},
    default=0.1,
    keywords=RATING_KEYWORDS,
)


class SleepHours(Enum):
    SEVEN_TO_EIGHT = "7_8_hours"
    OVER_EIGHT = "over_8_hours"
    FIVE_TO_SIX = "5_6_hours"
    UNDER_FIVE = "under_5_hours"


def _sleep_hours(hours: float) -> SleepHours:
    if hours > 8:
        return SleepHours.OVER_EIGHT
    if hours >= 7:
        return SleepHours.SEVEN_TO_EIGHT
    if hours >= 5:
        return SleepHours.FIVE_TO_SIX
    return SleepHours.UNDER_FIVE


SLEEP_HOURS = CategoricalQuestion(
    key="weeknight_sleep_hours",
    choices=SleepHours,
    scores={
        SleepHours.SEVEN_TO_EIGHT: 1.0,
        SleepHours.OVER_EIGHT: 0.9,
        SleepHours.FIVE_TO_SIX: 0.5,
        SleepHours.UNDER_FIVE: 0.2,
    },
    default=0.5,
    keywords=(
        ("7 8", SleepHours.SEVEN_TO_EIGHT),
        ("mas de 8", SleepHours.OVER_EIGHT),
        ("more than 8", SleepHours.OVER_EIGHT),
        ("5 6", SleepHours.FIVE_TO_SIX),
        ("menos de 5", SleepHours.UNDER_FIVE),
        ("less than 5", SleepHours.UNDER_FIVE),
    ),
    bands=_sleep_hours,
)


# ============================================================
# Physical activity
# ============================================================

class ExerciseFrequency(Enum):
    DAILY = "daily"
    FOUR_TO_FIVE_WEEKLY = "4_5_weekly"
    TWO_TO_THREE_WEEKLY = "2_3_weekly"
    ONCE_WEEKLY = "once_weekly"
    NEVER = "never"


def _exercise_days(days: float) -> ExerciseFrequency:
    if days >= 6:
        return ExerciseFrequency.DAILY
    if days >= 4:
        return ExerciseFrequency.FOUR_TO_FIVE_WEEKLY
    if days >= 2:
        return ExerciseFrequency.TWO_TO_THREE_WEEKLY
    if days >= 1:
        return ExerciseFrequency.ONCE_WEEKLY
    return ExerciseFrequency.NEVER


EXERCISE_FREQUENCY = CategoricalQuestion(
    key="exercise_frequency",
    choices=ExerciseFrequency,
    scores={
        ExerciseFrequency.DAILY: 1.0,
        ExerciseFrequency.FOUR_TO_FIVE_WEEKLY: 0.8,
        ExerciseFrequency.TWO_TO_THREE_WEEKLY: 0.6,
        ExerciseFrequency.ONCE_WEEKLY: 0.3,
        ExerciseFrequency.NEVER: 0.0,
    },
    default=0.0,
    keywords=(
        ("diariamente", ExerciseFrequency.DAILY),
        ("4 5 veces", ExerciseFrequency.FOUR_TO_FIVE_WEEKLY),
        ("4 5 times", ExerciseFrequency.FOUR_TO_FIVE_WEEKLY),
        ("2 3 veces", ExerciseFrequency.TWO_TO_THREE_WEEKLY),
        ("2 3 times", ExerciseFrequency.TWO_TO_THREE_WEEKLY),
        ("1 vez", ExerciseFrequency.ONCE_WEEKLY),
        ("once a week", ExerciseFrequency.ONCE_WEEKLY),
        ("nunca", ExerciseFrequency.NEVER),
    ),
    bands=_exercise_days,
)


class ExerciseDuration(Enum):
    OVER_60_MIN = "over_60_min"
    MIN_30_60 = "30_60_min"
    MIN_20_30 = "20_30_min"
    UNDER_20_MIN = "under_20_min"
    NONE = "none"


def _exercise_minutes(minutes: float) -> ExerciseDuration:
    if minutes > 60:
        return ExerciseDuration.OVER_60_MIN
    if minutes >= 30:
        return ExerciseDuration.MIN_30_60
    if minutes >= 20:
        return ExerciseDuration.MIN_20_30
    if minutes > 0:
        return ExerciseDuration.UNDER_20_MIN
    return ExerciseDuration.NONE


EXERCISE_DURATION = CategoricalQuestion(
    key="exercise_duration",
    choices=ExerciseDuration,
    scores={
        ExerciseDuration.OVER_60_MIN: 1.0,
        ExerciseDuration.MIN_30_60: 0.75,
        ExerciseDuration.MIN_20_30: 0.5,
        ExerciseDuration.UNDER_20_MIN: 0.25,
        ExerciseDuration.NONE: 0.0,
    },
    default=0.0,
    keywords=(
        ("mas de 60", ExerciseDuration.OVER_60_MIN),
        ("more than 60", ExerciseDuration.OVER_60_MIN),
        ("30 60", ExerciseDuration.MIN_30_60),
        ("20 30", ExerciseDuration.MIN_20_30),
        ("menos de 20", ExerciseDuration.UNDER_20_MIN),
        ("less than 20", ExerciseDuration.UNDER_20_MIN),
    ),
    bands=_exercise_minutes,
)


# ============================================================
# Work-life balance
# ============================================================

class Balance(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    PARTIAL = "partial"
    MORE_WORK = "more_work"
    WORK_ONLY = "work_only"


WORK_LIFE_BALANCE = CategoricalQuestion(
    key="work_life_balance",
    choices=Balance,
    scores={
        Balance.EXCELLENT: 1.0,
        Balance.GOOD: 0.75,
        Balance.PARTIAL: 0.5,
        Balance.MORE_WORK: 0.25,
        Balance.WORK_ONLY: 0.0,
    },
    default=0.0,
    keywords=(
        ("excelente", Balance.EXCELLENT),
        ("buen balance", Balance.GOOD),
        ("good balance", Balance.GOOD),
        ("parcialmente", Balance.PARTIAL),
        ("mas trabajo", Balance.MORE_WORK),
        ("more work", Balance.MORE_WORK),
        ("solo trabajo", Balance.WORK_ONLY),
    ),
)


class FreeTime(Enum):
    OVER_20_HOURS = "over_20_hours"
    HOURS_15_20 = "15_20_hours"
    HOURS_10_15 = "10_15_hours"
    HOURS_5_10 = "5_10_hours"
    UNDER_5_HOURS = "under_5_hours"


def _free_hours(hours: float) -> FreeTime:
    if hours > 20:
        return FreeTime.OVER_20_HOURS
    if hours >= 15:
        return FreeTime.HOURS_15_20
    if hours >= 10:
        return FreeTime.HOURS_10_15
    if hours >= 5:
        return FreeTime.HOURS_5_10
    return FreeTime.UNDER_5_HOURS


FREE_TIME = CategoricalQuestion(
    key="free_time_quality",
    choices=FreeTime,
    scores={
        FreeTime.OVER_20_HOURS: 1.0,
        FreeTime.HOURS_15_20: 0.75,
        FreeTime.HOURS_10_15: 0.5,
        FreeTime.HOURS_5_10: 0.25,
        FreeTime.UNDER_5_HOURS: 0.1,
    },
    default=0.1,
    keywords=(
        ("mas de 20", FreeTime.OVER_20_HOURS),
        ("more than 20", FreeTime.OVER_20_HOURS),
        ("15 20", FreeTime.HOURS_15_20),
        ("10 15", FreeTime.HOURS_10_15),
        ("5 10", FreeTime.HOURS_5_10),
        ("menos de 5", FreeTime.UNDER_5_HOURS),
    ),
    bands=_free_hours,
)


class Disconnect(Enum):
    COMPLETELY = "completely"
    MOSTLY = "mostly"
    WITH_DIFFICULTY = "with_difficulty"
    RARELY = "rarely"
    NEVER = "never"


DISCONNECT = CategoricalQuestion(
    key="can_disconnect",
    choices=Disconnect,
    scores={
        Disconnect.COMPLETELY: 1.0,
        Disconnect.MOSTLY: 0.75,
        Disconnect.WITH_DIFFICULTY: 0.5,
        Disconnect.RARELY: 0.25,
        Disconnect.NEVER: 0.0,
    },
    default=0.0,
    keywords=(
        ("completamente", Disconnect.COMPLETELY),
        ("mayormente", Disconnect.MOSTLY),
        ("dificultad", Disconnect.WITH_DIFFICULTY),
        ("difficulty", Disconnect.WITH_DIFFICULTY),
        ("rara vez", Disconnect.RARELY),
        ("nunca", Disconnect.NEVER),
    ),
)


# ============================================================
# General health
# ============================================================

class AgeRange(Enum):
    AGE_18_25 = "18_25"
    AGE_26_35 = "26_35"
    AGE_36_45 = "36_45"
    AGE_46_55 = "46_55"
    OVER_55 = "over_55"


def _age_years(age: float) -> AgeRange:
    if age <= 25:
        return AgeRange.AGE_18_25
    if age <= 35:
        return AgeRange.AGE_26_35
    if age <= 45:
        return AgeRange.AGE_36_45
    if age <= 55:
        return AgeRange.AGE_46_55
    return AgeRange.OVER_55


AGE_RANGE = CategoricalQuestion(
    key="age_range",
    choices=AgeRange,
    scores={
        AgeRange.AGE_18_25: 0.2,
        AgeRange.AGE_26_35: 0.4,
        AgeRange.AGE_36_45: 0.6,
        AgeRange.AGE_46_55: 0.8,
        AgeRange.OVER_55: 1.0,
    },
    default=1.0,
    keywords=(
        ("18 25", AgeRange.AGE_18_25),
        ("26 35", AgeRange.AGE_26_35),
        ("36 45", AgeRange.AGE_36_45),
        ("46 55", AgeRange.AGE_46_55),
    ),
    bands=_age_years,
)

# Risk direction from here on: 1.0 is the worst answer.

HEALTH_STATUS = CategoricalQuestion(
    key="general_health_status",
    choices=Rating,
    scores={Rating.VERY_GOOD: 0.0, Rating.GOOD: 0.25, Rating.FAIR: 0.5, Rating.POOR: 0.85, Rating.VERY_POOR: 1.0},
    default=0.5,
    keywords=RATING_KEYWORDS,
)

class Energy(Enum):
    VERY_HIGH = "very_high"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"
    VERY_LOW = "very_low"


ENERGY_LEVEL = CategoricalQuestion(
    key="energy_level",
    choices=Energy,
    scores={Energy.VERY_HIGH: 0.0, Energy.HIGH: 0.2, Energy.NORMAL: 0.4, Energy.LOW: 0.7, Energy.VERY_LOW: 1.0},
    default=0.4,
    keywords=(
        ("muy alto", Energy.VERY_HIGH),
        ("muy bajo", Energy.VERY_LOW),
        ("alto", Energy.HIGH),
        ("moderado", Energy.NORMAL),
        ("bajo", Energy.LOW),
    ),
)


class BmiCategory(Enum):
    NORMAL = "normal"
    UNDERWEIGHT = "underweight"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


def _bmi(value: float) -> BmiCategory:
    if value < 18.5:
        return BmiCategory.UNDERWEIGHT
    if value < 25:
        return BmiCategory.NORMAL
    if value < 30:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


BMI_CATEGORY = CategoricalQuestion(
    key="bmi_category",
    choices=BmiCategory,
    scores={
        BmiCategory.NORMAL: 0.0,
        BmiCategory.UNDERWEIGHT: 8 / 15,
        BmiCategory.OVERWEIGHT: 10 / 15,
        BmiCategory.OBESE: 1.0,
    },
    default=0.0,
    keywords=(
        ("obesidad", BmiCategory.OBESE),
        ("obesity", BmiCategory.OBESE),
        ("sobrepeso", BmiCategory.OVERWEIGHT),
        ("bajo peso", BmiCategory.UNDERWEIGHT),
        ("peso normal", BmiCategory.NORMAL),
    ),
    bands=_bmi,
)


class Smoking(Enum):
    OVER_10_DAILY = "over_10_daily"
    UNDER_10_DAILY = "under_10_daily"
    OCCASIONAL = "occasional"
    NON_SMOKER = "non_smoker"


SMOKING = CategoricalQuestion(
    key="smoking_status",
    choices=Smoking,
    scores={
        Smoking.OVER_10_DAILY: 1.0,
        Smoking.UNDER_10_DAILY: 2 / 3,
        Smoking.OCCASIONAL: 1 / 3,
        Smoking.NON_SMOKER: 0.0,
    },
    default=0.0,
    keywords=(
        ("mas de 10", Smoking.OVER_10_DAILY),
        ("more than 10", Smoking.OVER_10_DAILY),
        ("menos de 10", Smoking.UNDER_10_DAILY),
        ("less than 10", Smoking.UNDER_10_DAILY),
        ("ocasionalmente", Smoking.OCCASIONAL),
        ("occasionally", Smoking.OCCASIONAL),
        ("no fumo", Smoking.NON_SMOKER),
        ("nunca", Smoking.NON_SMOKER),
    ),
)


class Alcohol(Enum):
    FREQUENT = "frequent"
    OCCASIONAL = "occasional"
    NONE = "none"


ALCOHOL = CategoricalQuestion(
    key="alcohol_consumption",
    choices=Alcohol,
    scores={Alcohol.FREQUENT: 1.0, Alcohol.OCCASIONAL: 0.25, Alcohol.NONE: 0.0},
    default=0.0,
    keywords=(
        ("frecuente", Alcohol.FREQUENT),
        ("frequently", Alcohol.FREQUENT),
        ("ocasional", Alcohol.OCCASIONAL),
        ("ocasionalmente", Alcohol.OCCASIONAL),
        ("no consumo", Alcohol.NONE),
        ("nunca", Alcohol.NONE),
    ),
)


class Condition(Enum):
    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    HEART_DISEASE = "heart_disease"
    ANXIETY_DEPRESSION = "anxiety_depression"
    HERNIATED_DISC = "herniated_disc"
    OTHER = "other"


# 1.0 marks the conditions that count toward clinical risk.
CONDITION = CategoricalQuestion(
    key="preexisting_conditions",
    choices=Condition,
    scores={
        Condition.DIABETES: 1.0,
        Condition.HYPERTENSION: 1.0,
        Condition.HEART_DISEASE: 1.0,
        Condition.ANXIETY_DEPRESSION: 1.0,
        Condition.HERNIATED_DISC: 1.0,
        Condition.OTHER: 0.0,
    },
    default=0.0,
    keywords=(
        ("diabetes", Condition.DIABETES),
        ("hipertension", Condition.HYPERTENSION),
        ("problemas cardiacos", Condition.HEART_DISEASE),
        ("heart", Condition.HEART_DISEASE),
        ("ansiedad", Condition.ANXIETY_DEPRESSION),
        ("depresion", Condition.ANXIETY_DEPRESSION),
        ("anxiety", Condition.ANXIETY_DEPRESSION),
        ("depression", Condition.ANXIETY_DEPRESSION),
        ("hernia discal", Condition.HERNIATED_DISC),
        ("herniated disc", Condition.HERNIATED_DISC),
    ),
)


class CovidHistory(Enum):
    LONG_COVID = "long_covid"
    RECOVERED = "recovered"
    NEVER = "never"


COVID_HISTORY = CategoricalQuestion(
    key="had_covid",
    choices=CovidHistory,
    scores={CovidHistory.LONG_COVID: 1.0, CovidHistory.RECOVERED: 0.0, CovidHistory.NEVER: 0.0},
    default=0.0,
    keywords=(
        ("secuelas persistentes", CovidHistory.LONG_COVID),
        ("persistent", CovidHistory.LONG_COVID),
        ("sin secuelas", CovidHistory.RECOVERED),
        ("recuperado", CovidHistory.RECOVERED),
        ("no", CovidHistory.NEVER),
    ),
)


class Indicator(Enum):
    ELEVATED = "elevated"
    NORMAL = "normal"
    UNKNOWN = "unknown"


def _indicator(key: str, *elevated_words: str) -> CategoricalQuestion:
    return CategoricalQuestion(
        key=key,
        choices=Indicator,
        scores={Indicator.ELEVATED: 1.0, Indicator.NORMAL: 0.0, Indicator.UNKNOWN: 0.0},
        default=0.0,
        keywords=tuple((w, Indicator.ELEVATED) for w in elevated_words)
        + (("normal", Indicator.NORMAL), ("no se", Indicator.UNKNOWN)),
    )


BLOOD_PRESSURE = _indicator("blood_pressure", "hipertension", "alta", "high")
CHOLESTEROL = _indicator("cholesterol_level", "alto", "high")
BLOOD_GLUCOSE = _indicator("blood_glucose", "diabetes", "prediabetes", "alta", "high")
