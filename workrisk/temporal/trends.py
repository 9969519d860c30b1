"""
Trend Analysis — compare two assessments
=========================================
Per domain and overall, in risk direction (ergonomics is compared on its
risk score, not its quality score):

  change <= -5 points  -> improving
  change >= +5 points  -> worsening
  otherwise            -> stable

Domains present in only one of the two assessments are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from workrisk.core.models import OverallAssessment
from workrisk.utils.helpers import setup_logging

logger = setup_logging()

DEFAULT_CHANGE_THRESHOLD = 5
DEFAULT_REMINDER_DAYS = 30


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"
    NO_DATA = "no_data"


@dataclass(frozen=True)
class DomainTrend:
    domain: object               # Domain
    current: int
    previous: int
    direction: TrendDirection

    @property
    def change(self) -> int:
        return self.current - self.previous

    @property
    def change_percent(self) -> float:
        return (self.change / self.previous * 100.0) if self.previous > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "domain": self.domain.value,
            "current": self.current,
            "previous": self.previous,
            "change": self.change,
            "change_percent": round(self.change_percent, 1),
            "direction": self.direction.value,
        }


@dataclass(frozen=True)
class TrendAnalysis:
    overall: TrendDirection
    domain_trends: dict = field(default_factory=dict)   # {Domain: DomainTrend}
    days_elapsed: int = 0
    insights: tuple = ()

    def _count(self, direction: TrendDirection) -> int:
        return sum(1 for t in self.domain_trends.values() if t.direction is direction)

    @property
    def improving(self) -> int:
        return self._count(TrendDirection.IMPROVING)

    @property
    def worsening(self) -> int:
        return self._count(TrendDirection.WORSENING)

    @property
    def stable(self) -> int:
        return self._count(TrendDirection.STABLE)

    def to_dict(self) -> dict:
        return {
            "overall": self.overall.value,
            "domain_trends": {d.value: t.to_dict() for d, t in self.domain_trends.items()},
            "improving": self.improving,
            "worsening": self.worsening,
            "stable": self.stable,
            "days_elapsed": self.days_elapsed,
            "insights": list(self.insights),
        }


def _direction(change: int, threshold: int) -> TrendDirection:
    if change <= -threshold:
        return TrendDirection.IMPROVING
    if change >= threshold:
        return TrendDirection.WORSENING
    return TrendDirection.STABLE


def analyze_trend(
    current: OverallAssessment,
    previous: Optional[OverallAssessment],
    change_threshold: int = DEFAULT_CHANGE_THRESHOLD,
    reminder_days: int = DEFAULT_REMINDER_DAYS,
) -> TrendAnalysis:
    if previous is None:
        return TrendAnalysis(
            overall=TrendDirection.NO_DATA,
            insights=("First assessment. Check in regularly to see how things change.",),
        )

    days = int((current.created_at - previous.created_at).total_seconds() // 86400)

    trends = {}
    for domain, score in current.domain_scores.items():
        before = previous.domain_scores.get(domain)
        if before is None:
            continue
        change = score.risk_score - before.risk_score
        trends[domain] = DomainTrend(
            domain=domain,
            current=score.risk_score,
            previous=before.risk_score,
            direction=_direction(change, change_threshold),
        )

    overall = _direction(current.score - previous.score, change_threshold)
    analysis = TrendAnalysis(
        overall=overall,
        domain_trends=trends,
        days_elapsed=days,
        insights=tuple(_insights(trends, overall, days, reminder_days)),
    )
    logger.info("Trend: %s (improving=%d, worsening=%d, stable=%d, %d days)",
                overall.value, analysis.improving, analysis.worsening, analysis.stable, days)
    return analysis


def _insights(trends: dict, overall: TrendDirection, days: int, reminder_days: int) -> list:
    insights = []
    if overall is TrendDirection.IMPROVING:
        insights.append("Your occupational health is improving. Keep up the good habits!")
    elif overall is TrendDirection.WORSENING:
        insights.append("Your occupational health has declined. Review your recommendations.")
    else:
        insights.append(f"Your occupational health has been stable for {days} days.")

    improving = sorted(
        (t for t in trends.values() if t.direction is TrendDirection.IMPROVING),
        key=lambda t: t.change,
    )[:2]
    if improving:
        insights.append("Notable improvement in: "
                        + " and ".join(t.domain.display_name for t in improving))

    worsening = sorted(
        (t for t in trends.values() if t.direction is TrendDirection.WORSENING),
        key=lambda t: -t.change,
    )[:2]
    if worsening:
        insights.append("Needs attention: "
                        + " and ".join(t.domain.display_name for t in worsening))

    if trends and all(t.direction is TrendDirection.STABLE for t in trends.values()):
        insights.append("All areas are stable. Consider new strategies to improve further.")

    if days > reminder_days:
        insights.append(f"{days} days have passed since your last assessment. "
                        "A weekly check-in is recommended.")
    return insights
