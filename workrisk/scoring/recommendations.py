"""
Recommendation Generator
=========================
Policy:
  1. Critical overall tier -> prepend an urgent "seek professional help" item.
  2. One recommendation per domain that has at least one risk factor.
  3. Deduplicate by title.
  4. Stable sort by priority (Urgent first).
  5. Truncate to ``max_count`` (5 by default).
"""

from __future__ import annotations

from typing import Iterable, Optional

from workrisk.core.models import Domain, Priority, Recommendation, RiskTier
from workrisk.utils.helpers import load_config

URGENT_HELP = Recommendation(
    title="Seek Professional Help Now",
    description="Your burnout risk is critical. Please talk to a mental-health professional as soon as possible.",
    priority=Priority.URGENT,
    domain=Domain.STRESS,
    actions=(
        "Contact your human resources department",
        "Book an appointment with a psychologist or psychiatrist",
        "Consider temporary medical leave",
        "Tell your supervisor about your situation",
    ),
)

DOMAIN_RECOMMENDATIONS: dict = {
    Domain.STRESS: Recommendation(
        title="Manage Your Stress",
        description="Build stress-management habits and look for emotional support.",
        priority=Priority.HIGH,
        domain=Domain.STRESS,
        actions=(
            "Practise mindfulness or meditation for 10 minutes a day",
            "Set clear limits between work and personal life",
            "Talk to someone you trust about how you feel",
            "Consider psychological therapy",
        ),
    ),
    Domain.WORKLOAD: Recommendation(
        title="Rebalance Your Workload",
        description="Reorganise your tasks and set limits on what you take on.",
        priority=Priority.HIGH,
        domain=Domain.WORKLOAD,
        actions=(
            "Discuss your workload with your supervisor",
            "Delegate tasks where possible",
            "Prioritise with an urgent/important matrix",
            "Decline additional commitments",
        ),
    ),
    Domain.SLEEP: Recommendation(
        title="Improve Your Sleep Hygiene",
        description="Restful sleep is essential for recovery.",
        priority=Priority.HIGH,
        domain=Domain.SLEEP,
        actions=(
            "Keep a regular sleep schedule",
            "Avoid screens for an hour before bed",
            "Keep your bedroom dark, cool and quiet",
            "Avoid caffeine after 2 PM",
        ),
    ),
    Domain.WORK_LIFE_BALANCE: Recommendation(
        title="Restore Your Work-Life Balance",
        description="Make quality time for your personal life and relationships.",
        priority=Priority.HIGH,
        domain=Domain.WORK_LIFE_BALANCE,
        actions=(
            "Schedule enjoyable activities every week",
            "Spend quality time with family and friends",
            "Disconnect completely at weekends",
            "Pick up a hobby you had dropped",
        ),
    ),
    Domain.MUSCULOSKELETAL: Recommendation(
        title="Look After Your Back and Joints",
        description="Recurring pain is a signal to change posture and routine.",
        priority=Priority.MEDIUM,
        domain=Domain.MUSCULOSKELETAL,
        actions=(
            "Stretch your neck, shoulders and wrists every hour",
            "Alternate sitting and standing during the day",
            "See a physiotherapist if the pain persists",
        ),
    ),
    Domain.GENERAL_HEALTH: Recommendation(
        title="Keep Up With Your Health Checks",
        description="Existing conditions and habits influence how well you cope with strain.",
        priority=Priority.MEDIUM,
        domain=Domain.GENERAL_HEALTH,
        actions=(
            "Schedule an annual medical check-up",
            "Follow the treatment plans for any chronic conditions",
            "Reduce tobacco and alcohol",
        ),
    ),
    Domain.PHYSICAL_ACTIVITY: Recommendation(
        title="Move More",
        description="Regular exercise lowers stress and improves mood.",
        priority=Priority.MEDIUM,
        domain=Domain.PHYSICAL_ACTIVITY,
        actions=(
            "Walk for 30 minutes a day",
            "Do moderate exercise three times a week",
            "Try yoga or tai chi to unwind",
            "Take the stairs instead of the lift",
        ),
    ),
    Domain.ERGONOMICS: Recommendation(
        title="Adjust Your Workstation",
        description="A well set-up workstation prevents strain before it starts.",
        priority=Priority.MEDIUM,
        domain=Domain.ERGONOMICS,
        actions=(
            "Raise your screen to eye level",
            "Use a chair with lumbar support",
            "Take an active break every 30-60 minutes",
        ),
    ),
    Domain.VISUAL: Recommendation(
        title="Rest Your Eyes",
        description="Screen work dries and tires the eyes.",
        priority=Priority.LOW,
        domain=Domain.VISUAL,
        actions=(
            "Follow the 20-20-20 rule",
            "Reduce screen glare and adjust brightness",
            "Use lubricating eye drops if needed",
        ),
    ),
}

# Every domain must have a recommendation.
assert set(DOMAIN_RECOMMENDATIONS) == set(Domain)


class RecommendationGenerator:

    def __init__(self, config: Optional[dict] = None):
        if config is None:
            config = load_config()
        self.max_count = int(config.get("recommendations", {}).get("max_count", 5))

    def generate(self, factors: Iterable, overall_tier: RiskTier) -> list:
        candidates = []
        if overall_tier is RiskTier.CRITICAL:
            candidates.append(URGENT_HELP)

        seen_domains = []
        for factor in factors:
            if factor.domain not in seen_domains:
                seen_domains.append(factor.domain)
        candidates.extend(DOMAIN_RECOMMENDATIONS[d] for d in seen_domains)

        unique = []
        titles = set()
        for rec in candidates:
            if rec.title not in titles:
                titles.add(rec.title)
                unique.append(rec)

        unique.sort(key=lambda r: r.priority.rank)
        return unique[: self.max_count]
