"""
Domain Score Aggregator — feature vector to tiered domain and overall scores
=============================================================================
For each domain with data:

  1. Weighted mean of the domain's features in risk direction (each
     feature's polarity is looked up, never assumed).
  2. Stress only: rule table of additive escalations and score floors,
     because burnout-triad symptoms compound rather than add.
  3. Scale to 0-100, clamp, round half up.
  4. Tier on the risk score with the domain's inclusive cut-point table.

The overall score is the weighted sum of domain risk scores with the
weights renormalised over the domains that are present, so partial
surveys stay on the same 0-100 scale.

Pure: the same vector always yields the same scores.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

from workrisk.core.exceptions import MissingInputError
from workrisk.core.models import Domain, DomainScore, RiskTier
from workrisk.features.schema import (
    DOMAIN_POLARITY,
    FEATURE_SPECS,
    FeatureVector,
)
from workrisk.utils.helpers import clamp, load_config, setup_logging

logger = setup_logging()

_EPS = 1e-9


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class TierTable:
    """Inclusive ``{max, tier}`` rows, ascending; the last row must reach 100."""

    def __init__(self, rows):
        parsed = sorted(((int(r["max"]), RiskTier(r["tier"])) for r in rows),
                        key=lambda row: row[0])
        if not parsed or parsed[-1][0] < 100:
            raise ValueError("Tier table must cover scores up to 100")
        ranks = [tier.rank for _, tier in parsed]
        if ranks != sorted(ranks):
            raise ValueError("Tier table must be monotonic in risk")
        self.rows = tuple(parsed)

    def classify(self, risk_score: int) -> RiskTier:
        for upper, tier in self.rows:
            if risk_score <= upper:
                return tier
        return self.rows[-1][1]


@dataclass(frozen=True)
class ScoreRule:
    """All listed features at or above their risk threshold."""

    thresholds: dict
    amount: int

    def applies(self, vector: FeatureVector) -> bool:
        return all(vector.risk(name) >= t - _EPS for name, t in self.thresholds.items())


@dataclass(frozen=True)
class DomainRule:
    domain: Domain
    weight: float
    feature_weights: dict
    tiers: TierTable
    escalations: tuple = ()
    floors: tuple = ()


class Aggregation(NamedTuple):
    domain_scores: dict           # {Domain: DomainScore}, present domains only
    score: int                    # overall, risk direction
    tier: RiskTier
    effective_weights: dict       # {Domain: float}, sums to 1
    top_concerns: tuple           # Domains, worst first


def _parse_rules(raw_rules, key: str) -> tuple:
    rules = []
    for raw in raw_rules or ():
        for name in raw["when"]:
            if name not in FEATURE_SPECS:
                raise ValueError(f"Unknown feature in score rule: {name}")
        rules.append(ScoreRule(thresholds=dict(raw["when"]), amount=int(raw[key])))
    return tuple(rules)


class DomainScoreAggregator:
    """Rule-based scorer; the system of record for user-facing tiers."""

    def __init__(self, config: Optional[dict] = None):
        if config is None:
            config = load_config()

        domains_cfg = config["domains"]
        self.rules: dict[Domain, DomainRule] = {}
        for domain in Domain:
            cfg = domains_cfg[domain.value]
            feature_weights = {name: float(w) for name, w in cfg["features"].items()}
            for name in feature_weights:
                spec = FEATURE_SPECS.get(name)
                if spec is None or spec.domain is not domain:
                    raise ValueError(f"{domain.value}: feature {name!r} does not belong to this domain")
            self.rules[domain] = DomainRule(
                domain=domain,
                weight=float(cfg["weight"]),
                feature_weights=feature_weights,
                tiers=TierTable(cfg["tiers"]),
                escalations=_parse_rules(cfg.get("escalations"), "add"),
                floors=_parse_rules(cfg.get("floors"), "min"),
            )

        total = sum(r.weight for r in self.rules.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Domain weights must sum to 1.0, got {total:.4f}")

        self.overall_tiers = TierTable(config["overall_tiers"])
        concerns = config.get("top_concerns", {})
        self.concern_threshold = int(concerns.get("min_risk_score", 40))
        self.concern_limit = int(concerns.get("limit", 3))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def score_domain(self, vector: FeatureVector, domain: Domain) -> DomainScore:
        rule = self.rules[domain]
        total_w = sum(rule.feature_weights.values())
        risk = sum(w * vector.risk(name) for name, w in rule.feature_weights.items()) / total_w
        raw = risk * 100.0

        for esc in rule.escalations:
            if esc.applies(vector):
                raw += esc.amount
        for floor in rule.floors:
            if floor.applies(vector):
                raw = max(raw, float(floor.amount))

        # Escalations may legitimately overshoot; only clamp, no warning.
        risk_score = round_half_up(max(0.0, min(100.0, raw)))
        polarity = DOMAIN_POLARITY[domain]
        return DomainScore(
            domain=domain,
            score=polarity.to_risk_score(risk_score),
            tier=rule.tiers.classify(risk_score),
            weight=rule.weight,
            polarity=polarity,
        )

    def aggregate(self, vector: FeatureVector) -> Aggregation:
        present = vector.present_domains
        if not present:
            raise MissingInputError(vector.missing_domains, "No survey answers available")

        domain_scores = {d: self.score_domain(vector, d) for d in present}

        weight_sum = sum(self.rules[d].weight for d in present)
        effective = {d: self.rules[d].weight / weight_sum for d in present}

        overall_raw = sum(effective[d] * domain_scores[d].risk_score for d in present)
        overall = round_half_up(clamp(overall_raw, 0.0, 100.0, label="overall_score"))
        tier = self.overall_tiers.classify(overall)

        ranked = sorted(
            (s for s in domain_scores.values() if s.risk_score >= self.concern_threshold),
            key=lambda s: -s.risk_score,
        )
        top_concerns = tuple(s.domain for s in ranked[: self.concern_limit])

        return Aggregation(
            domain_scores=domain_scores,
            score=overall,
            tier=tier,
            effective_weights=effective,
            top_concerns=top_concerns,
        )
