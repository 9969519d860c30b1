"""
Unit Tests for Domain Scoring, Risk Factors and Recommendations
================================================================
Tests cover:
  - Weighted domain scores, stress escalations and floors
  - Overall score with weight renormalisation for missing domains
  - Tier tables and half-up rounding
  - Risk factor thresholds, impact ordering and missing-domain skipping
  - Recommendation policy (urgent item, dedup, priority order, cap)
"""

import copy
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from workrisk.core.exceptions import MissingInputError
from workrisk.core.models import Domain, ImpactTier, Polarity, Priority, RiskFactor, RiskTier
from workrisk.features.schema import FEATURE_SPECS, FeatureVector, features_for
from workrisk.scoring.aggregator import DomainScoreAggregator, TierTable, round_half_up
from workrisk.scoring.recommendations import URGENT_HELP, RecommendationGenerator
from workrisk.scoring.risk_factors import RiskFactorIdentifier
from workrisk.utils.helpers import load_config


def _vector(missing=(), **values):
    """All features at the neutral 0.5 unless overridden."""
    return FeatureVector.from_mapping(values, missing_domains=missing)


def _stressed_vector():
    return _vector(stress_level=1.0, emotional_exhaustion=0.9, workload=0.9)


class TestRounding(unittest.TestCase):

    def test_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(83.5), 84)
        self.assertEqual(round_half_up(41.49), 41)
        self.assertEqual(round_half_up(0.0), 0)


class TestTierTable(unittest.TestCase):

    def test_inclusive_upper_bounds(self):
        table = TierTable([
            {"max": 24, "tier": "low"},
            {"max": 49, "tier": "moderate"},
            {"max": 69, "tier": "high"},
            {"max": 100, "tier": "critical"},
        ])
        self.assertIs(table.classify(24), RiskTier.LOW)
        self.assertIs(table.classify(25), RiskTier.MODERATE)
        self.assertIs(table.classify(69), RiskTier.HIGH)
        self.assertIs(table.classify(100), RiskTier.CRITICAL)

    def test_table_must_cover_100(self):
        with self.assertRaises(ValueError):
            TierTable([{"max": 50, "tier": "low"}, {"max": 90, "tier": "high"}])


class TestDomainScoreAggregator(unittest.TestCase):

    def setUp(self):
        self.config = load_config()
        self.aggregator = DomainScoreAggregator(self.config)

    def test_neutral_vector(self):
        result = self.aggregator.aggregate(_vector())
        self.assertEqual(result.score, 50)
        self.assertIs(result.tier, RiskTier.HIGH)
        for score in result.domain_scores.values():
            self.assertEqual(score.risk_score, 50)

    def test_low_stress_scenario(self):
        calm = {name: 0.0 for name in features_for(Domain.STRESS)}
        result = self.aggregator.aggregate(_vector(**calm))
        self.assertEqual(result.domain_scores[Domain.STRESS].score, 0)
        self.assertIs(result.domain_scores[Domain.STRESS].tier, RiskTier.LOW)
        # 0.18 * 0 + 0.82 * 50
        self.assertEqual(result.score, 41)
        self.assertIs(result.tier, RiskTier.MODERATE)

    def test_high_stress_scenario(self):
        result = self.aggregator.aggregate(_stressed_vector())
        stress = result.domain_scores[Domain.STRESS]
        workload = result.domain_scores[Domain.WORKLOAD]
        # 68.5 weighted + 15 escalation
        self.assertGreaterEqual(stress.score, 83)
        self.assertIs(stress.tier, RiskTier.CRITICAL)
        self.assertEqual(workload.score, 60)
        self.assertIs(workload.tier, RiskTier.HIGH)
        self.assertIs(result.tier, RiskTier.HIGH)
        self.assertEqual(result.top_concerns[:2], (Domain.STRESS, Domain.WORKLOAD))

    def test_stress_floor(self):
        calm = {name: 0.0 for name in features_for(Domain.STRESS)}
        calm["stress_level"] = 0.8
        score = self.aggregator.score_domain(_vector(**calm), Domain.STRESS)
        self.assertEqual(score.score, 45)
        self.assertIs(score.tier, RiskTier.HIGH)

    def test_escalation_is_capped_at_100(self):
        worst = {name: 1.0 for name in features_for(Domain.STRESS)}
        score = self.aggregator.score_domain(_vector(**worst), Domain.STRESS)
        self.assertEqual(score.score, 100)

    def test_ergonomics_reported_as_quality(self):
        good = {name: 0.9 for name in features_for(Domain.ERGONOMICS)}
        score = self.aggregator.score_domain(_vector(**good), Domain.ERGONOMICS)
        self.assertIs(score.polarity, Polarity.HIGHER_IS_BETTER)
        self.assertEqual(score.score, 90)
        self.assertEqual(score.risk_score, 10)
        self.assertIs(score.tier, RiskTier.LOW)

    def test_partial_vector_renormalises_weights(self):
        present = (Domain.STRESS, Domain.SLEEP, Domain.VISUAL)
        missing = [d for d in Domain if d not in present]
        result = self.aggregator.aggregate(_vector(missing=missing))
        self.assertEqual(set(result.domain_scores), set(present))
        self.assertAlmostEqual(sum(result.effective_weights.values()), 1.0, places=9)
        # 0.18 / (0.18 + 0.11 + 0.07)
        self.assertAlmostEqual(result.effective_weights[Domain.STRESS], 0.5)
        self.assertAlmostEqual(result.effective_weights[Domain.VISUAL], 0.07 / 0.36)
        self.assertEqual(result.score, 50)

    def test_tier_never_improves_as_a_feature_worsens(self):
        steps = [i / 20 for i in range(21)]
        for domain in Domain:
            for name in features_for(domain):
                better_is_higher = FEATURE_SPECS[name].polarity is Polarity.HIGHER_IS_BETTER
                ranks, risks = [], []
                for risk in steps:
                    value = 1.0 - risk if better_is_higher else risk
                    score = self.aggregator.score_domain(_vector(**{name: value}), domain)
                    ranks.append(score.tier.rank)
                    risks.append(score.risk_score)
                with self.subTest(domain=domain.value, feature=name):
                    self.assertEqual(ranks, sorted(ranks))
                    self.assertEqual(risks, sorted(risks))

    def test_nothing_answered_raises(self):
        with self.assertRaises(MissingInputError) as ctx:
            self.aggregator.aggregate(_vector(missing=list(Domain)))
        self.assertEqual(len(ctx.exception.missing_domains), len(Domain))

    def test_scores_stay_in_range(self):
        for fill in (0.0, 0.25, 0.5, 0.75, 1.0):
            vector = FeatureVector(values=(fill,) * 42)
            result = self.aggregator.aggregate(vector)
            self.assertTrue(0 <= result.score <= 100)
            for score in result.domain_scores.values():
                self.assertTrue(0 <= score.score <= 100)

    def test_weights_must_sum_to_one(self):
        config = copy.deepcopy(self.config)
        config["domains"]["stress"]["weight"] = 0.5
        with self.assertRaises(ValueError):
            DomainScoreAggregator(config)

    def test_feature_must_belong_to_domain(self):
        config = copy.deepcopy(self.config)
        config["domains"]["sleep"]["features"]["stress_level"] = 0.1
        with self.assertRaises(ValueError):
            DomainScoreAggregator(config)


class TestRiskFactorIdentifier(unittest.TestCase):

    def setUp(self):
        self.identifier = RiskFactorIdentifier()

    def test_high_stress_scenario_factors(self):
        factors = self.identifier.identify(_stressed_vector())
        names = [f.name for f in factors]
        self.assertEqual(names[:2], ["High Stress Level", "Emotional Exhaustion"])
        self.assertIn("Work Overload", names)
        self.assertIn("Poor Sleep", names)
        by_name = {f.name: f for f in factors}
        self.assertIs(by_name["High Stress Level"].impact, ImpactTier.CRITICAL)
        self.assertIs(by_name["Emotional Exhaustion"].impact, ImpactTier.CRITICAL)
        self.assertIs(by_name["Work Overload"].impact, ImpactTier.HIGH)

    def test_sorted_by_impact(self):
        factors = self.identifier.identify(FeatureVector(values=(0.95,) * 42))
        ranks = [f.impact.rank for f in factors]
        self.assertEqual(ranks, sorted(ranks, reverse=True))

    def test_threshold_is_inclusive(self):
        factors = self.identifier.identify(_vector(stress_level=0.7))
        by_name = {f.name: f for f in factors}
        self.assertIn("High Stress Level", by_name)
        self.assertIs(by_name["High Stress Level"].impact, ImpactTier.HIGH)

    def test_quality_features_fire_on_low_values(self):
        factors = self.identifier.identify(_vector(ergonomics_score=0.2, chair_quality=0.2))
        self.assertIn("Poor Workstation Ergonomics", [f.name for f in factors])

    def test_missing_domains_are_skipped(self):
        vector = _vector(missing=[Domain.STRESS], stress_level=1.0)
        names = [f.name for f in self.identifier.identify(vector)]
        self.assertNotIn("High Stress Level", names)

    def test_healthy_vector_has_no_factors(self):
        healthy = {}
        for domain in Domain:
            for name in features_for(domain):
                healthy[name] = 0.0
        for name in ("ergonomics_score", "chair_quality", "monitor_quality", "lighting_quality",
                     "break_frequency", "autonomy", "social_support", "job_satisfaction",
                     "sleep_quality", "sleep_hours", "exercise_frequency", "activity_level",
                     "work_life_balance", "free_time", "disconnect_ability"):
            healthy[name] = 1.0
        self.assertEqual(self.identifier.identify(_vector(**healthy)), [])


class TestRecommendationGenerator(unittest.TestCase):

    def setUp(self):
        self.generator = RecommendationGenerator(load_config())

    @staticmethod
    def _factor(domain, impact=ImpactTier.HIGH, name="x"):
        return RiskFactor(name=name, domain=domain, severity=0.8, impact=impact, description="")

    def test_critical_tier_prepends_urgent_help(self):
        recs = self.generator.generate([self._factor(Domain.SLEEP)], RiskTier.CRITICAL)
        self.assertEqual(recs[0], URGENT_HELP)
        self.assertIs(recs[0].priority, Priority.URGENT)

    def test_no_urgent_help_below_critical(self):
        recs = self.generator.generate([self._factor(Domain.SLEEP)], RiskTier.HIGH)
        self.assertNotIn(URGENT_HELP, recs)

    def test_one_recommendation_per_domain(self):
        factors = [self._factor(Domain.STRESS, name="a"), self._factor(Domain.STRESS, name="b")]
        recs = self.generator.generate(factors, RiskTier.MODERATE)
        self.assertEqual(len(recs), 1)
        self.assertIs(recs[0].domain, Domain.STRESS)

    def test_sorted_by_priority_and_capped(self):
        factors = [self._factor(d) for d in Domain]
        recs = self.generator.generate(factors, RiskTier.CRITICAL)
        self.assertEqual(len(recs), 5)
        ranks = [r.priority.rank for r in recs]
        self.assertEqual(ranks, sorted(ranks))
        self.assertEqual(len({r.title for r in recs}), len(recs))

    def test_no_factors_no_recommendations(self):
        self.assertEqual(self.generator.generate([], RiskTier.LOW), [])


if __name__ == "__main__":
    unittest.main()
