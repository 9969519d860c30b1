"""
Unit Tests for the Scoring Orchestrator
========================================
Tests cover:
  - Available / partial / unavailable outcomes
  - Freshness window, forced recomputation and stale fallback
  - Coalescing of concurrent requests for the same user
  - Persistence and classifier failures never reaching the caller
  - History, trends and survey completeness
"""

import sys
import tempfile
import threading
import time
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from workrisk.classifier.classifier import NeuralRiskClassifier
from workrisk.core.exceptions import ClassifierNotReadyError, PersistenceError, ValidationError
from workrisk.core.models import (
    AnswerRecord,
    ClassifierPrediction,
    Domain,
    OutcomeStatus,
    RiskTier,
)
from workrisk.core.orchestrator import ScoringOrchestrator
from workrisk.storage.answer_source import InMemoryAnswerSource
from workrisk.storage.assessment_store import AssessmentStore, ResultSink
from workrisk.temporal.trends import TrendDirection
from workrisk.utils.helpers import load_config

_T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

STRESSED = {
    Domain.STRESS: {"general_stress_level": 10, "emotional_exhaustion": "Siempre",
                    "fatigue": 4, "overwhelmed": 4},
    Domain.WORKLOAD: {"current_workload": "Excesiva", "time_pressure": "Muy alta"},
}


class FakeClock:

    def __init__(self, now=_T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class SlowSource(InMemoryAnswerSource):
    """Answer source that takes a while and counts reads."""

    def __init__(self, records=(), delay=0.3):
        super().__init__(records)
        self.delay = delay
        self.reads = 0
        self.fail = False

    def get_all_latest(self, user_id):
        self.reads += 1
        if self.fail:
            raise OSError("backend offline")
        time.sleep(self.delay)
        return super().get_all_latest(user_id)


class CorruptSource(InMemoryAnswerSource):
    """Answer source whose stored records cannot be read back."""

    def __init__(self, records=(), delay=0.0):
        super().__init__(records)
        self.delay = delay
        self.error = ValidationError("corrupt stored survey")

    def get_latest(self, user_id, domain):
        time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return super().get_latest(user_id, domain)


class CrashingSink(ResultSink):

    def save(self, user_id, assessment):
        raise RuntimeError("connection reset")

    def load(self, user_id):
        raise RuntimeError("connection reset")

    def history(self, user_id, range_days, now=None):
        raise RuntimeError("connection reset")


class BrokenSink(ResultSink):

    def save(self, user_id, assessment):
        raise PersistenceError("disk full")

    def load(self, user_id):
        raise PersistenceError("disk gone")

    def history(self, user_id, range_days, now=None):
        raise PersistenceError("disk gone")


def _records(user_id="u1", domains=tuple(Domain), overrides=None, completed_at=_T0):
    overrides = overrides or {}
    return [
        AnswerRecord(domain=d, user_id=user_id, answers=overrides.get(d, {}),
                     completed_at=completed_at)
        for d in domains
    ]


class OrchestratorTestCase(unittest.TestCase):

    def setUp(self):
        self.config = load_config()
        self.tmp = tempfile.TemporaryDirectory()
        self.store = AssessmentStore(str(Path(self.tmp.name) / "assessments.db"))
        self.clock = FakeClock()

    def tearDown(self):
        self.tmp.cleanup()

    def make(self, source, sink=None, classifier=None):
        return ScoringOrchestrator(
            source, sink or self.store, classifier=classifier,
            config=self.config, clock=self.clock,
        )


class TestOutcomes(OrchestratorTestCase):

    def test_complete_answers_available(self):
        source = InMemoryAnswerSource(_records(overrides=STRESSED))
        outcome = self.make(source).compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.AVAILABLE)
        self.assertEqual(outcome.missing_domains, ())
        assessment = outcome.assessment
        self.assertEqual(assessment.created_at, _T0)
        self.assertIn("High Stress Level", [f.name for f in assessment.risk_factors])
        self.assertIn("Manage Your Stress", [r.title for r in assessment.recommendations])
        self.assertEqual(self.store.count("u1"), 1)

    def test_partial_answers(self):
        source = InMemoryAnswerSource(
            _records(domains=(Domain.STRESS, Domain.WORKLOAD), overrides=STRESSED)
        )
        classifier = Mock(spec=NeuralRiskClassifier)
        outcome = self.make(source, classifier=classifier).compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.PARTIAL)
        self.assertIn(Domain.SLEEP, outcome.missing_domains)
        self.assertEqual(set(outcome.assessment.domain_scores), {Domain.STRESS, Domain.WORKLOAD})
        self.assertIsNone(outcome.assessment.neural)
        classifier.predict.assert_not_called()

    def test_nothing_answered(self):
        outcome = self.make(InMemoryAnswerSource()).compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.UNAVAILABLE)
        self.assertIsNone(outcome.assessment)
        self.assertEqual(set(outcome.missing_domains), set(Domain))
        self.assertTrue(outcome.reason)
        self.assertEqual(outcome.to_dict()["status"], "unavailable")

    def test_classifier_runs_on_complete_answers(self):
        classifier = Mock(spec=NeuralRiskClassifier)
        classifier.predict.return_value = ClassifierPrediction(0.1, 0.2, 0.7, RiskTier.CRITICAL, 3)
        source = InMemoryAnswerSource(_records(overrides=STRESSED))
        assessment = self.make(source, classifier=classifier).compute_or_refresh("u1").assessment
        classifier.predict.assert_called_once()
        self.assertIs(assessment.neural.tier, RiskTier.CRITICAL)
        self.assertEqual(assessment.tiers_agree, assessment.tier is RiskTier.CRITICAL)

    def test_classifier_not_ready_keeps_rule_based_result(self):
        classifier = Mock(spec=NeuralRiskClassifier)
        classifier.predict.side_effect = ClassifierNotReadyError("no weights")
        source = InMemoryAnswerSource(_records())
        with self.assertLogs("workrisk", level="WARNING"):
            outcome = self.make(source, classifier=classifier).compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.AVAILABLE)
        self.assertIsNone(outcome.assessment.neural)

    def test_persistence_failure_still_returns_result(self):
        source = InMemoryAnswerSource(_records())
        orchestrator = self.make(source, sink=BrokenSink())
        with self.assertLogs("workrisk", level="WARNING"):
            outcome = orchestrator.compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.AVAILABLE)
        self.assertIs(orchestrator.get_cached_assessment("u1"), outcome.assessment)
        self.assertEqual(orchestrator.get_history("u1"), [])

    def test_pipeline_bug_becomes_unavailable(self):
        orchestrator = self.make(InMemoryAnswerSource(_records()))
        orchestrator.aggregator = Mock()
        orchestrator.aggregator.aggregate.side_effect = RuntimeError("boom")
        with self.assertLogs("workrisk", level="ERROR"):
            outcome = orchestrator.compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.UNAVAILABLE)
        self.assertIn("boom", outcome.reason)


class TestFreshness(OrchestratorTestCase):

    def test_fresh_result_is_served_from_cache(self):
        orchestrator = self.make(InMemoryAnswerSource(_records()))
        first = orchestrator.compute_or_refresh("u1")
        self.clock.advance(seconds=120)
        second = orchestrator.compute_or_refresh("u1")
        self.assertIs(second.assessment, first.assessment)
        self.assertEqual(second.reason, "cached")
        self.assertEqual(orchestrator.computations, 1)

    def test_stale_result_is_recomputed(self):
        orchestrator = self.make(InMemoryAnswerSource(_records()))
        first = orchestrator.compute_or_refresh("u1")
        self.clock.advance(seconds=301)
        second = orchestrator.compute_or_refresh("u1")
        self.assertIsNot(second.assessment, first.assessment)
        self.assertEqual(orchestrator.computations, 2)

    def test_recompute_ignores_freshness(self):
        orchestrator = self.make(InMemoryAnswerSource(_records()))
        orchestrator.compute_or_refresh("u1")
        orchestrator.recompute("u1")
        self.assertEqual(orchestrator.computations, 2)
        self.assertEqual(self.store.count("u1"), 2)

    def test_cache_survives_restart(self):
        source = InMemoryAnswerSource(_records())
        first = self.make(source).compute_or_refresh("u1").assessment
        restarted = self.make(source)
        loaded = restarted.get_cached_assessment("u1")
        self.assertEqual((loaded.score, loaded.tier, loaded.created_at),
                         (first.score, first.tier, first.created_at))
        self.clock.advance(seconds=10)
        restarted.compute_or_refresh("u1")
        self.assertEqual(restarted.computations, 0)

    def test_stale_assessment_served_when_source_fails(self):
        source = SlowSource(_records(), delay=0)
        orchestrator = self.make(source)
        first = orchestrator.compute_or_refresh("u1")
        source.fail = True
        self.clock.advance(seconds=600)
        with self.assertLogs("workrisk", level="WARNING"):
            outcome = orchestrator.compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.AVAILABLE)
        self.assertIs(outcome.assessment, first.assessment)
        self.assertTrue(outcome.reason.startswith("stale"))

    def test_source_failure_without_cache_is_unavailable(self):
        source = SlowSource(_records(), delay=0)
        source.fail = True
        outcome = self.make(source).compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.UNAVAILABLE)
        self.assertIn("backend offline", outcome.reason)

    def test_corrupt_source_record_is_unavailable(self):
        with self.assertLogs("workrisk", level="WARNING"):
            outcome = self.make(CorruptSource(_records())).compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.UNAVAILABLE)
        self.assertIsNone(outcome.assessment)
        self.assertIn("corrupt stored survey", outcome.reason)

    def test_unexpected_source_error_serves_stale_assessment(self):
        source = CorruptSource(_records())
        source.error = None
        orchestrator = self.make(source)
        first = orchestrator.compute_or_refresh("u1")
        source.error = RuntimeError("driver crashed")
        self.clock.advance(seconds=600)
        outcome = orchestrator.compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.AVAILABLE)
        self.assertIs(outcome.assessment, first.assessment)
        self.assertIn("driver crashed", outcome.reason)

    def test_joined_callers_never_see_adapter_errors(self):
        source = CorruptSource(_records(), delay=0.3)
        orchestrator = self.make(source)
        results = [None, None]

        def request(slot):
            results[slot] = orchestrator.compute_or_refresh("u1")

        threads = [threading.Thread(target=request, args=(i,)) for i in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        self.assertTrue(all(r.status is OutcomeStatus.UNAVAILABLE for r in results))

    def test_unexpected_sink_errors_are_contained(self):
        source = InMemoryAnswerSource(_records())
        orchestrator = self.make(source, sink=CrashingSink())
        outcome = orchestrator.compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.AVAILABLE)
        self.assertEqual(orchestrator.get_history("u1"), [])

    def test_stale_partial_assessment_stays_partial(self):
        source = SlowSource(_records(domains=(Domain.STRESS, Domain.SLEEP)), delay=0)
        orchestrator = self.make(source)
        first = orchestrator.compute_or_refresh("u1")
        source.fail = True
        self.clock.advance(seconds=600)
        outcome = orchestrator.compute_or_refresh("u1")
        self.assertIs(outcome.status, OutcomeStatus.PARTIAL)
        self.assertIs(outcome.assessment, first.assessment)
        self.assertIn(Domain.VISUAL, outcome.missing_domains)
        self.assertTrue(outcome.reason.startswith("stale"))


class TestMemoryCache(OrchestratorTestCase):

    def test_cache_is_bounded(self):
        self.config = dict(self.config, orchestrator=dict(self.config["orchestrator"],
                                                          max_cached_users=2))
        users = ("u1", "u2", "u3")
        source = InMemoryAnswerSource([r for u in users for r in _records(u)])
        orchestrator = self.make(source)
        for user in users:
            orchestrator.compute_or_refresh(user)
        self.assertEqual(list(orchestrator._cache), ["u2", "u3"])

        # Evicted users are reloaded from the result sink, not recomputed.
        self.assertEqual(orchestrator.compute_or_refresh("u1").reason, "cached")
        self.assertEqual(orchestrator.computations, 3)
        self.assertEqual(list(orchestrator._cache), ["u3", "u1"])


class TestConcurrency(OrchestratorTestCase):

    def test_duplicate_requests_compute_once(self):
        source = SlowSource(_records(overrides=STRESSED), delay=0.3)
        orchestrator = self.make(source)
        results = [None, None]

        def request(slot):
            results[slot] = orchestrator.compute_or_refresh("u1")

        threads = [threading.Thread(target=request, args=(i,)) for i in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        self.assertEqual(source.reads, 1)
        self.assertEqual(orchestrator.computations, 1)
        self.assertIs(results[0].assessment, results[1].assessment)
        self.assertEqual(self.store.count("u1"), 1)

    def test_submit_returns_future(self):
        source = SlowSource(_records(), delay=0.1)
        with self.make(source) as orchestrator:
            futures = [orchestrator.submit("u1") for _ in range(3)]
            outcomes = [f.result(timeout=10) for f in futures]
        self.assertEqual(orchestrator.computations, 1)
        self.assertTrue(all(o.assessment is outcomes[0].assessment for o in outcomes))

    def test_different_users_compute_independently(self):
        source = SlowSource(_records("u1") + _records("u2"), delay=0.1)
        with self.make(source) as orchestrator:
            a = orchestrator.submit("u1")
            b = orchestrator.submit("u2")
            self.assertEqual(a.result(timeout=10).assessment.user_id, "u1")
            self.assertEqual(b.result(timeout=10).assessment.user_id, "u2")
        self.assertEqual(orchestrator.computations, 2)


class TestHistoryAndTrends(OrchestratorTestCase):

    def test_history_and_trend(self):
        source = InMemoryAnswerSource(_records())
        orchestrator = self.make(source)
        self.assertIsNone(orchestrator.get_trend("u1"))

        orchestrator.compute_or_refresh("u1")
        self.assertIs(orchestrator.get_trend("u1").overall, TrendDirection.NO_DATA)

        self.clock.advance(days=7)
        source.add_many(_records(overrides=STRESSED, completed_at=self.clock.now))
        orchestrator.compute_or_refresh("u1")

        history = orchestrator.get_history("u1")
        self.assertEqual(len(history), 2)
        self.assertLess(history[0].created_at, history[1].created_at)

        trend = orchestrator.get_trend("u1")
        self.assertEqual(trend.days_elapsed, 7)
        self.assertIs(trend.domain_trends[Domain.STRESS].direction, TrendDirection.WORSENING)

    def test_risk_factors_and_recommendations_accessors(self):
        orchestrator = self.make(InMemoryAnswerSource(_records(overrides=STRESSED)))
        assessment = orchestrator.compute_or_refresh("u1").assessment
        self.assertEqual(orchestrator.get_risk_factors(assessment), list(assessment.risk_factors))
        self.assertEqual(orchestrator.get_recommendations(assessment),
                         list(assessment.recommendations))

    def test_completeness(self):
        source = InMemoryAnswerSource(_records(domains=(Domain.STRESS, Domain.SLEEP, Domain.VISUAL)))
        report = self.make(source).get_completeness("u1")
        self.assertEqual(report["completed"], 3)
        self.assertEqual(report["total"], 9)
        self.assertEqual(report["percent"], 33.3)
        self.assertIn("workload", report["missing"])


if __name__ == "__main__":
    unittest.main()
