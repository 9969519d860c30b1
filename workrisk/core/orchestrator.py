"""
Scoring Orchestrator — one entry point for the presentation layer
==================================================================
Pulls the latest answers, runs the pipeline and hands back an
``AssessmentOutcome``:

    AnswerSource -> FeatureExtractor -> DomainScoreAggregator  (system of record)
                                     -> NeuralRiskClassifier   (confirmatory, complete vectors only)
                                     -> RiskFactorIdentifier -> RecommendationGenerator
                 -> ResultSink

Key design principles:

1. **At most one recomputation per user at a time.**  The in-flight
   ``Future`` registry is the only per-user synchronisation: a second
   caller for the same user joins the owner's future instead of starting
   its own run.  The owner updates the cache before resolving the future,
   so a caller arriving just after a run finished sees a fresh result.

2. **A result beats no result.**  Missing surveys give a partial
   assessment; a missing classifier only drops the neural opinion; a
   failed save is logged and the fresh result is still returned.  When
   nothing can be computed, a stale cached assessment is served.

3. **No exception crosses this boundary.**  Adapter failures of any type
   are logged and mapped; callers see ``available``, ``partial`` or
   ``unavailable`` with a reason.

The in-memory cache holds at most ``orchestrator.max_cached_users``
assessments (least recently used are evicted); the result sink remains
the durable copy.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from workrisk.classifier.classifier import NeuralRiskClassifier
from workrisk.core.exceptions import ClassifierNotReadyError, MissingInputError, WorkriskError
from workrisk.core.models import AssessmentOutcome, Domain, OutcomeStatus, OverallAssessment
from workrisk.features.extractor import FeatureExtractor
from workrisk.scoring.aggregator import DomainScoreAggregator
from workrisk.scoring.recommendations import RecommendationGenerator
from workrisk.scoring.risk_factors import RiskFactorIdentifier
from workrisk.storage.answer_source import AnswerSource
from workrisk.storage.assessment_store import ResultSink
from workrisk.temporal.trends import DEFAULT_CHANGE_THRESHOLD, DEFAULT_REMINDER_DAYS, analyze_trend
from workrisk.utils.helpers import load_config, setup_logging

logger = setup_logging()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScoringOrchestrator:
    """Compute, cache and serve assessments per user."""

    def __init__(
        self,
        answer_source: AnswerSource,
        result_sink: ResultSink,
        classifier: Optional[NeuralRiskClassifier] = None,
        config: Optional[dict] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if config is None:
            config = load_config()
        self.config = config
        self.answer_source = answer_source
        self.result_sink = result_sink
        self.classifier = classifier
        self._clock = clock or _utcnow

        self.extractor = FeatureExtractor(config)
        self.aggregator = DomainScoreAggregator(config)
        self.identifier = RiskFactorIdentifier()
        self.generator = RecommendationGenerator(config)

        orch_cfg = config.get("orchestrator", {})
        self.refresh_interval = timedelta(seconds=orch_cfg.get("refresh_interval_seconds", 300))
        self.history_days = int(orch_cfg.get("history_days", 30))
        self.max_workers = int(orch_cfg.get("max_workers", 4))
        self.max_cached_users = max(1, int(orch_cfg.get("max_cached_users", 1024)))
        trend_cfg = config.get("trends", {})
        self.change_threshold = int(trend_cfg.get("change_threshold", DEFAULT_CHANGE_THRESHOLD))
        self.reminder_days = int(trend_cfg.get("reminder_after_days", DEFAULT_REMINDER_DAYS))

        self._registry_lock = threading.Lock()
        self._in_flight: dict[str, Future] = {}
        self._cache: OrderedDict[str, OverallAssessment] = OrderedDict()
        self._executor: Optional[ThreadPoolExecutor] = None

        # Number of full pipeline runs; read by tests and the CLI summary.
        self.computations = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute_or_refresh(self, user_id: str, force: bool = False) -> AssessmentOutcome:
        """Serve the cached assessment if fresh, otherwise recompute.

        Blocks until a result is available.  Safe to call from many threads.
        """
        with self._registry_lock:
            future = self._in_flight.get(user_id)
            owner = future is None
            if owner:
                future = Future()
                self._in_flight[user_id] = future

        if not owner:
            logger.info("Joining in-flight assessment for %s", user_id)
            return future.result()

        try:
            try:
                outcome = self._refresh(user_id, force)
            except Exception as e:
                logger.exception("Assessment for %s failed", user_id)
                outcome = self._unavailable(user_id, f"Assessment failed: {e}",
                                            self._cached(user_id))
            future.set_result(outcome)
            return outcome
        except BaseException as e:
            future.set_exception(e)
            raise
        finally:
            with self._registry_lock:
                self._in_flight.pop(user_id, None)

    def recompute(self, user_id: str) -> AssessmentOutcome:
        """Always recompute (still coalesced with an in-flight run)."""
        return self.compute_or_refresh(user_id, force=True)

    def submit(self, user_id: str, force: bool = False) -> Future:
        """Run ``compute_or_refresh`` on the background pool."""
        with self._registry_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="workrisk"
                )
            executor = self._executor
        return executor.submit(self.compute_or_refresh, user_id, force)

    def close(self) -> None:
        with self._registry_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def get_cached_assessment(self, user_id: str) -> Optional[OverallAssessment]:
        """Latest known assessment: in-memory first, then the result sink."""
        cached = self._cached(user_id)
        if cached is not None:
            return cached
        try:
            loaded = self.result_sink.load(user_id)
        except Exception as e:
            logger.warning("Could not load cached assessment for %s: %s", user_id, e)
            return None
        if loaded is not None:
            self._remember(user_id, loaded)
        return loaded

    @staticmethod
    def get_risk_factors(assessment: OverallAssessment) -> list:
        return list(assessment.risk_factors)

    @staticmethod
    def get_recommendations(assessment: OverallAssessment) -> list:
        return list(assessment.recommendations)

    def get_history(self, user_id: str, days: Optional[int] = None) -> list:
        """Stored assessments of the last *days*, oldest first ([] on failure)."""
        days = self.history_days if days is None else days
        try:
            return self.result_sink.history(user_id, days, now=self._clock())
        except Exception as e:
            logger.warning("Could not read history for %s: %s", user_id, e)
            return []

    def get_trend(self, user_id: str, days: Optional[int] = None):
        """Compare the two most recent assessments; None if there are none."""
        history = self.get_history(user_id, days)
        if not history:
            current = self.get_cached_assessment(user_id)
            if current is None:
                return None
            history = [current]
        previous = history[-2] if len(history) >= 2 else None
        return analyze_trend(
            history[-1], previous,
            change_threshold=self.change_threshold,
            reminder_days=self.reminder_days,
        )

    def get_completeness(self, user_id: str) -> dict:
        """Which surveys the user has completed so far."""
        try:
            answered = self.answer_source.get_all_latest(user_id)
        except Exception as e:
            logger.warning("Answer source unavailable for %s: %s", user_id, e)
            answered = {}
        missing = [d for d in Domain if d not in answered]
        total = len(Domain)
        return {
            "completed": total - len(missing),
            "total": total,
            "percent": round(100.0 * (total - len(missing)) / total, 1),
            "missing": [d.value for d in missing],
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _cached(self, user_id: str) -> Optional[OverallAssessment]:
        with self._registry_lock:
            assessment = self._cache.get(user_id)
            if assessment is not None:
                self._cache.move_to_end(user_id)
            return assessment

    def _remember(self, user_id: str, assessment: OverallAssessment) -> None:
        with self._registry_lock:
            self._cache[user_id] = assessment
            self._cache.move_to_end(user_id)
            while len(self._cache) > self.max_cached_users:
                self._cache.popitem(last=False)

    def _refresh(self, user_id: str, force: bool) -> AssessmentOutcome:
        cached = self.get_cached_assessment(user_id)
        if not force and cached is not None and self._is_fresh(cached):
            logger.info("Serving cached assessment for %s (%s)", user_id, cached.created_at.isoformat())
            return self._outcome(cached, reason="cached")
        return self._compute(user_id, fallback=cached)

    def _is_fresh(self, assessment: OverallAssessment) -> bool:
        return self._clock() - assessment.created_at < self.refresh_interval

    def _compute(self, user_id: str, fallback: Optional[OverallAssessment]) -> AssessmentOutcome:
        logger.info("Recomputing assessment for %s", user_id)

        try:
            answers = self.answer_source.get_all_latest(user_id)
        except Exception as e:
            logger.warning("Answer source unavailable for %s: %s", user_id, e)
            return self._unavailable(user_id, f"Answer source unavailable: {e}", fallback)

        try:
            vector = self.extractor.extract(answers)
            aggregation = self.aggregator.aggregate(vector)
        except MissingInputError as e:
            logger.info("No assessment for %s: %s", user_id, e)
            return self._unavailable(user_id, "No surveys completed yet", fallback,
                                     missing=e.missing_domains)
        except WorkriskError as e:
            logger.warning("Answers for %s could not be scored: %s", user_id, e)
            return self._unavailable(user_id, f"Invalid answers: {e}", fallback)

        neural = None
        if self.classifier is not None and vector.is_complete:
            try:
                neural = self.classifier.predict(vector)
            except ClassifierNotReadyError as e:
                logger.warning("Neural classifier skipped: %s", e)
            except Exception as e:
                logger.warning("Neural classifier failed for %s: %s", user_id, e)

        factors = self.identifier.identify(vector)
        recommendations = self.generator.generate(factors, aggregation.tier)

        assessment = OverallAssessment(
            user_id=user_id,
            score=aggregation.score,
            tier=aggregation.tier,
            domain_scores=aggregation.domain_scores,
            risk_factors=tuple(factors),
            recommendations=tuple(recommendations),
            created_at=self._clock(),
            missing_domains=vector.missing_domains,
            effective_weights=aggregation.effective_weights,
            top_concerns=aggregation.top_concerns,
            neural=neural,
            features=vector.to_dict(),
        )
        self._remember(user_id, assessment)
        self.computations += 1

        try:
            self.result_sink.save(user_id, assessment)
        except Exception as e:
            logger.warning("Assessment for %s not persisted: %s", user_id, e)

        logger.info("Assessment for %s: %d (%s), %d factor(s), %d missing domain(s)",
                    user_id, assessment.score, assessment.tier.value,
                    len(factors), len(vector.missing_domains))
        return self._outcome(assessment)

    @staticmethod
    def _outcome(assessment: OverallAssessment, reason: str = "") -> AssessmentOutcome:
        if assessment.is_partial:
            return AssessmentOutcome(
                status=OutcomeStatus.PARTIAL,
                assessment=assessment,
                missing_domains=assessment.missing_domains,
                reason=reason or "Some surveys are not completed yet",
            )
        return AssessmentOutcome(status=OutcomeStatus.AVAILABLE, assessment=assessment, reason=reason)

    @classmethod
    def _unavailable(cls, user_id: str, reason: str, fallback: Optional[OverallAssessment],
                     missing: tuple = ()) -> AssessmentOutcome:
        if fallback is not None:
            logger.info("Serving stale assessment for %s from %s",
                        user_id, fallback.created_at.isoformat())
            return cls._outcome(fallback, reason=f"stale: {reason}")
        return AssessmentOutcome(
            status=OutcomeStatus.UNAVAILABLE,
            missing_domains=tuple(missing) or tuple(Domain),
            reason=reason,
        )
