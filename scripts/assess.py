"""
CLI Assessment — score a respondent's survey answers
=====================================================

Examples::

    python scripts/generate_samples.py
    python scripts/assess.py --answers data/samples/high_risk_answers.json --user demo-high

    # Skip the neural classifier
    python scripts/assess.py --answers data/samples/partial_answers.json \
        --user demo-partial --no-classifier
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_PROJECT_ROOT))

from workrisk.utils.helpers import load_config, setup_logging

logger = setup_logging()


def main() -> None:
    parser = argparse.ArgumentParser(description="Workplace Burnout Risk — CLI")
    parser.add_argument("--answers", type=str, required=True,
                        help="JSON file with answer records")
    parser.add_argument("--user", type=str, default=None,
                        help="User id (defaults to the first record's user)")
    parser.add_argument("--config", type=str, default=None, help="Alternative config.yaml")
    parser.add_argument("--db", type=str, default=None, help="SQLite assessment store")
    parser.add_argument("--no-classifier", action="store_true",
                        help="Rule-based scoring only")
    parser.add_argument("--force", action="store_true",
                        help="Recompute even if a fresh assessment is stored")
    args = parser.parse_args()

    config = load_config(args.config)

    from workrisk.core.explainer import Explainer
    from workrisk.core.models import OutcomeStatus
    from workrisk.core.orchestrator import ScoringOrchestrator
    from workrisk.storage.answer_source import InMemoryAnswerSource
    from workrisk.storage.assessment_store import AssessmentStore

    source = InMemoryAnswerSource.from_json(args.answers)
    user_id = args.user
    if user_id is None:
        with open(args.answers, "r", encoding="utf-8") as f:
            data = json.load(f)
        records = data.get("records", []) if isinstance(data, dict) else data
        if not records:
            parser.error(f"No answer records in {args.answers}")
        user_id = records[0]["user_id"]

    db_path = args.db or str(_PROJECT_ROOT / config.get("storage", {}).get("db_path", "data/assessments.db"))
    sink = AssessmentStore(db_path)

    classifier = None
    if not args.no_classifier:
        from workrisk.classifier.classifier import NeuralRiskClassifier
        from workrisk.classifier.trainer import load_or_bootstrap
        from workrisk.storage.model_store import ModelStore

        checkpoint = config.get("classifier", {}).get("checkpoint", "models/risk_classifier.pt")
        logger.info("Loading risk classifier …")
        weights = load_or_bootstrap(ModelStore(str(_PROJECT_ROOT / checkpoint)), config)
        classifier = NeuralRiskClassifier(config, weights)

    with ScoringOrchestrator(source, sink, classifier=classifier, config=config) as orchestrator:
        outcome = orchestrator.compute_or_refresh(user_id, force=args.force)
        trend = orchestrator.get_trend(user_id)

    if outcome.status is OutcomeStatus.UNAVAILABLE:
        print(f"\n  Assessment unavailable: {outcome.reason}")
        sys.exit(1)

    assessment = outcome.assessment
    explanation = Explainer().explain(assessment)

    # --- Print results --------------------------------------------------
    print("\n" + "=" * 62)
    print("  WORKPLACE BURNOUT RISK ASSESSMENT")
    print("=" * 62)
    print(f"  User             : {assessment.user_id}")
    print(f"  Overall Risk     : {assessment.tier.display_name}  ({assessment.score}/100)")
    if assessment.neural is not None:
        agree = "agrees" if assessment.tiers_agree else "DIFFERS"
        print(f"  Neural Opinion   : {assessment.neural.tier.display_name}  ({agree})")
    print(f"  Status           : {outcome.status.value}"
          + (f"  ({outcome.reason})" if outcome.reason else ""))
    print("-" * 62)

    print("\n  Domains:")
    for line in explanation["domain_breakdown"]:
        print(f"    {line}")

    if explanation["factor_narratives"]:
        print("\n  Risk Factors:")
        for line in explanation["factor_narratives"]:
            print(f"    {line}")

    print("\n  Recommendations:")
    for rec in assessment.recommendations:
        print(f"    [{rec.priority.value.upper():>6s}] {rec.title}")
        for action in rec.actions:
            print(f"             - {action}")

    print(f"\n  Summary:\n    {explanation['overall_narrative']}")
    print(f"\n  Classifier:\n    {explanation['classifier_narrative']}")
    if explanation["missing_note"]:
        print(f"\n  Note:\n    {explanation['missing_note']}")
    if trend is not None:
        print("\n  Trend:")
        for insight in trend.insights:
            print(f"    - {insight}")

    print("\n  " + explanation["disclaimer"])
    print("=" * 62)

    # Save JSON
    out = _PROJECT_ROOT / "output" / "last_assessment.json"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(assessment.to_json(), encoding="utf-8")
    logger.info("JSON saved to %s", out)


if __name__ == "__main__":
    main()
