"""
Unit Tests for the Explainer
=============================
"""

import dataclasses
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from workrisk.core.explainer import Explainer
from workrisk.core.models import ClassifierPrediction, RiskTier

from test_storage import make_assessment


class TestExplainer(unittest.TestCase):

    def setUp(self):
        self.explainer = Explainer()

    def test_keys(self):
        result = self.explainer.explain(make_assessment())
        self.assertEqual(set(result), {
            "overall_narrative", "domain_breakdown", "factor_narratives",
            "classifier_narrative", "missing_note", "limitations", "disclaimer",
        })
        self.assertIn("Moderate Risk", result["overall_narrative"])
        self.assertIn("not** a medical", result["disclaimer"])

    def test_domain_breakdown_worst_first(self):
        lines = self.explainer.explain(make_assessment(stress=60))["domain_breakdown"]
        self.assertEqual(len(lines), 2)
        self.assertIn("Stress & Mental Health", lines[0])
        self.assertIn("quality 70/100", lines[1])

    def test_missing_note(self):
        result = self.explainer.explain(make_assessment())
        self.assertIn("Sleep", result["missing_note"])
        complete = dataclasses.replace(make_assessment(), missing_domains=())
        self.assertIsNone(self.explainer.explain(complete)["missing_note"])

    def test_classifier_agreement(self):
        text = self.explainer.explain(make_assessment())["classifier_narrative"]
        self.assertIn("agrees", text)

    def test_classifier_disagreement_is_reported(self):
        disagreeing = dataclasses.replace(
            make_assessment(),
            neural=ClassifierPrediction(0.05, 0.1, 0.85, RiskTier.CRITICAL, 2),
        )
        text = self.explainer.explain(disagreeing)["classifier_narrative"]
        self.assertIn("differs", text)
        self.assertIn("Critical Risk", text)

    def test_partial_without_classifier(self):
        text = self.explainer.explain(make_assessment(neural=False))["classifier_narrative"]
        self.assertIn("some surveys are missing", text)


if __name__ == "__main__":
    unittest.main()
