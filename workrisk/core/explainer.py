"""
Explainer — Human-Readable Reasoning for Risk Assessments
==========================================================
Transforms an ``OverallAssessment`` into plain-English explanations that
answer **why** the engine reached each conclusion.

The Explainer does NOT score anything: it reads the domain scores, risk
factors and classifier output already in the assessment and narrates
them.

Every explanation follows:
  1. What was observed (the evidence)
  2. What it suggests (the interpretation)
  3. How much to trust it (honest uncertainty)
"""

from __future__ import annotations

from workrisk.core.models import ImpactTier, OverallAssessment, Polarity, RiskTier

_TIER_CONTEXT = {
    RiskTier.LOW: (
        "Your answers describe a generally healthy working situation. "
        "No strong burnout indicators were detected."
    ),
    RiskTier.MODERATE: (
        "Some areas need attention. These are early signs of strain that "
        "are easiest to address now."
    ),
    RiskTier.HIGH: (
        "Several areas show significant strain. Acting on the "
        "recommendations soon is advised."
    ),
    RiskTier.CRITICAL: (
        "Your answers show serious, compounding risk. Please seek "
        "professional support promptly."
    ),
}


class Explainer:
    """Generate clear, honest explanations for assessments."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def explain(self, assessment: OverallAssessment) -> dict:
        """Build a full explanation package.

        Returns
        -------
        dict with keys:
            overall_narrative     - summary of the assessment
            domain_breakdown      - one line per scored domain, worst first
            factor_narratives     - one sentence per risk factor
            classifier_narrative  - neural classifier view, incl. disagreement
            missing_note          - which surveys were skipped (or None)
            limitations           - honest list of caveats
            disclaimer            - ethical/legal disclaimer
        """
        return {
            "overall_narrative": self._overall_narrative(assessment),
            "domain_breakdown": self._domain_breakdown(assessment),
            "factor_narratives": self._factor_narratives(assessment),
            "classifier_narrative": self._classifier_narrative(assessment),
            "missing_note": self._missing_note(assessment),
            "limitations": self._limitations(assessment),
            "disclaimer": self._disclaimer(),
        }

    # ------------------------------------------------------------------
    # Narratives
    # ------------------------------------------------------------------

    @staticmethod
    def _overall_narrative(a: OverallAssessment) -> str:
        n = len(a.domain_scores)
        text = (
            f"**Overall risk: {a.tier.display_name}** (score {a.score}/100, "
            f"based on {n} of 9 surveys).\n\n{_TIER_CONTEXT[a.tier]}"
        )
        if a.top_concerns:
            names = ", ".join(d.display_name for d in a.top_concerns)
            text += f"\n\nMain areas of concern: {names}."
        return text

    @staticmethod
    def _domain_breakdown(a: OverallAssessment) -> list:
        lines = []
        ranked = sorted(a.domain_scores.values(), key=lambda s: -s.risk_score)
        for s in ranked:
            weight = a.effective_weights.get(s.domain, s.weight)
            if s.polarity is Polarity.HIGHER_IS_BETTER:
                shown = f"quality {s.score}/100"
            else:
                shown = f"{s.score}/100"
            lines.append(
                f"**{s.domain.display_name}**: {shown}, {s.tier.display_name} "
                f"(weight {weight:.0%})"
            )
        return lines

    @staticmethod
    def _factor_narratives(a: OverallAssessment) -> list:
        narratives = []
        for f in a.risk_factors:
            marker = "!!" if f.impact is ImpactTier.CRITICAL else "-"
            narratives.append(
                f"{marker} **{f.name}** ({f.impact.value} impact, severity {f.severity:.0%}): "
                f"{f.description}"
            )
        return narratives

    @staticmethod
    def _classifier_narrative(a: OverallAssessment) -> str:
        if a.neural is None:
            if a.is_partial:
                return ("The neural classifier was not consulted because some "
                        "surveys are missing; it only runs on complete answers.")
            return "The neural classifier was not available for this assessment."

        p = a.neural
        dist = f"low {p.prob_low:.0%}, moderate {p.prob_moderate:.0%}, high {p.prob_high:.0%}"
        text = (f"The neural classifier (model v{p.model_version}) rates this as "
                f"**{p.tier.display_name}** ({dist}).")
        if a.tiers_agree:
            text += " This agrees with the rule-based assessment."
        else:
            text += (
                f" This differs from the rule-based {a.tier.display_name}. "
                "The rule-based result is the one shown above; the difference "
                "is reported so it can be reviewed, not resolved automatically."
            )
        return text

    @staticmethod
    def _missing_note(a: OverallAssessment):
        if not a.missing_domains:
            return None
        names = ", ".join(d.display_name for d in a.missing_domains)
        return (f"Not yet answered: {names}. The overall score was computed "
                "from the surveys available, with weights rescaled to match.")

    @staticmethod
    def _limitations(a: OverallAssessment) -> list:
        limits = []
        if a.is_partial:
            limits.append(
                f"{len(a.missing_domains)} survey(s) missing. Risks in those "
                "areas are not reflected in the score."
            )
        if a.neural is not None:
            limits.append(
                "The neural classifier was bootstrapped on synthetic data. Its "
                "output encodes domain intuition but has not been validated "
                "against real burnout outcomes."
            )
        limits.append(
            "Scoring weights and cut-points are expert estimates and have "
            "not been statistically validated."
        )
        limits.append(
            "Survey answers are a snapshot; repeated assessments over time "
            "are more informative."
        )
        return limits

    @staticmethod
    def _disclaimer() -> str:
        return (
            "**Disclaimer:** This assessment supports self-awareness and "
            "workplace prevention only. It is **not** a medical or clinical "
            "diagnosis. If you are struggling, please reach out to a "
            "qualified health professional."
        )
