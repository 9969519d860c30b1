"""
Workplace Health Risk Engine
=============================
Turns structured workplace-health survey answers into an occupational
burnout risk assessment: normalised feature extraction, weighted domain
scoring, a feed-forward neural classifier, rule-based risk factors and
prioritised recommendations.
"""

__version__ = "1.0.0"
