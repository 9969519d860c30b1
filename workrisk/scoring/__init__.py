"""
Scoring Module — Rule-Based Assessment
=======================================
  - DomainScoreAggregator:  per-domain and overall 0-100 scores + tiers
  - RiskFactorIdentifier:   threshold rules -> ranked risk factors
  - RecommendationGenerator: risk factors -> prioritised action items
"""

from workrisk.scoring.aggregator import Aggregation, DomainScoreAggregator, TierTable
from workrisk.scoring.risk_factors import DEFAULT_RULES, RiskFactorIdentifier, RiskRule
from workrisk.scoring.recommendations import RecommendationGenerator

__all__ = [
    "Aggregation",
    "DomainScoreAggregator",
    "TierTable",
    "DEFAULT_RULES",
    "RiskFactorIdentifier",
    "RiskRule",
    "RecommendationGenerator",
]
