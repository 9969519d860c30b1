"""
Temporal Module — Assessment Trends
====================================
Compares consecutive assessments from the stored history.
"""

from workrisk.temporal.trends import DomainTrend, TrendAnalysis, TrendDirection, analyze_trend

__all__ = ["DomainTrend", "TrendAnalysis", "TrendDirection", "analyze_trend"]
