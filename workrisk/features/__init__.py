"""
Features Module — Survey Answers to a Normalised Vector
========================================================
  - FeatureVector:     fixed 42-slot [0, 1] vector with per-feature polarity
  - FeatureExtractor:  deterministic answers -> vector mapping
  - questions:         one Enum + score table per categorical question
"""

from workrisk.features.schema import (
    FEATURES,
    FEATURE_COUNT,
    FEATURE_NAMES,
    FeatureSpec,
    FeatureVector,
    features_for,
)
from workrisk.features.extractor import FeatureExtractor

__all__ = [
    "FEATURES",
    "FEATURE_COUNT",
    "FEATURE_NAMES",
    "FeatureSpec",
    "FeatureVector",
    "FeatureExtractor",
    "features_for",
]
