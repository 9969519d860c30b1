"""
Synthetic Bootstrap Data
=========================
Generates labelled feature vectors so the classifier is usable before any
real outcomes exist.

Three balanced clusters (Low / Moderate / High).  Features are grouped
(stress symptoms, job demands, job resources, physical symptoms, quality
measures) and every feature of a group is drawn uniformly from that
group's range for the cluster.  Ranges are written in each feature's own
polarity, so the "low risk" cluster draws quality measures from the top
of the scale and symptoms from the bottom.

This is NOT a substitute for real labelled data.  The ranges encode
domain intuition only; retrain once real outcomes accumulate.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from workrisk.classifier.network import CLASS_NAMES
from workrisk.features.schema import FEATURE_COUNT, FEATURE_NAMES
from workrisk.utils.helpers import setup_logging

logger = setup_logging()


def _ranges_for(cluster: dict, groups: dict) -> np.ndarray:
    """(FEATURE_COUNT, 2) array of [low, high) per feature for one cluster."""
    default = cluster.get("default", [0.0, 1.0])
    ranges = np.tile(np.asarray(default, dtype=np.float64), (FEATURE_COUNT, 1))
    for group, names in groups.items():
        if group not in cluster:
            continue
        low, high = cluster[group]
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(f"Bad synthetic range for {group}: [{low}, {high})")
        for name in names:
            ranges[FEATURE_NAMES.index(name)] = (low, high)
    return ranges


def generate_synthetic_dataset(
    config: dict,
    samples_per_class: Optional[int] = None,
    seed: Optional[int] = None,
) -> tuple:
    """Draw a shuffled, balanced dataset.

    Parameters
    ----------
    config : dict
        Full config; uses the ``synthetic`` section.
    samples_per_class : int, optional
        Overrides ``synthetic.samples_per_class`` (default 50).
    seed : int, optional
        Overrides ``synthetic.seed``.

    Returns
    -------
    tuple: (features float32 (N, 42), labels int64 (N,))
    """
    syn = config["synthetic"]
    n = int(samples_per_class if samples_per_class is not None else syn.get("samples_per_class", 50))
    if n <= 0:
        raise ValueError("samples_per_class must be positive")
    rng = np.random.RandomState(syn.get("seed", 42) if seed is None else seed)

    groups = syn.get("groups", {})
    for names in groups.values():
        unknown = set(names) - set(FEATURE_NAMES)
        if unknown:
            raise ValueError(f"Unknown features in synthetic groups: {sorted(unknown)}")

    all_x = []
    all_y = []
    for label, cls in enumerate(CLASS_NAMES):
        ranges = _ranges_for(syn["clusters"][cls], groups)
        samples = rng.uniform(ranges[:, 0], ranges[:, 1], size=(n, FEATURE_COUNT))
        all_x.append(samples)
        all_y.append(np.full(n, label, dtype=np.int64))

    x = np.concatenate(all_x).astype(np.float32)
    y = np.concatenate(all_y)
    perm = rng.permutation(len(y))
    logger.info("Generated %d synthetic samples (%d per class)", len(y), n)
    return x[perm], y[perm]
