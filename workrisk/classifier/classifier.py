"""
Neural Risk Classifier
=======================
Confirmatory classification path next to the rule-based aggregator.

The classifier holds one ``(ClassifierWeights, module)`` pair and swaps
it atomically: a reader grabs the pair once and uses it for the whole
call, so it never sees half of an old model and half of a new one.
Modules are only used in eval mode under ``torch.no_grad()``.
"""

from __future__ import annotations

import threading
from typing import Optional

import torch

from workrisk.classifier.network import classify_probabilities
from workrisk.classifier.weights import ClassifierWeights
from workrisk.core.exceptions import ClassifierNotReadyError
from workrisk.core.models import ClassifierPrediction
from workrisk.features.schema import FeatureVector
from workrisk.utils.helpers import load_config, setup_logging

logger = setup_logging()


class NeuralRiskClassifier:
    """Inference wrapper around a swappable trained network."""

    def __init__(self, config: Optional[dict] = None,
                 weights: Optional[ClassifierWeights] = None):
        if config is None:
            config = load_config()
        self.config = config
        self.thresholds = config.get("classifier", {}).get("thresholds", {})
        self._swap_lock = threading.Lock()
        self._current = None  # (ClassifierWeights, BurnoutRiskNetwork)
        if weights is not None:
            self.swap(weights)

    # ------------------------------------------------------------------
    # Model lifecycle
    # ------------------------------------------------------------------

    @property
    def weights(self) -> Optional[ClassifierWeights]:
        current = self._current
        return current[0] if current else None

    @property
    def is_ready(self) -> bool:
        current = self._current
        return current is not None and current[0].trained

    def swap(self, weights: ClassifierWeights) -> Optional[ClassifierWeights]:
        """Install new weights; returns the ones they replaced."""
        module = weights.build_module()  # built before publishing
        with self._swap_lock:
            previous = self._current
            self._current = (weights, module)
        logger.info("Classifier weights installed (version=%d, trained=%s)",
                    weights.version, weights.trained)
        return previous[0] if previous else None

    # ------------------------------------------------------------------
    # Inference
    # ------------------------------------------------------------------

    def _resolve(self, weights: Optional[ClassifierWeights]):
        current = self._current
        if weights is None:
            if current is None:
                raise ClassifierNotReadyError("No classifier weights loaded")
            weights, module = current
        elif current is not None and current[0] is weights:
            module = current[1]
        else:
            module = weights.build_module()
        if not weights.trained:
            raise ClassifierNotReadyError(
                f"Classifier weights version {weights.version} are not trained"
            )
        return weights, module

    def predict_proba(self, vector: FeatureVector,
                      weights: Optional[ClassifierWeights] = None) -> tuple:
        """(prob_low, prob_moderate, prob_high) for one vector."""
        _, module = self._resolve(weights)
        return self._forward(module, vector)

    def predict(self, vector: FeatureVector,
                weights: Optional[ClassifierWeights] = None) -> ClassifierPrediction:
        """Probabilities plus the override-threshold label.

        Pass *weights* to pin a specific version; otherwise the currently
        installed weights are used.
        """
        weights, module = self._resolve(weights)
        p_low, p_mod, p_high = self._forward(module, vector)
        return ClassifierPrediction(
            prob_low=p_low,
            prob_moderate=p_mod,
            prob_high=p_high,
            tier=classify_probabilities(p_low, p_mod, p_high, self.thresholds),
            model_version=weights.version,
        )

    @staticmethod
    def _forward(module, vector: FeatureVector) -> tuple:
        x = torch.from_numpy(vector.to_array()).unsqueeze(0)
        with torch.no_grad():
            probs = module(x)["probabilities"][0].tolist()
        return float(probs[0]), float(probs[1]), float(probs[2])
