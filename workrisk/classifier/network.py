"""
Burnout Risk Network
=====================
A small feed-forward PyTorch classifier over the 42-feature vector.

Architecture:
  42 -> Linear(128) -> ReLU -> Dropout(0.3)
     -> Linear(64)  -> ReLU -> Dropout(0.3)
     -> Linear(32)  -> ReLU -> Dropout(0.2)
     -> Linear(3)   -> softmax {Low, Moderate, High}

Weights use Kaiming-normal (He) initialisation to suit the ReLU stack.
Dropout is only active in ``train()`` mode.

Label selection is NOT arg-max.  ``classify_probabilities`` applies
ordered overrides that lean toward flagging serious risk:

  prob_high >= 0.7          -> Critical
  prob_high >= 0.5          -> High
  prob_moderate >= 0.5      -> Moderate
  otherwise                 -> Low
"""

from __future__ import annotations

from typing import Optional, Sequence

import torch
import torch.nn as nn
import torch.nn.functional as F

from workrisk.core.models import RiskTier
from workrisk.features.schema import FEATURE_COUNT

# Output slots in fixed order.
CLASS_NAMES = ("low", "moderate", "high")

DEFAULT_THRESHOLDS = {
    "critical_high_prob": 0.7,
    "high_high_prob": 0.5,
    "moderate_moderate_prob": 0.5,
}


class BurnoutRiskNetwork(nn.Module):
    """Dense ReLU network with dropout.

    Parameters
    ----------
    input_dim : int
        Feature vector length (42).
    hidden_dims : sequence of int
        Hidden layer widths.
    dropout : sequence of float
        Drop rate after each hidden layer.
    num_classes : int
        Output classes (3 = Low / Moderate / High).
    """

    def __init__(
        self,
        input_dim: int = FEATURE_COUNT,
        hidden_dims: Sequence[int] = (128, 64, 32),
        dropout: Sequence[float] = (0.3, 0.3, 0.2),
        num_classes: int = 3,
    ):
        super().__init__()
        if len(hidden_dims) != len(dropout):
            raise ValueError("hidden_dims and dropout must have the same length")

        self.input_dim = input_dim
        self.hidden_dims = tuple(hidden_dims)
        self.dropout_rates = tuple(dropout)
        self.num_classes = num_classes

        layers = []
        prev = input_dim
        for width, rate in zip(self.hidden_dims, self.dropout_rates):
            layers += [nn.Linear(prev, width), nn.ReLU(), nn.Dropout(rate)]
            prev = width
        self.body = nn.Sequential(*layers)
        self.head = nn.Linear(prev, num_classes)

        self._init_weights()

    def _init_weights(self):
        for module in self.modules():
            if isinstance(module, nn.Linear):
                nn.init.kaiming_normal_(module.weight, nonlinearity="relu")
                nn.init.zeros_(module.bias)

    def forward(self, x: torch.Tensor) -> dict:
        """Forward pass.

        Returns
        -------
        dict with keys:
            logits          - (B, 3) raw logits (CrossEntropyLoss input)
            probabilities   - (B, 3) softmax probabilities
            predicted_class - (B,) arg-max index, for accuracy only
            confidence      - (B,) max probability
        """
        logits = self.head(self.body(x))
        probs = F.softmax(logits, dim=-1)
        confidence, predicted = probs.max(dim=-1)
        return {
            "logits": logits,
            "probabilities": probs,
            "predicted_class": predicted,
            "confidence": confidence,
        }

    def architecture(self) -> dict:
        return {
            "input_dim": self.input_dim,
            "hidden_dims": list(self.hidden_dims),
            "dropout": list(self.dropout_rates),
            "num_classes": self.num_classes,
        }


def build_network(config: Optional[dict] = None) -> BurnoutRiskNetwork:
    """Create an untrained network from the ``classifier`` config section."""
    cfg = (config or {}).get("classifier", {})
    return BurnoutRiskNetwork(
        input_dim=FEATURE_COUNT,
        hidden_dims=cfg.get("hidden_dims", (128, 64, 32)),
        dropout=cfg.get("dropout", (0.3, 0.3, 0.2)),
        num_classes=cfg.get("num_classes", 3),
    )


def classify_probabilities(
    prob_low: float,
    prob_moderate: float,
    prob_high: float,
    thresholds: Optional[dict] = None,
) -> RiskTier:
    """Ordered override rule; ``prob_low`` never decides the label."""
    t = {**DEFAULT_THRESHOLDS, **(thresholds or {})}
    if prob_high >= t["critical_high_prob"]:
        return RiskTier.CRITICAL
    if prob_high >= t["high_high_prob"]:
        return RiskTier.HIGH
    if prob_moderate >= t["moderate_moderate_prob"]:
        return RiskTier.MODERATE
    return RiskTier.LOW
