"""
Classifier Weights — immutable, versioned parameter sets
=========================================================
A ``ClassifierWeights`` object is created by training, persisted by the
model store and loaded at start-up.  It is never mutated: retraining
produces a new object with a higher version that replaces the old one
wholesale inside ``NeuralRiskClassifier``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping

import torch

from workrisk.classifier.network import BurnoutRiskNetwork
from workrisk.core.exceptions import ValidationError


def _frozen_state(state_dict: Mapping[str, torch.Tensor]) -> Mapping[str, torch.Tensor]:
    return MappingProxyType({
        k: v.detach().to("cpu").clone() for k, v in state_dict.items()
    })


@dataclass(frozen=True, eq=False)
class ClassifierWeights:
    state_dict: Mapping[str, torch.Tensor]
    architecture: dict
    trained: bool = True
    version: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        object.__setattr__(self, "state_dict", _frozen_state(self.state_dict))
        object.__setattr__(self, "architecture", MappingProxyType(dict(self.architecture)))

    @classmethod
    def from_module(cls, module: BurnoutRiskNetwork, trained: bool = True,
                    version: int = 1) -> "ClassifierWeights":
        return cls(
            state_dict=module.state_dict(),
            architecture=module.architecture(),
            trained=trained,
            version=version,
        )

    def build_module(self) -> BurnoutRiskNetwork:
        """Fresh network in eval mode carrying these parameters."""
        arch = self.architecture
        module = BurnoutRiskNetwork(
            input_dim=arch["input_dim"],
            hidden_dims=arch["hidden_dims"],
            dropout=arch["dropout"],
            num_classes=arch["num_classes"],
        )
        try:
            module.load_state_dict(dict(self.state_dict))
        except RuntimeError as e:
            raise ValidationError(f"Weights do not match architecture: {e}") from e
        module.eval()
        return module

    # ------------------------------------------------------------------
    # Checkpoint format (plain types only, loadable with weights_only=True)
    # ------------------------------------------------------------------

    def to_checkpoint(self) -> dict:
        arch = dict(self.architecture)
        return {
            "state_dict": dict(self.state_dict),
            "architecture": {
                "input_dim": int(arch["input_dim"]),
                "hidden_dims": [int(h) for h in arch["hidden_dims"]],
                "dropout": [float(d) for d in arch["dropout"]],
                "num_classes": int(arch["num_classes"]),
            },
            "trained": bool(self.trained),
            "version": int(self.version),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_checkpoint(cls, checkpoint: dict) -> "ClassifierWeights":
        try:
            return cls(
                state_dict=checkpoint["state_dict"],
                architecture=checkpoint["architecture"],
                trained=bool(checkpoint.get("trained", True)),
                version=int(checkpoint.get("version", 1)),
                created_at=datetime.fromisoformat(checkpoint["created_at"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Malformed classifier checkpoint: {e}") from e

    def __eq__(self, other) -> bool:
        if not isinstance(other, ClassifierWeights):
            return NotImplemented
        if (self.trained, self.version, self.created_at) != (
            other.trained, other.version, other.created_at
        ):
            return False
        if dict(self.architecture) != dict(other.architecture):
            return False
        if self.state_dict.keys() != other.state_dict.keys():
            return False
        return all(torch.equal(self.state_dict[k], other.state_dict[k]) for k in self.state_dict)

    __hash__ = object.__hash__
