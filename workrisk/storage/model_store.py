"""
Model Store — classifier checkpoint on disk
============================================
One ``torch.save`` file per store.  Writes go to a temporary file in the
same directory and are renamed into place, so a concurrent reader sees
either the old checkpoint or the new one, never a partial file.
"""

from __future__ import annotations

import os
import pickle
import tempfile
from pathlib import Path
from typing import Optional

import torch

from workrisk.classifier.weights import ClassifierWeights
from workrisk.core.exceptions import PersistenceError, ValidationError
from workrisk.utils.helpers import setup_logging

logger = setup_logging()

_DEFAULT_PATH = "models/risk_classifier.pt"


class ModelStore:

    def __init__(self, path: str = _DEFAULT_PATH):
        self.path = Path(path)

    def model_exists(self) -> bool:
        return self.path.is_file()

    def save_model(self, weights: ClassifierWeights) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
            os.close(fd)
            try:
                torch.save(weights.to_checkpoint(), tmp)
                os.replace(tmp, self.path)
            finally:
                if os.path.exists(tmp):
                    os.remove(tmp)
        except OSError as e:
            raise PersistenceError(f"Could not save classifier to {self.path}: {e}") from e
        logger.info("Classifier checkpoint saved: %s (version %d)", self.path, weights.version)

    def load_model(self) -> Optional[ClassifierWeights]:
        if not self.model_exists():
            return None
        try:
            checkpoint = torch.load(self.path, map_location="cpu", weights_only=True)
            return ClassifierWeights.from_checkpoint(checkpoint)
        except (OSError, RuntimeError, EOFError, ValueError, pickle.UnpicklingError, ValidationError) as e:
            raise PersistenceError(f"Could not load classifier from {self.path}: {e}") from e
