"""
Classifier Module — Neural Burnout Risk Classification
=======================================================
  - BurnoutRiskNetwork:   42 -> 128 -> 64 -> 32 -> 3 ReLU/dropout network
  - ClassifierWeights:    immutable, versioned trained parameters
  - NeuralRiskClassifier: atomically swappable inference wrapper
  - train_classifier / load_or_bootstrap: training and start-up paths
"""

from workrisk.classifier.network import (
    BurnoutRiskNetwork,
    build_network,
    classify_probabilities,
)
from workrisk.classifier.weights import ClassifierWeights
from workrisk.classifier.classifier import NeuralRiskClassifier
from workrisk.classifier.synthetic import generate_synthetic_dataset
from workrisk.classifier.trainer import load_or_bootstrap, train_classifier, train_on_synthetic

__all__ = [
    "BurnoutRiskNetwork",
    "build_network",
    "classify_probabilities",
    "ClassifierWeights",
    "NeuralRiskClassifier",
    "generate_synthetic_dataset",
    "load_or_bootstrap",
    "train_classifier",
    "train_on_synthetic",
]
