"""
Classifier Training
====================
Adam + cross-entropy over logits, mini-batches through a DataLoader,
80/20 train/validation split, and the parameters with the best
validation loss are kept.

``load_or_bootstrap`` is the start-up path: use the stored model if one
exists, otherwise train on synthetic clusters and persist the result.
"""

from __future__ import annotations

import copy
from typing import Optional

import numpy as np
import torch
import torch.nn as nn
import torch.optim as optim
from torch.utils.data import DataLoader, TensorDataset

from workrisk.classifier.network import build_network
from workrisk.classifier.synthetic import generate_synthetic_dataset
from workrisk.classifier.weights import ClassifierWeights
from workrisk.core.exceptions import PersistenceError
from workrisk.utils.helpers import load_config, setup_logging

logger = setup_logging()


def _run_epoch(model, loader, criterion, optimizer=None) -> tuple:
    training = optimizer is not None
    model.train(training)
    total_loss = 0.0
    correct = 0
    total = 0
    with torch.set_grad_enabled(training):
        for batch_x, batch_y in loader:
            if training:
                optimizer.zero_grad()
            output = model(batch_x)
            loss = criterion(output["logits"], batch_y)
            if training:
                loss.backward()
                optimizer.step()
            total_loss += loss.item() * len(batch_y)
            correct += (output["predicted_class"] == batch_y).sum().item()
            total += len(batch_y)
    return total_loss / max(total, 1), correct / max(total, 1)


def train_classifier(
    features: np.ndarray,
    labels: np.ndarray,
    config: Optional[dict] = None,
    epochs: Optional[int] = None,
    batch_size: Optional[int] = None,
    lr: Optional[float] = None,
    version: int = 1,
) -> tuple:
    """Train a fresh network.

    Parameters
    ----------
    features : ndarray (N, 42)
    labels : ndarray (N,)
        Class indices 0=Low, 1=Moderate, 2=High.
    config : dict, optional
        Full config; ``classifier.training`` supplies defaults.
    epochs, batch_size, lr : optional overrides.
    version : int
        Version stamped on the resulting weights.

    Returns
    -------
    tuple: (ClassifierWeights, history dict with per-epoch losses/accuracies)
    """
    if config is None:
        config = load_config()
    train_cfg = config.get("classifier", {}).get("training", {})
    epochs = int(epochs if epochs is not None else train_cfg.get("epochs", 100))
    batch_size = int(batch_size if batch_size is not None else train_cfg.get("batch_size", 16))
    lr = float(lr if lr is not None else train_cfg.get("learning_rate", 0.001))
    val_split = float(train_cfg.get("val_split", 0.2))
    torch.manual_seed(int(train_cfg.get("seed", 42)))

    x = torch.as_tensor(np.asarray(features, dtype=np.float32))
    y = torch.as_tensor(np.asarray(labels, dtype=np.int64))
    if len(x) != len(y) or len(x) == 0:
        raise ValueError("features and labels must be non-empty and the same length")

    split_idx = int(len(y) * (1.0 - val_split))
    train_loader = DataLoader(TensorDataset(x[:split_idx], y[:split_idx]),
                              batch_size=batch_size, shuffle=True)
    val_loader = None
    if split_idx < len(y):
        val_loader = DataLoader(TensorDataset(x[split_idx:], y[split_idx:]),
                                batch_size=batch_size)

    model = build_network(config)
    criterion = nn.CrossEntropyLoss()
    optimizer = optim.Adam(model.parameters(), lr=lr, betas=(0.9, 0.999))

    logger.info("Training risk classifier: %d samples, %d epochs, batch %d, lr %.4g",
                len(y), epochs, batch_size, lr)

    history = {"train_loss": [], "train_acc": [], "val_loss": [], "val_acc": []}
    best_loss = float("inf")
    best_state = copy.deepcopy(model.state_dict())

    for epoch in range(epochs):
        train_loss, train_acc = _run_epoch(model, train_loader, criterion, optimizer)
        if val_loader is not None:
            val_loss, val_acc = _run_epoch(model, val_loader, criterion)
        else:
            val_loss, val_acc = train_loss, train_acc

        history["train_loss"].append(train_loss)
        history["train_acc"].append(train_acc)
        history["val_loss"].append(val_loss)
        history["val_acc"].append(val_acc)

        if val_loss < best_loss:
            best_loss = val_loss
            best_state = copy.deepcopy(model.state_dict())

        if (epoch + 1) % 10 == 0 or epoch == 0 or epoch + 1 == epochs:
            logger.info(
                "Epoch %3d/%d | Train Loss: %.4f Acc: %.1f%% | Val Loss: %.4f Acc: %.1f%%",
                epoch + 1, epochs, train_loss, train_acc * 100, val_loss, val_acc * 100,
            )

    model.load_state_dict(best_state)
    model.eval()
    logger.info("Training complete (best val loss %.4f)", best_loss)
    return ClassifierWeights.from_module(model, trained=True, version=version), history


def train_on_synthetic(
    config: Optional[dict] = None,
    samples_per_class: Optional[int] = None,
    version: int = 1,
    **train_kwargs,
) -> tuple:
    """Bootstrap training on the synthetic clusters."""
    if config is None:
        config = load_config()
    x, y = generate_synthetic_dataset(config, samples_per_class=samples_per_class)
    return train_classifier(x, y, config=config, version=version, **train_kwargs)


def load_or_bootstrap(store, config: Optional[dict] = None, **train_kwargs) -> ClassifierWeights:
    """Stored trained weights if present, otherwise bootstrap and persist.

    *store* is anything with ``load_model`` / ``save_model``.
    """
    if config is None:
        config = load_config()

    existing = None
    try:
        existing = store.load_model()
    except PersistenceError as e:
        logger.warning("Stored classifier unreadable (%s); retraining", e)

    if existing is not None and existing.trained:
        logger.info("Loaded classifier weights version %d", existing.version)
        return existing

    version = existing.version + 1 if existing is not None else 1
    weights, _ = train_on_synthetic(config, version=version, **train_kwargs)
    try:
        store.save_model(weights)
    except PersistenceError as e:
        logger.warning("Could not persist bootstrapped classifier: %s", e)
    return weights
