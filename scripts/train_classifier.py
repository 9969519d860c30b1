"""
Train the Neural Risk Classifier
=================================
Bootstraps the feed-forward classifier on synthetic Low / Moderate / High
clusters and writes the checkpoint that ``scripts/assess.py`` loads.

Examples::

    python scripts/train_classifier.py
    python scripts/train_classifier.py --epochs 50 --samples-per-class 200
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_PROJECT_ROOT))

from workrisk.classifier.trainer import train_on_synthetic
from workrisk.storage.model_store import ModelStore
from workrisk.utils.helpers import load_config, setup_logging

logger = setup_logging()


def main() -> None:
    config = load_config()
    default_save = config.get("classifier", {}).get("checkpoint", "models/risk_classifier.pt")

    parser = argparse.ArgumentParser(description="Train the burnout risk classifier")
    parser.add_argument("--epochs", type=int, default=None, help="Training epochs")
    parser.add_argument("--batch-size", type=int, default=None, help="Batch size")
    parser.add_argument("--lr", type=float, default=None, help="Learning rate")
    parser.add_argument("--samples-per-class", type=int, default=None,
                        help="Synthetic samples per risk class")
    parser.add_argument("--save", type=str, default=default_save, help="Checkpoint path")
    args = parser.parse_args()

    store = ModelStore(str(_PROJECT_ROOT / args.save))
    previous = store.load_model() if store.model_exists() else None
    version = previous.version + 1 if previous is not None else 1

    weights, history = train_on_synthetic(
        config,
        samples_per_class=args.samples_per_class,
        version=version,
        epochs=args.epochs,
        batch_size=args.batch_size,
        lr=args.lr,
    )
    store.save_model(weights)

    print("\n" + "=" * 62)
    print("  RISK CLASSIFIER TRAINED")
    print("=" * 62)
    print(f"  Version        : {weights.version}")
    print(f"  Architecture   : {weights.architecture}")
    print(f"  Final val acc  : {history['val_acc'][-1]:.1%}")
    print(f"  Best val loss  : {min(history['val_loss']):.4f}")
    print(f"  Checkpoint     : {store.path}")
    print("=" * 62)


if __name__ == "__main__":
    main()
