"""
Unit Tests for the Neural Risk Classifier
==========================================
Tests cover:
  - Network forward pass shapes and probabilities
  - Ordered override labelling (not arg-max)
  - Synthetic bootstrap data
  - Training, weight swap and checkpoint round trip
  - Not-ready errors
"""

import sys
import tempfile
import threading
import unittest
from pathlib import Path

import numpy as np
import torch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from workrisk.classifier.classifier import NeuralRiskClassifier
from workrisk.classifier.network import BurnoutRiskNetwork, classify_probabilities
from workrisk.classifier.synthetic import generate_synthetic_dataset
from workrisk.classifier.trainer import load_or_bootstrap, train_classifier, train_on_synthetic
from workrisk.classifier.weights import ClassifierWeights
from workrisk.core.exceptions import ClassifierNotReadyError, PersistenceError, ValidationError
from workrisk.core.models import RiskTier
from workrisk.features.schema import FEATURE_COUNT, FEATURE_INDEX, FeatureVector
from workrisk.storage.model_store import ModelStore
from workrisk.utils.helpers import load_config


class TestBurnoutRiskNetwork(unittest.TestCase):

    def setUp(self):
        self.model = BurnoutRiskNetwork()
        self.model.eval()

    def test_forward_shapes(self):
        output = self.model(torch.rand(4, FEATURE_COUNT))
        self.assertEqual(output["logits"].shape, (4, 3))
        self.assertEqual(output["probabilities"].shape, (4, 3))
        self.assertEqual(output["predicted_class"].shape, (4,))
        self.assertEqual(output["confidence"].shape, (4,))

    def test_probabilities_sum_to_one(self):
        output = self.model(torch.rand(5, FEATURE_COUNT))
        for s in output["probabilities"].sum(dim=-1):
            self.assertAlmostEqual(s.item(), 1.0, places=4)

    def test_mismatched_dropout_rejected(self):
        with self.assertRaises(ValueError):
            BurnoutRiskNetwork(hidden_dims=(16, 8), dropout=(0.1,))


class TestOverrideThresholds(unittest.TestCase):

    def test_high_probability_overrides(self):
        self.assertIs(classify_probabilities(0.1, 0.15, 0.75), RiskTier.CRITICAL)
        self.assertIs(classify_probabilities(0.2, 0.25, 0.55), RiskTier.HIGH)
        self.assertIs(classify_probabilities(0.2, 0.6, 0.2), RiskTier.MODERATE)
        self.assertIs(classify_probabilities(0.9, 0.05, 0.05), RiskTier.LOW)

    def test_not_argmax(self):
        # Moderate is the largest slot but High reaches its threshold first.
        self.assertIs(classify_probabilities(0.0, 0.5, 0.5), RiskTier.HIGH)
        # Nothing reaches a threshold: Low even though Moderate is the max.
        self.assertIs(classify_probabilities(0.3, 0.45, 0.25), RiskTier.LOW)

    def test_custom_thresholds(self):
        tier = classify_probabilities(0.2, 0.2, 0.6, {"critical_high_prob": 0.6})
        self.assertIs(tier, RiskTier.CRITICAL)


class TestSyntheticData(unittest.TestCase):

    def test_shapes_and_balance(self):
        x, y = generate_synthetic_dataset(load_config(), samples_per_class=20)
        self.assertEqual(x.shape, (60, FEATURE_COUNT))
        self.assertEqual(x.dtype, np.float32)
        self.assertEqual(np.bincount(y).tolist(), [20, 20, 20])
        self.assertTrue((x >= 0.0).all() and (x <= 1.0).all())

    def test_seeded(self):
        config = load_config()
        a, _ = generate_synthetic_dataset(config, samples_per_class=5, seed=7)
        b, _ = generate_synthetic_dataset(config, samples_per_class=5, seed=7)
        np.testing.assert_array_equal(a, b)

    def test_clusters_follow_ranges(self):
        config = load_config()
        x, y = generate_synthetic_dataset(config, samples_per_class=30)
        stress_idx = FEATURE_INDEX["stress_level"]
        self.assertTrue((x[y == 0, stress_idx] < 0.4).all())
        self.assertTrue((x[y == 2, stress_idx] >= 0.7).all())


class TestTrainingAndInference(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.config = load_config()
        cls.weights, cls.history = train_on_synthetic(
            cls.config, samples_per_class=40, epochs=15, batch_size=16
        )

    def test_history_recorded(self):
        self.assertEqual(len(self.history["train_loss"]), 15)
        self.assertEqual(len(self.history["val_acc"]), 15)

    def test_separates_clear_profiles(self):
        classifier = NeuralRiskClassifier(self.config, self.weights)
        x, y = generate_synthetic_dataset(self.config, samples_per_class=20, seed=123)
        low = classifier.predict_proba(FeatureVector(values=tuple(x[y == 0][0])))
        high = classifier.predict_proba(FeatureVector(values=tuple(x[y == 2][0])))
        self.assertGreater(low[0], low[2])
        self.assertGreater(high[2], high[0])

    def test_prediction_fields(self):
        classifier = NeuralRiskClassifier(self.config, self.weights)
        prediction = classifier.predict(FeatureVector.from_mapping({}))
        self.assertAlmostEqual(sum(prediction.probabilities.values()), 1.0, places=4)
        self.assertEqual(prediction.model_version, self.weights.version)
        self.assertIn(prediction.tier, list(RiskTier))

    def test_swap_returns_previous(self):
        classifier = NeuralRiskClassifier(self.config, self.weights)
        newer, _ = train_on_synthetic(self.config, samples_per_class=10, epochs=2, version=2)
        previous = classifier.swap(newer)
        self.assertIs(previous, self.weights)
        self.assertEqual(classifier.predict(FeatureVector.from_mapping({})).model_version, 2)

    def test_pinned_weights_ignore_swaps(self):
        classifier = NeuralRiskClassifier(self.config, self.weights)
        vector = FeatureVector.from_mapping({"stress_level": 0.9})
        before = classifier.predict(vector, weights=self.weights)
        newer, _ = train_on_synthetic(self.config, samples_per_class=10, epochs=2, version=3)
        classifier.swap(newer)
        after = classifier.predict(vector, weights=self.weights)
        self.assertEqual(before, after)

    def test_concurrent_predictions_during_swap(self):
        classifier = NeuralRiskClassifier(self.config, self.weights)
        newer, _ = train_on_synthetic(self.config, samples_per_class=10, epochs=2, version=4)
        versions = []
        errors = []

        def predict_many():
            try:
                for _ in range(20):
                    versions.append(classifier.predict(FeatureVector.from_mapping({})).model_version)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=predict_many) for _ in range(4)]
        for t in threads:
            t.start()
        classifier.swap(newer)
        for t in threads:
            t.join(timeout=30)

        self.assertEqual(errors, [])
        self.assertTrue(set(versions) <= {self.weights.version, 4})

    def test_train_validates_input(self):
        with self.assertRaises(ValueError):
            train_classifier(np.zeros((3, FEATURE_COUNT)), np.zeros(2), self.config, epochs=1)


class TestNotReady(unittest.TestCase):

    def test_no_weights(self):
        classifier = NeuralRiskClassifier(load_config())
        self.assertFalse(classifier.is_ready)
        with self.assertRaises(ClassifierNotReadyError):
            classifier.predict(FeatureVector.from_mapping({}))

    def test_untrained_weights(self):
        weights = ClassifierWeights.from_module(BurnoutRiskNetwork(), trained=False)
        classifier = NeuralRiskClassifier(load_config(), weights)
        self.assertFalse(classifier.is_ready)
        with self.assertRaises(ClassifierNotReadyError):
            classifier.predict(FeatureVector.from_mapping({}))


class TestWeightsPersistence(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "models" / "classifier.pt"

    def tearDown(self):
        self.tmp.cleanup()

    def test_save_load_round_trip(self):
        weights = ClassifierWeights.from_module(BurnoutRiskNetwork(), version=5)
        store = ModelStore(str(self.path))
        self.assertFalse(store.model_exists())
        self.assertIsNone(store.load_model())
        store.save_model(weights)
        self.assertTrue(store.model_exists())
        self.assertEqual(store.load_model(), weights)

    def test_weights_are_immutable_copies(self):
        module = BurnoutRiskNetwork()
        weights = ClassifierWeights.from_module(module)
        with torch.no_grad():
            module.head.bias.fill_(3.0)
        self.assertFalse(torch.equal(weights.state_dict["head.bias"], module.head.bias))
        with self.assertRaises(TypeError):
            weights.state_dict["head.bias"] = torch.zeros(3)

    def test_architecture_mismatch(self):
        weights = ClassifierWeights.from_module(BurnoutRiskNetwork(hidden_dims=(8,), dropout=(0.1,)))
        arch = dict(weights.architecture)
        arch["hidden_dims"] = [16]
        broken = ClassifierWeights(state_dict=weights.state_dict, architecture=arch)
        with self.assertRaises(ValidationError):
            broken.build_module()

    def test_corrupt_checkpoint(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_bytes(b"not a checkpoint")
        with self.assertRaises(PersistenceError):
            ModelStore(str(self.path)).load_model()

    def test_bootstrap_trains_and_persists(self):
        store = ModelStore(str(self.path))
        weights = load_or_bootstrap(store, load_config(), samples_per_class=10, epochs=2)
        self.assertTrue(weights.trained)
        self.assertTrue(store.model_exists())
        again = load_or_bootstrap(store, load_config(), samples_per_class=10, epochs=2)
        self.assertEqual(again, weights)

    def test_bootstrap_replaces_corrupt_checkpoint(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_bytes(b"garbage")
        store = ModelStore(str(self.path))
        weights = load_or_bootstrap(store, load_config(), samples_per_class=10, epochs=2)
        self.assertTrue(weights.trained)
        self.assertEqual(store.load_model(), weights)


if __name__ == "__main__":
    unittest.main()
