"""Classifier registry utilities."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import TYPE_CHECKING

from ..extractor import FeatureExtractor, WordExtractor
from ..types import Category, ClassifierMode, Prediction
from .base import Classifier
from .fisher import FisherClassifier
from .naive_bayes import NaiveBayesClassifier

if TYPE_CHECKING:
    from ..config import Config

LOGGER = logging.getLogger(__name__)

CLASSIFIER_TYPES: dict[str, type[Classifier]] = {
    cls.name: cls for cls in (NaiveBayesClassifier, FisherClassifier)
}


class ClassifierRegistry:
    """Registry that tracks classifiers and their operational modes."""

    def __init__(self) -> None:
        self._entries: OrderedDict[str, tuple[Classifier, ClassifierMode]] = OrderedDict()

    def register(self, classifier: Classifier, mode: ClassifierMode) -> None:
        if classifier.name in self._entries:
            raise ValueError(f"Classifier '{classifier.name}' is already registered.")
        self._entries[classifier.name] = (classifier, mode)

    def get(self, name: str) -> Classifier:
        try:
            return self._entries[name][0]
        except KeyError as exc:
            raise KeyError(f"Classifier '{name}' is not registered.") from exc

    def get_active(self) -> Classifier:
        for classifier, mode in self._entries.values():
            if mode is ClassifierMode.ACTIVE:
                return classifier
        raise LookupError("No active classifier registered.")

    def entries(self) -> list[tuple[str, Classifier, ClassifierMode]]:
        return [(name, classifier, mode) for name, (classifier, mode) in self._entries.items()]

    def train_all(self, item: str, category: Category) -> None:
        for classifier, _mode in self._entries.values():
            classifier.train(item, category)

    def predict_all(self, item: str, default: Category | None = None) -> dict[str, Prediction]:
        predictions: dict[str, Prediction] = {}
        for name, (classifier, _mode) in self._entries.items():
            predictions[name] = classifier.predict(item, default)
        return predictions

    def modes(self) -> dict[str, ClassifierMode]:
        return {name: mode for name, (_classifier, mode) in self._entries.items()}


def create_classifier(
    kind: str,
    config: Config,
    extractor: FeatureExtractor | None = None,
) -> Classifier:
    """Instantiate a classifier of ``kind`` with settings from ``config``."""

    try:
        factory = CLASSIFIER_TYPES[kind]
    except KeyError as exc:
        raise ValueError(f"Unknown classifier kind '{kind}'.") from exc

    if extractor is None:
        extractor = WordExtractor(
            min_length=config.features.min_length,
            max_length=config.features.max_length,
        )
    classifier = factory(extractor, weight=config.weight, assumed_prob=config.assumed_prob)
    classifier.thresholds.update(config.thresholds)
    if isinstance(classifier, FisherClassifier):
        classifier.minimums.update(config.minimums)
    return classifier


def build_registry(config: Config, extractor: FeatureExtractor | None = None) -> ClassifierRegistry:
    """Register the configured active classifier followed by its shadows."""

    registry = ClassifierRegistry()
    registry.register(create_classifier(config.classifier, config, extractor), ClassifierMode.ACTIVE)
    for kind in config.shadow:
        registry.register(create_classifier(kind, config, extractor), ClassifierMode.SHADOW)
    LOGGER.debug("Registry built with %s", ", ".join(registry.modes()))
    return registry


__all__ = ["ClassifierRegistry", "CLASSIFIER_TYPES", "build_registry", "create_classifier"]
