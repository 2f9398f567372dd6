"""Hold-out evaluation of classifiers against a labelled corpus."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix

from .classifiers.base import Classifier
from .types import Sample

LOGGER = logging.getLogger(__name__)

UNKNOWN = "unknown"


@dataclass(frozen=True)
class EvaluationReport:
    """Outcome of a hold-out evaluation run."""

    accuracy: float
    labels: tuple[str, ...]
    confusion: np.ndarray
    train_size: int
    test_size: int

    def rows(self) -> list[tuple[str, list[int]]]:
        return [(label, [int(v) for v in row]) for label, row in zip(self.labels, self.confusion)]


def split_samples(
    samples: Sequence[Sample],
    *,
    holdout: float = 0.2,
    seed: int | None = 0,
) -> tuple[list[Sample], list[Sample]]:
    """Shuffle ``samples`` and split off ``holdout`` of them for testing."""

    if not 0.0 < holdout < 1.0:
        raise ValueError("holdout must be between 0 and 1 (exclusive)")
    rng = np.random.default_rng(seed)
    order = rng.permutation(len(samples))
    test_size = int(round(len(samples) * holdout))
    test = [samples[int(i)] for i in order[:test_size]]
    train = [samples[int(i)] for i in order[test_size:]]
    if not test or not train:
        raise ValueError(
            f"holdout {holdout} leaves an empty split for {len(samples)} sample(s)"
        )
    return train, test


def evaluate(
    factory: Callable[[], Classifier],
    samples: Sequence[Sample],
    *,
    holdout: float = 0.2,
    seed: int | None = 0,
    default: str = UNKNOWN,
) -> EvaluationReport:
    """Train a fresh classifier on part of ``samples`` and score the rest."""

    train, test = split_samples(samples, holdout=holdout, seed=seed)
    classifier = factory()
    classifier.train_many(train)

    expected = [str(sample.category) for sample in test]
    predicted = [_label(classifier.classify(sample.text, default), default) for sample in test]

    labels = sorted(set(expected) | set(predicted))
    accuracy = float(accuracy_score(expected, predicted))
    matrix = confusion_matrix(expected, predicted, labels=labels)
    LOGGER.info(
        "%s accuracy %.3f on %d held-out sample(s)", classifier.name, accuracy, len(test)
    )
    return EvaluationReport(
        accuracy=accuracy,
        labels=tuple(labels),
        confusion=matrix,
        train_size=len(train),
        test_size=len(test),
    )


def _label(category: object, default: str) -> str:
    if category is None:
        return default
    return str(category)


__all__ = ["EvaluationReport", "evaluate", "split_samples", "UNKNOWN"]
