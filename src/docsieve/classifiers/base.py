"""Counting model and decision policy shared by all classifiers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping

from ..extractor import FeatureExtractor, WordExtractor
from ..types import Category, Prediction, Sample

LOGGER = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1.0
DEFAULT_ASSUMED_PROB = 0.5
DEFAULT_THRESHOLD = 0.0

ProbabilityFunc = Callable[[str, Category], float]


class Classifier:
    """Incrementally trained feature/category counting model.

    Training only ever adds to the counts. Subclasses provide ``score`` and may
    override ``select`` to change how a winning category is picked.
    """

    name = "classifier"

    def __init__(
        self,
        extractor: FeatureExtractor | None = None,
        *,
        weight: float = DEFAULT_WEIGHT,
        assumed_prob: float = DEFAULT_ASSUMED_PROB,
    ) -> None:
        if weight <= 0:
            raise ValueError("weight must be greater than zero")
        if not 0.0 <= assumed_prob <= 1.0:
            raise ValueError("assumed_prob must be between 0 and 1")
        self.extractor: FeatureExtractor = extractor if extractor is not None else WordExtractor()
        self.weight = float(weight)
        self.assumed_prob = float(assumed_prob)
        self.thresholds: dict[Category, float] = {}
        self._feature_counts: dict[str, dict[Category, int]] = {}
        self._category_counts: dict[Category, int] = {}

    def train(self, item: str, category: Category) -> None:
        """Count every feature of ``item`` once against ``category``."""

        features = self.get_features(item)
        for feature in features:
            self._increment_feature(feature, category)
        self._increment_category(category)
        LOGGER.debug(
            "%s trained %d feature(s) for category %r", self.name, len(features), category
        )

    def train_many(self, samples: Iterable[Sample]) -> int:
        """Train on each sample in turn and return how many were consumed."""

        trained = 0
        for sample in samples:
            self.train(sample.text, sample.category)
            trained += 1
        return trained

    def get_features(self, item: str) -> set[str]:
        return self.extractor.extract(item)

    def feature_count(self, feature: str, category: Category) -> float:
        """Number of training documents in ``category`` that contained ``feature``."""

        if category not in self._category_counts:
            return 0.0
        return float(self._feature_counts.get(feature, {}).get(category, 0))

    def category_count(self, category: Category) -> float:
        return float(self._category_counts.get(category, 0))

    def total_count(self) -> float:
        return float(sum(self._category_counts.values()))

    def categories(self) -> tuple[Category, ...]:
        """Known categories in the order they were first trained."""

        return tuple(self._category_counts)

    def vocabulary_size(self) -> int:
        return len(self._feature_counts)

    def is_trained(self) -> bool:
        return bool(self._category_counts)

    def get_threshold(self, category: Category) -> float:
        return float(self.thresholds.get(category, DEFAULT_THRESHOLD))

    def feature_probability(self, feature: str, category: Category) -> float:
        """Pr(feature | category), or 0.0 for a category with no documents."""

        count = self.category_count(category)
        if count == 0:
            return 0.0
        return self.feature_count(feature, category) / count

    def weighted_probability(
        self,
        feature: str,
        category: Category,
        prf: ProbabilityFunc | None,
        weight: float | None = None,
        assumed_prob: float | None = None,
    ) -> float:
        """Blend ``prf(feature, category)`` with ``assumed_prob``.

        The assumed probability counts as ``weight`` observations; the basic
        probability counts as many observations as the feature has across all
        categories. An unseen feature therefore yields exactly ``assumed_prob``.
        """

        if prf is None or not callable(prf):
            raise ValueError("weighted_probability requires a basic probability function")
        if weight is None:
            weight = self.weight
        if assumed_prob is None:
            assumed_prob = self.assumed_prob

        basic = prf(feature, category)
        totals = sum(self.feature_count(feature, cat) for cat in self.categories())
        if totals == 0:
            return assumed_prob
        return ((weight * assumed_prob) + (totals * basic)) / (weight + totals)

    def score(self, item: str, category: Category) -> float:
        """Score of ``item`` for ``category``; higher means a better fit."""

        raise NotImplementedError

    def scores(self, item: str) -> dict[Category, float]:
        return {category: self.score(item, category) for category in self.categories()}

    def classify(self, item: str, default: Category | None = None) -> Category | None:
        """Return the best category for ``item`` or ``default`` when unsure."""

        return self.decide(self.scores(item), default)

    def predict(self, item: str, default: Category | None = None) -> Prediction:
        """Like ``classify`` but also report the per-category scores.

        Confidence is the winner's score, or 0.0 when no category won outright.
        """

        scores = self.scores(item)
        category, decided = self.select(scores)
        if not decided:
            return Prediction(category=default, confidence=0.0, scores=scores)
        confidence = float(scores.get(category, 0.0)) if category is not None else 0.0
        return Prediction(category=category, confidence=confidence, scores=scores)

    def decide(
        self, scores: Mapping[Category, float], default: Category | None = None
    ) -> Category | None:
        category, decided = self.select(scores)
        return category if decided else default

    def select(self, scores: Mapping[Category, float]) -> tuple[Category | None, bool]:
        """Pick the top scorer unless a competitor comes within its threshold.

        Returns ``(category, decided)``; ``decided`` is False when the caller's
        default should be used instead.
        """

        best: Category | None = None
        best_score = 0.0
        for category, value in scores.items():
            if value > best_score:
                best_score = value
                best = category

        if best is None:
            return None, True

        threshold = self.get_threshold(best)
        for category, value in scores.items():
            if category == best:
                continue
            if value * threshold > best_score:
                LOGGER.debug(
                    "%s: %r is within threshold %.3f of %r",
                    self.name,
                    category,
                    threshold,
                    best,
                )
                return None, False
        return best, True

    def _increment_feature(self, feature: str, category: Category) -> None:
        counts = self._feature_counts.setdefault(feature, {})
        counts[category] = counts.get(category, 0) + 1

    def _increment_category(self, category: Category) -> None:
        self._category_counts[category] = self._category_counts.get(category, 0) + 1


__all__ = [
    "Classifier",
    "ProbabilityFunc",
    "DEFAULT_WEIGHT",
    "DEFAULT_ASSUMED_PROB",
    "DEFAULT_THRESHOLD",
]
