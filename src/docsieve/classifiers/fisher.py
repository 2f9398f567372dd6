"""Fisher's method classifier."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from ..extractor import FeatureExtractor
from ..types import Category
from .base import DEFAULT_ASSUMED_PROB, DEFAULT_WEIGHT, Classifier

LOGGER = logging.getLogger(__name__)

DEFAULT_MINIMUM = 0.0


def inv_chi2(chi: float, df: int) -> float:
    """Upper-tail probability of a chi-square variable with even ``df``.

    Sums the Poisson series exp(-m) * m**i / i! for i < df / 2 with m = chi / 2.
    """

    m = chi / 2.0
    term = math.exp(-m)
    total = term
    for i in range(1, df // 2):
        term *= m / i
        total += term
    return min(total, 1.0)


class FisherClassifier(Classifier):
    """Combines normalised feature probabilities with Fisher's method.

    A category is chosen only when its score beats both the best score so far
    and the category's entry in ``minimums``.
    """

    name = "fisher"

    def __init__(
        self,
        extractor: FeatureExtractor | None = None,
        *,
        weight: float = DEFAULT_WEIGHT,
        assumed_prob: float = DEFAULT_ASSUMED_PROB,
    ) -> None:
        super().__init__(extractor, weight=weight, assumed_prob=assumed_prob)
        self.minimums: dict[Category, float] = {}

    def get_minimum(self, category: Category) -> float:
        return float(self.minimums.get(category, DEFAULT_MINIMUM))

    def normalized_feature_probability(self, feature: str, category: Category) -> float:
        """Share of ``category`` in the summed feature probability across categories."""

        probability = self.feature_probability(feature, category)
        if probability == 0:
            return 0.0
        frequency_sum = sum(self.feature_probability(feature, cat) for cat in self.categories())
        return probability / frequency_sum

    def fisher_prob(self, item: str, category: Category) -> float:
        features = self.get_features(item)
        product = 1.0
        for feature in features:
            product *= self.weighted_probability(
                feature, category, self.normalized_feature_probability
            )
        if product == 0.0:
            return 0.0
        score = -2.0 * math.log(product)
        return inv_chi2(score, len(features) * 2)

    def score(self, item: str, category: Category) -> float:
        return self.fisher_prob(item, category)

    def select(self, scores: Mapping[Category, float]) -> tuple[Category | None, bool]:
        best: Category | None = None
        best_score = 0.0
        adopted = False
        for category, value in scores.items():
            if value > self.get_minimum(category) and value > best_score:
                best = category
                best_score = value
                adopted = True
        if not adopted:
            LOGGER.debug("%s: no category cleared its minimum", self.name)
        return best, adopted


__all__ = ["FisherClassifier", "inv_chi2", "DEFAULT_MINIMUM"]
