"""Naive Bayes classifier built on the shared counting model."""

from __future__ import annotations

from ..types import Category
from .base import Classifier


class NaiveBayesClassifier(Classifier):
    """Scores a document as Pr(document | category) * Pr(category).

    Features are treated as independent, so the document probability is the
    product of the weighted feature probabilities. Per-category ``thresholds``
    make the classifier fall back to the default when the winner does not
    dominate the runner-up by the configured factor.
    """

    name = "naive_bayes"

    def document_probability(self, item: str, category: Category) -> float:
        probability = 1.0
        for feature in self.get_features(item):
            probability *= self.weighted_probability(feature, category, self.feature_probability)
        return probability

    def prob(self, item: str, category: Category) -> float:
        total = self.total_count()
        if total == 0:
            return 0.0
        category_prob = self.category_count(category) / total
        return self.document_probability(item, category) * category_prob

    def score(self, item: str, category: Category) -> float:
        return self.prob(item, category)


__all__ = ["NaiveBayesClassifier"]
