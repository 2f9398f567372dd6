from __future__ import annotations

from docsieve.classifiers.base import Classifier

SAMPLE_DOCUMENTS: tuple[tuple[str, str], ...] = (
    ("Nobody owns the water", "good"),
    ("the quick rabbit jumps fences", "good"),
    ("buy pharmaceuticals now", "bad"),
    ("make quick money at the online casino", "bad"),
    ("the quick brown fox jumps", "good"),
)


def sample_train(classifier: Classifier) -> Classifier:
    """Train ``classifier`` on the small good/bad corpus used across tests."""

    for text, category in SAMPLE_DOCUMENTS:
        classifier.train(text, category)
    return classifier
