"""Classifier implementations and infrastructure."""

from .base import Classifier
from .fisher import FisherClassifier, inv_chi2
from .naive_bayes import NaiveBayesClassifier
from .registry import ClassifierRegistry, build_registry, create_classifier

__all__ = [
    "Classifier",
    "ClassifierRegistry",
    "FisherClassifier",
    "NaiveBayesClassifier",
    "build_registry",
    "create_classifier",
    "inv_chi2",
]
