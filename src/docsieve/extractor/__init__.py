"""Document feature extraction utilities."""

from .words import CallableExtractor, FeatureExtractor, WordExtractor, get_words

__all__ = ["CallableExtractor", "FeatureExtractor", "WordExtractor", "get_words"]
