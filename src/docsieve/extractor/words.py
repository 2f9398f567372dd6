"""Word-level feature extraction from plain-text documents."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

DEFAULT_MIN_LENGTH = 3
DEFAULT_MAX_LENGTH = 19


@runtime_checkable
class FeatureExtractor(Protocol):
    """Maps a raw document to its set of features."""

    def extract(self, document: str) -> set[str]:
        """Return the distinct features found in ``document``."""


def get_words(document: str) -> set[str]:
    """Split on whitespace and keep lowercased words of 3 to 19 characters."""

    return {word.lower() for word in document.split() if 2 < len(word) < 20}


class WordExtractor:
    """Default extractor: lowercased whitespace-separated words within a length window."""

    def __init__(
        self,
        min_length: int = DEFAULT_MIN_LENGTH,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        if min_length < 1:
            raise ValueError("min_length must be at least 1")
        if max_length < min_length:
            raise ValueError("max_length cannot be smaller than min_length")
        self.min_length = min_length
        self.max_length = max_length

    def extract(self, document: str) -> set[str]:
        return {
            word.lower()
            for word in document.split()
            if self.min_length <= len(word) <= self.max_length
        }

    def __repr__(self) -> str:
        return f"WordExtractor(min_length={self.min_length}, max_length={self.max_length})"


class CallableExtractor:
    """Adapts a plain ``document -> features`` function to the extractor protocol."""

    def __init__(self, func: Callable[[str], set[str]]) -> None:
        if not callable(func):
            raise ValueError("feature extraction function must be callable")
        self._func = func

    def extract(self, document: str) -> set[str]:
        return set(self._func(document))


__all__ = [
    "FeatureExtractor",
    "WordExtractor",
    "CallableExtractor",
    "get_words",
    "DEFAULT_MIN_LENGTH",
    "DEFAULT_MAX_LENGTH",
]
