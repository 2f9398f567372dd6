"""Core immutable data structures used throughout docsieve."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

Category = Hashable
"""Opaque category label. Strings and enums both work."""


class ClassifierMode(str, Enum):
    """Operational mode of a registered classifier."""

    ACTIVE = "active"
    SHADOW = "shadow"


@dataclass(frozen=True)
class Sample:
    """A single labelled training document."""

    text: str
    category: Category


@dataclass(frozen=True)
class Prediction:
    """Classification result."""

    category: Any
    confidence: float
    scores: Mapping[Category, float]


__all__ = [
    "Category",
    "ClassifierMode",
    "Sample",
    "Prediction",
]
