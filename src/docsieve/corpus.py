"""Loading labelled training corpora from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .types import Sample

LOGGER = logging.getLogger(__name__)

TSV_SUFFIXES = (".tsv", ".txt")
YAML_SUFFIXES = (".yaml", ".yml")


class CorpusError(ValueError):
    """Raised when a corpus file is missing or malformed."""


def load_corpus(path: Path | str) -> list[Sample]:
    """Read labelled samples from a TSV or YAML corpus file.

    TSV files hold one ``category<TAB>text`` pair per line; blank lines and
    ``#`` comments are skipped. YAML files map each category to a list of
    documents.
    """

    corpus_path = Path(path).expanduser()
    if not corpus_path.is_file():
        raise CorpusError(f"Corpus file not found: {corpus_path}")

    suffix = corpus_path.suffix.lower()
    if suffix in TSV_SUFFIXES:
        samples = _load_tsv(corpus_path)
    elif suffix in YAML_SUFFIXES:
        samples = _load_yaml(corpus_path)
    else:
        raise CorpusError(f"Unsupported corpus format '{suffix}' for {corpus_path}")

    LOGGER.info("Loaded %d sample(s) from %s", len(samples), corpus_path)
    return samples


def _load_tsv(path: Path) -> list[Sample]:
    samples: list[Sample] = []
    with path.open("r", encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            stripped = line.rstrip("\r\n")
            if not stripped.strip() or stripped.lstrip().startswith("#"):
                continue
            if "\t" not in stripped:
                raise CorpusError(f"{path}:{lineno}: expected 'category<TAB>text'")
            category, text = stripped.split("\t", 1)
            samples.append(Sample(text=text, category=_normalize_category(category, path, lineno)))
    return samples


def _load_yaml(path: Path) -> list[Sample]:
    with path.open("r", encoding="utf-8") as handle:
        raw: Any = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise CorpusError(f"{path}: corpus root must map categories to documents")

    samples: list[Sample] = []
    for category, documents in raw.items():
        name = _normalize_category(str(category), path, None)
        if documents is None:
            continue
        if not isinstance(documents, list):
            raise CorpusError(f"{path}: documents for '{name}' must be a list")
        for document in documents:
            samples.append(Sample(text=str(document), category=name))
    return samples


def _normalize_category(value: str, path: Path, lineno: int | None) -> str:
    normalized = value.strip()
    if not normalized:
        location = f"{path}:{lineno}" if lineno is not None else str(path)
        raise CorpusError(f"{location}: category cannot be empty")
    return normalized


__all__ = ["CorpusError", "load_corpus"]
