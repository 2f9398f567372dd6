from __future__ import annotations

from pathlib import Path

import pytest

from docsieve.corpus import load_corpus
from docsieve.types import Sample


@pytest.fixture(scope="session")
def corpus_path() -> Path:
    path = Path(__file__).resolve().parents[1] / "fixtures" / "corpus.tsv"
    if not path.exists():
        pytest.skip("Corpus fixture missing")
    return path


@pytest.fixture(scope="session")
def samples(corpus_path: Path) -> list[Sample]:
    return load_corpus(corpus_path)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Automatically mark tests in this package as integration."""

    package_root = Path(__file__).resolve().parent
    integration_mark = pytest.mark.integration
    for item in items:
        try:
            path = Path(item.fspath).resolve()
        except OSError:
            continue
        if package_root in path.parents:
            item.add_marker(integration_mark)
