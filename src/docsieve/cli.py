"""docsieve command-line interface."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from . import __version__
from .classifiers import ClassifierRegistry, build_registry, create_classifier
from .config import Config, ConfigError, load_config
from .corpus import CorpusError, load_corpus
from .evaluate import UNKNOWN, evaluate as run_evaluation
from .logging import configure_logging
from .types import ClassifierMode, Sample

app = typer.Typer(help="docsieve text classification utilities.")
LOGGER = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Stores shared CLI options."""

    config_path: Path | None


@app.callback()
def _docsieve(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "-c",
            "--config",
            help="Path to docsieve config (env DOCSIEVE_CONFIG or ~/.config/docsieve/config.yaml).",
        ),
    ] = None,
) -> None:
    """Capture global CLI options."""

    resolved = config.expanduser() if config else None
    ctx.obj = CLIState(config_path=resolved)


@app.command()
def train(
    ctx: typer.Context,
    corpus: Annotated[Path, typer.Argument(..., help="Labelled corpus (.tsv or .yaml).")],
) -> None:
    """Train on a corpus and summarise what the model learned."""

    config = _load_environment(_state(ctx))
    samples = _load_samples(corpus)
    registry = _train_registry(config, samples)
    active = registry.get_active()

    counts = Counter(str(sample.category) for sample in samples)
    typer.echo(f"→ docsieve {__version__}")
    typer.echo(f"Classifier: {active.name}")
    typer.echo(f"Documents: {len(samples)}")
    typer.echo(f"Vocabulary: {active.vocabulary_size()} feature(s)")
    typer.echo("Categories:")
    for category in active.categories():
        typer.echo(f"  - {category}: {counts[str(category)]}")


@app.command()
def classify(
    ctx: typer.Context,
    corpus: Annotated[Path, typer.Argument(..., help="Labelled corpus (.tsv or .yaml).")],
    text: Annotated[str, typer.Argument(..., help="Document to classify.")],
    default: Annotated[
        str | None,
        typer.Option(
            "-d",
            "--default",
            help="Category reported when no confident decision is possible.",
        ),
    ] = None,
) -> None:
    """Train on a corpus, then classify a single document."""

    config = _load_environment(_state(ctx))
    samples = _load_samples(corpus)
    registry = _train_registry(config, samples)
    fallback = default if default is not None else config.default_category

    predictions = registry.predict_all(text, fallback)
    modes = registry.modes()
    active = registry.get_active()
    decision = predictions[active.name]

    typer.echo(f"Classifier: {active.name}")
    typer.echo("Decision:")
    typer.echo(f"  category: {decision.category if decision.category is not None else 'none'}")
    typer.echo(f"  confidence: {decision.confidence:.3f}")
    typer.echo("Scores:")
    for category, score in decision.scores.items():
        typer.echo(f"  {category}: {score:.4f}")
    for name, prediction in predictions.items():
        if modes[name] is not ClassifierMode.SHADOW:
            continue
        category = prediction.category if prediction.category is not None else "none"
        typer.echo(f"Shadow {name}: {category} ({prediction.confidence:.3f})")


@app.command()
def evaluate(
    ctx: typer.Context,
    corpus: Annotated[Path, typer.Argument(..., help="Labelled corpus (.tsv or .yaml).")],
    holdout: Annotated[
        float,
        typer.Option("--holdout", help="Fraction of samples held back for testing."),
    ] = 0.2,
    seed: Annotated[
        int,
        typer.Option("--seed", help="Seed for the train/test shuffle."),
    ] = 0,
) -> None:
    """Estimate accuracy of the configured classifier on held-out samples."""

    config = _load_environment(_state(ctx))
    samples = _load_samples(corpus)
    default = config.default_category or UNKNOWN

    try:
        report = run_evaluation(
            lambda: create_classifier(config.classifier, config),
            samples,
            holdout=holdout,
            seed=seed,
            default=default,
        )
    except ValueError as exc:
        typer.secho(f"Evaluation failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    typer.echo(f"Classifier: {config.classifier}")
    typer.echo(f"Train/test: {report.train_size}/{report.test_size}")
    typer.echo(f"Accuracy: {report.accuracy:.3f}")
    typer.echo("Confusion (rows=expected, columns=predicted):")
    typer.echo("  " + "\t".join(report.labels))
    for label, row in report.rows():
        typer.echo(f"  {label}\t" + "\t".join(str(value) for value in row))


def _state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise RuntimeError("CLI state missing from context.")
    return state


def _load_environment(state: CLIState) -> Config:
    try:
        config = load_config(state.config_path)
        configure_logging(config.logging)
    except ConfigError as exc:
        _config_failure(exc)
    return config


def _config_failure(exc: ConfigError) -> NoReturn:
    typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(2) from exc


def _load_samples(path: Path) -> list[Sample]:
    try:
        samples = load_corpus(path)
    except CorpusError as exc:
        typer.secho(f"Corpus error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc
    if not samples:
        typer.secho(f"Corpus is empty: {path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return samples


def _train_registry(config: Config, samples: list[Sample]) -> ClassifierRegistry:
    registry = build_registry(config)
    for sample in samples:
        registry.train_all(sample.text, sample.category)
    LOGGER.debug("Trained %d classifier(s) on %d sample(s)", len(registry.modes()), len(samples))
    return registry


def main() -> None:  # pragma: no cover - delegated to Typer
    app()


__all__ = ["app", "main"]
