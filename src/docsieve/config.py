"""Configuration loading and validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .classifiers.registry import CLASSIFIER_TYPES
from .extractor.words import DEFAULT_MAX_LENGTH, DEFAULT_MIN_LENGTH

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/docsieve/config.yaml")
DEFAULT_LOG_LEVEL = "info"
DEFAULT_CLASSIFIER = "fisher"
CLASSIFIER_KINDS = tuple(CLASSIFIER_TYPES)


class ConfigError(ValueError):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class LoggingConfig:
    """Logging-related configuration."""

    level: str = DEFAULT_LOG_LEVEL
    log_dir: Path | None = None


@dataclass(frozen=True)
class FeatureConfig:
    """Bounds for the default word extractor."""

    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH


@dataclass(frozen=True)
class Config:
    """Fully parsed configuration."""

    classifier: str = DEFAULT_CLASSIFIER
    shadow: tuple[str, ...] = ()
    default_category: str | None = None
    weight: float = 1.0
    assumed_prob: float = 0.5
    thresholds: dict[str, float] = field(default_factory=dict)
    minimums: dict[str, float] = field(default_factory=dict)
    features: FeatureConfig = field(default_factory=FeatureConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Path | str | None = None) -> Config:
    """Load and validate configuration from YAML.

    Without an explicit path or ``DOCSIEVE_CONFIG`` a missing default file
    simply yields the built-in defaults.
    """

    config_path, explicit = _resolve_config_path(path)
    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        LOGGER.debug("No config at %s; using defaults", config_path)
        return Config()

    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a mapping.")

    return parse_config(raw)


def parse_config(raw: dict[str, Any]) -> Config:
    classifier = _parse_kind(raw.get("classifier", DEFAULT_CLASSIFIER), "classifier")
    shadow = _parse_shadow(raw.get("shadow"), classifier)
    return Config(
        classifier=classifier,
        shadow=shadow,
        default_category=_parse_default_category(raw.get("default_category")),
        weight=_parse_weight(raw.get("weight", 1.0)),
        assumed_prob=_parse_unit_interval(raw.get("assumed_prob", 0.5), "assumed_prob"),
        thresholds=_parse_category_values(raw.get("thresholds"), "thresholds", unit=False),
        minimums=_parse_category_values(raw.get("minimums"), "minimums", unit=True),
        features=_parse_features(raw.get("features")),
        logging=_parse_logging(raw.get("logging")),
    )


def _resolve_config_path(explicit: Path | str | None) -> tuple[Path, bool]:
    if explicit:
        return Path(explicit).expanduser(), True
    env_path = os.environ.get("DOCSIEVE_CONFIG")
    if env_path:
        return Path(env_path).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def _parse_kind(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{field_name} must be a string.")
    normalized = value.strip().lower().replace("-", "_")
    if normalized not in CLASSIFIER_KINDS:
        choices = ", ".join(CLASSIFIER_KINDS)
        raise ConfigError(f"{field_name} must be one of: {choices} (got '{value}').")
    return normalized


def _parse_shadow(value: Any, active: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError("shadow must be a list of classifier names.")

    kinds: list[str] = []
    for idx, entry in enumerate(value, start=1):
        kind = _parse_kind(entry, f"shadow[{idx}]")
        if kind == active:
            LOGGER.warning("Classifier '%s' is already active; ignoring shadow entry.", kind)
            continue
        if kind not in kinds:
            kinds.append(kind)
    return tuple(kinds)


def _parse_default_category(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        raise ConfigError("default_category cannot be empty.")
    return text


def _parse_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{field_name} must be a number.")
    return float(value)


def _parse_weight(value: Any) -> float:
    weight = _parse_number(value, "weight")
    if weight <= 0:
        raise ConfigError("weight must be greater than zero.")
    return weight


def _parse_unit_interval(value: Any, field_name: str) -> float:
    number = _parse_number(value, field_name)
    if not 0.0 <= number <= 1.0:
        raise ConfigError(f"{field_name} must be between 0 and 1.")
    return number


def _parse_category_values(value: Any, field_name: str, *, unit: bool) -> dict[str, float]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{field_name} must be a mapping of category name to number.")

    parsed: dict[str, float] = {}
    for name, raw_value in value.items():
        entry_name = f"{field_name}.{name}"
        if unit:
            number = _parse_unit_interval(raw_value, entry_name)
        else:
            number = _parse_number(raw_value, entry_name)
            if number < 0:
                raise ConfigError(f"{entry_name} cannot be negative.")
        parsed[str(name)] = number
    return parsed


def _parse_features(value: Any) -> FeatureConfig:
    if value is None:
        return FeatureConfig()
    if not isinstance(value, dict):
        raise ConfigError("features must be a mapping.")
    min_length = value.get("min_length", DEFAULT_MIN_LENGTH)
    max_length = value.get("max_length", DEFAULT_MAX_LENGTH)
    for field_name, number in (("min_length", min_length), ("max_length", max_length)):
        if isinstance(number, bool) or not isinstance(number, int) or number < 1:
            raise ConfigError(f"features.{field_name} must be a positive integer.")
    if max_length < min_length:
        raise ConfigError("features.max_length cannot be smaller than features.min_length.")
    return FeatureConfig(min_length=min_length, max_length=max_length)


def _parse_logging(value: Any) -> LoggingConfig:
    if value is None:
        return LoggingConfig()
    if not isinstance(value, dict):
        raise ConfigError("logging must be a mapping.")
    level = str(value.get("level", DEFAULT_LOG_LEVEL)).lower()
    log_dir = value.get("log_dir")
    return LoggingConfig(
        level=level,
        log_dir=Path(str(log_dir)).expanduser() if log_dir else None,
    )


__all__ = [
    "Config",
    "ConfigError",
    "FeatureConfig",
    "LoggingConfig",
    "load_config",
    "parse_config",
    "CLASSIFIER_KINDS",
]
