"""Configuration helpers for the plant library builder."""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from . import paths
from .plants import taxonomy_constants as tc
from .plants.classify_attributes import PropagationRule, Rule, build_propagation_rules, build_rules

LOGGER = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "plant-builder/0.1 (terrarium plant library curation)"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration sourced from environment variables."""

    plants_dir: Path
    output_dir: Path
    images_dir: Path
    vocab_path: Optional[Path]
    index_name: str
    enrich_delay: float
    http_timeout: float
    max_retries: int
    user_agent: str
    dry_run: bool

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Copy with the given fields replaced; None values leave the field alone."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


def load_settings() -> Settings:
    plants_dir = Path(os.getenv("PLANT_BUILDER_PLANTS_DIR", paths.PLANTS_DIR))
    output_dir = Path(os.getenv("PLANT_BUILDER_OUTPUT_DIR", plants_dir))
    images_dir = Path(os.getenv("PLANT_BUILDER_IMAGES_DIR", paths.IMAGES_DIR))
    vocab_path = _optional_path(os.getenv("PLANT_BUILDER_VOCAB"))
    if vocab_path is None and paths.VOCAB_FILE.exists():
        vocab_path = paths.VOCAB_FILE

    return Settings(
        plants_dir=plants_dir,
        output_dir=output_dir,
        images_dir=images_dir,
        vocab_path=vocab_path,
        index_name=paths.INDEX_FILENAME,
        enrich_delay=float(os.getenv("PLANT_BUILDER_ENRICH_DELAY", "1.0")),
        http_timeout=float(os.getenv("PLANT_BUILDER_HTTP_TIMEOUT", "10")),
        max_retries=int(os.getenv("PLANT_BUILDER_MAX_RETRIES", "3")),
        user_agent=os.getenv("PLANT_BUILDER_USER_AGENT", DEFAULT_USER_AGENT),
        dry_run=os.getenv("PLANT_BUILDER_DRY_RUN", "false").lower() == "true",
    )


@dataclass(frozen=True, eq=False)
class Vocabulary:
    """Read-only tables consumed by the non-plant filter, the merger and the classifier."""

    enumerations: Mapping[str, tuple[str, ...]]
    value_variants: Mapping[str, Mapping[str, tuple[str, ...]]]
    attribute_rules: Mapping[str, tuple[Rule, ...]]
    propagation_methods: tuple[str, ...]
    propagation_variants: Mapping[str, tuple[str, ...]]
    propagation_rules: tuple[PropagationRule, ...]
    propagation_fallback: str
    non_plant_patterns: tuple[re.Pattern, ...]
    non_plant_exceptions: tuple[str, ...]
    care_placeholders: Mapping[str, tuple[str, ...]]


def _read_overrides(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Vocabulary override {path} must be a JSON object")
    unknown = sorted(set(data) - {"non_plant_patterns", "non_plant_exceptions", "care_placeholders", "extra_attribute_rules"})
    if unknown:
        raise ValueError(f"Unknown vocabulary keys in {path}: {', '.join(unknown)}")
    return data


def load_vocabulary(path: Optional[Path] = None) -> Vocabulary:
    """Build the vocabulary from the curated constants plus an optional JSON override.

    The override may extend `non_plant_patterns`, `non_plant_exceptions` and
    `care_placeholders` (field -> list of values) and prepend
    `extra_attribute_rules` ([field, value, source, [patterns]] rows, which win
    over the built-in rules of the same stage).
    """
    overrides: dict[str, Any] = _read_overrides(Path(path)) if path else {}
    if overrides:
        LOGGER.info("Loaded vocabulary overrides from %s", path)

    extra_rules = [
        (str(row[0]), str(row[1]), str(row[2]), tuple(row[3]))
        for row in overrides.get("extra_attribute_rules", [])
    ]
    attribute_rules = build_rules([*extra_rules, *tc.ATTRIBUTE_RULE_SEED], tc.ENUMERATIONS)

    placeholders = {name: tuple(values) for name, values in tc.CARE_PLACEHOLDERS.items()}
    for name, values in overrides.get("care_placeholders", {}).items():
        placeholders[name] = (*placeholders.get(name, ()), *values)

    patterns = (*tc.NON_PLANT_PATTERNS, *overrides.get("non_plant_patterns", []))
    exceptions = (*tc.NON_PLANT_EXCEPTIONS, *overrides.get("non_plant_exceptions", []))

    return Vocabulary(
        enumerations=MappingProxyType(dict(tc.ENUMERATIONS)),
        value_variants=MappingProxyType({k: MappingProxyType(v) for k, v in tc.VALUE_VARIANTS.items()}),
        attribute_rules=MappingProxyType(attribute_rules),
        propagation_methods=tc.PROPAGATION_METHODS,
        propagation_variants=MappingProxyType(dict(tc.PROPAGATION_VARIANTS)),
        propagation_rules=build_propagation_rules(tc.PROPAGATION_RULE_SEED),
        propagation_fallback=tc.PROPAGATION_FALLBACK,
        non_plant_patterns=tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns),
        non_plant_exceptions=tuple(exception.lower() for exception in exceptions),
        care_placeholders=MappingProxyType(placeholders),
    )


DEFAULT_VOCABULARY = load_vocabulary()


__all__ = [
    "DEFAULT_VOCABULARY",
    "Settings",
    "Vocabulary",
    "load_settings",
    "load_vocabulary",
]
