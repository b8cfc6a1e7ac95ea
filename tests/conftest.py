"""
Pytest configuration and shared fixtures for plant_builder tests.
"""
from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import pytest

from plant_builder.config import DEFAULT_VOCABULARY, load_settings
from plant_builder.schema import PlantRecord


@pytest.fixture
def make_record():
    """Build a PlantRecord from keyword arguments using the corpus' JSON field names."""

    def _make(**fields) -> PlantRecord:
        fields.setdefault("name", "Test plant")
        return PlantRecord.from_json_dict(fields)

    return _make


@pytest.fixture
def vocab():
    return DEFAULT_VOCABULARY


@pytest.fixture
def plants_dir(tmp_path) -> Path:
    directory = tmp_path / "plants"
    directory.mkdir()
    return directory


@pytest.fixture
def write_corpus(plants_dir):
    """Write {filename: document} into the plants directory; strings are written verbatim."""

    def _write(documents: dict) -> Path:
        for filename, document in documents.items():
            text = document if isinstance(document, str) else json.dumps(document, indent=2)
            (plants_dir / filename).write_text(text, encoding="utf-8")
        return plants_dir

    return _write


@pytest.fixture
def settings(monkeypatch, tmp_path, plants_dir):
    for name in (
        "PLANT_BUILDER_OUTPUT_DIR",
        "PLANT_BUILDER_VOCAB",
        "PLANT_BUILDER_DRY_RUN",
        "PLANT_BUILDER_ENRICH_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PLANT_BUILDER_PLANTS_DIR", str(plants_dir))
    monkeypatch.setenv("PLANT_BUILDER_IMAGES_DIR", str(tmp_path / "images"))
    return replace(load_settings(), vocab_path=None)
