from __future__ import annotations

from pathlib import Path

"""
Centralized filesystem layout for the plant_builder domain.

Goal: keep all paths consistent even as folders move around.
"""

ROOT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = ROOT_DIR.parent

# Inputs (one JSON document per plant, image folders keyed by slug)
DATA_DIR = PROJECT_ROOT / "data"
PLANTS_DIR = DATA_DIR / "plants"
IMAGES_DIR = PROJECT_ROOT / "images"

# Optional vocabulary override (non-plant patterns, placeholders, extra rules)
VOCAB_FILE = DATA_DIR / "vocab.json"

# Generated artifacts
INDEX_FILENAME = "index.json"
STAGING_DIRNAME = ".plant_builder_staging"


def ensure_layout() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    PLANTS_DIR.mkdir(parents=True, exist_ok=True)
    IMAGES_DIR.mkdir(parents=True, exist_ok=True)
