"""Point each record's `images` at the files actually present in its image folder."""
from __future__ import annotations

import logging
import re
from pathlib import Path

from ..schema import PlantRecord
from .name_normalizer import folder_slug

LOGGER = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")
IMAGE_URL_PREFIX = "images"

_SEQUENCE_RE = re.compile(r"-(\d+)\.[^.]+$")


def _sort_key(filename: str) -> tuple[int, str]:
    match = _SEQUENCE_RE.search(filename)
    return (int(match.group(1)) if match else 0, filename)


def list_image_files(images_dir: Path, slug: str) -> list[str]:
    """Image paths for one folder, ordered by their "-N." suffix; [] when the folder is missing."""
    if not slug:
        return []
    folder = Path(images_dir) / slug
    if not folder.is_dir():
        return []
    files = [
        entry.name
        for entry in folder.iterdir()
        if entry.is_file() and entry.suffix.lower() in IMAGE_EXTENSIONS
    ]
    return [f"{IMAGE_URL_PREFIX}/{slug}/{name}" for name in sorted(files, key=_sort_key)]


def sync_images(record: PlantRecord, images_dir: Path) -> bool:
    """Replace `images` with the folder listing when it has any files; True when the record changed."""
    slug = folder_slug(record.scientific_name)
    images = list_image_files(images_dir, slug)
    if not images or images == record.images:
        return False
    LOGGER.debug("Synced %d image(s) for '%s' from %s", len(images), record.name, slug)
    record.images = images
    return True


__all__ = ["IMAGE_EXTENSIONS", "list_image_files", "sync_images"]
