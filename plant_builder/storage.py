"""File IO helpers for the one-document-per-plant JSON corpus."""
from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Tuple

from .paths import INDEX_FILENAME, STAGING_DIRNAME
from .schema import IndexManifest, PlantRecord

LOGGER = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the corpus on disk cannot be brought into a consistent state."""


class ManifestWriteError(StorageError):
    """The index manifest could not be written; disk and manifest may disagree."""


def iter_record_files(directory: Path, index_name: str = INDEX_FILENAME) -> List[Path]:
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.glob("*.json") if p.is_file() and p.name != index_name)


def parse_record(text: str) -> PlantRecord:
    return PlantRecord.from_json_dict(json.loads(text))


def read_record(path: Path) -> PlantRecord:
    return parse_record(Path(path).read_text(encoding="utf-8"))


def dump_record(record: PlantRecord) -> str:
    return json.dumps(record.to_json_dict(), indent=2, ensure_ascii=False) + "\n"


class StagingArea:
    """Hidden directory next to the targets; staged files are moved in with `os.replace`.

    Usage:
        with StagingArea(output_dir) as staging:
            staged = staging.stage("monstera-deliciosa.json", text)
            staging.commit(staged)
    """

    def __init__(self, directory: Path, dirname: str = STAGING_DIRNAME) -> None:
        self.directory = Path(directory)
        self.path = self.directory / dirname

    def __enter__(self) -> "StagingArea":
        self.path.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, *exc_info) -> None:
        shutil.rmtree(self.path, ignore_errors=True)

    def stage(self, filename: str, text: str) -> Path:
        staged = self.path / filename
        staged.write_text(text, encoding="utf-8")
        return staged

    def commit(self, staged: Path) -> Path:
        target = self.directory / staged.name
        os.replace(staged, target)
        return target


def remove_files(paths: Iterable[Path]) -> Tuple[List[Path], List[Tuple[Path, OSError]]]:
    removed: List[Path] = []
    errors: List[Tuple[Path, OSError]] = []
    for path in paths:
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.warning("Could not remove %s: %s", path, exc)
            errors.append((Path(path), exc))
            continue
        removed.append(Path(path))
    return removed, errors


def build_manifest(directory: Path, index_name: str = INDEX_FILENAME) -> IndexManifest:
    files = [path.name for path in iter_record_files(directory, index_name)]
    return IndexManifest(count=len(files), plants=files)


def write_index(directory: Path, index_name: str = INDEX_FILENAME) -> IndexManifest:
    """Rewrite the manifest from the files actually present; raises ManifestWriteError on failure."""
    directory = Path(directory)
    manifest = build_manifest(directory, index_name)
    target = directory / index_name
    tmp = directory / f".{index_name}.tmp"
    try:
        tmp.write_text(json.dumps(manifest.model_dump(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        os.replace(tmp, target)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise ManifestWriteError(f"Could not write {target}: {exc}") from exc
    LOGGER.info("Index written to %s (%d plants)", target, manifest.count)
    return manifest


__all__ = [
    "ManifestWriteError",
    "StagingArea",
    "StorageError",
    "build_manifest",
    "dump_record",
    "iter_record_files",
    "parse_record",
    "read_record",
    "remove_files",
    "write_index",
]
