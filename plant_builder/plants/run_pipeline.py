"""Reconciliation pipeline driver for the plant corpus.

Stages (all decisions are made from one in-memory snapshot before any file on
disk is touched):
1. load every record document; malformed files are logged and skipped
2. drop non-plant product listings
3. optional image-folder sync and best-effort enrichment
4. merge true duplicates, stamp variants
5. resolve id conflicts
6. classify enumerated attributes
7. stage + commit changed documents, remove consumed files, rewrite the index
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..config import DEFAULT_VOCABULARY, Settings, Vocabulary
from ..enrichment import EnrichmentClient, apply_enrichment
from ..schema import PlantRecord
from ..storage import StagingArea, dump_record, iter_record_files, parse_record, remove_files, write_index
from .classify_attributes import apply_classification, classify, null_attribute_counts, vocabulary_violations
from .identity import find_duplicate_ids, resolve_id_conflicts
from .image_sync import sync_images as sync_record_images
from .reconcile_duplicates import is_non_plant, reconcile_duplicates

LOGGER = logging.getLogger(__name__)


@dataclass
class SourceRecord:
    record: PlantRecord
    path: Path
    text: str
    order: int


@dataclass
class RunReport:
    loaded: int = 0
    malformed: int = 0
    non_plants: int = 0
    duplicate_groups: int = 0
    merged: int = 0
    variants: int = 0
    id_reassigned: int = 0
    enriched: int = 0
    images_synced: int = 0
    classified: int = 0
    updated: int = 0
    skipped: int = 0
    errored: int = 0
    removed: int = 0
    null_attributes: dict[str, int] = field(default_factory=dict)
    manifest_count: Optional[int] = None

    def as_dict(self) -> dict:
        return asdict(self)


def load_corpus(directory: Path, index_name: str) -> tuple[list[SourceRecord], list[Path]]:
    sources: list[SourceRecord] = []
    malformed: list[Path] = []
    for path in iter_record_files(directory, index_name):
        try:
            text = path.read_text(encoding="utf-8")
            record = parse_record(text)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            LOGGER.warning("Skipping malformed record %s: %s", path.name, exc)
            malformed.append(path)
            continue
        sources.append(SourceRecord(record=record, path=path, text=text, order=len(sources)))
    LOGGER.info("Loaded %d record(s) from %s (%d malformed)", len(sources), directory, len(malformed))
    return sources, malformed


def _existing_text(target: Path, source: SourceRecord) -> Optional[str]:
    if target.resolve() == source.path.resolve():
        return source.text
    try:
        return target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def run_pipeline(
    settings: Settings,
    *,
    vocab: Vocabulary = DEFAULT_VOCABULARY,
    enricher: Optional[EnrichmentClient] = None,
    sync_images: bool = False,
    assign_ids: bool = False,
) -> RunReport:
    """Run every stage once over `settings.plants_dir`.

    Raises `ManifestWriteError` when the index cannot be written; every other
    per-file failure is counted in the report and the run continues.
    """
    report = RunReport()
    output_dir = Path(settings.output_dir)

    sources, malformed = load_corpus(settings.plants_dir, settings.index_name)
    report.loaded = len(sources)
    report.malformed = len(malformed)

    plants: list[SourceRecord] = []
    removals: list[str] = []
    for source in sources:
        if is_non_plant(source.record, vocab):
            LOGGER.info("Removing non-plant listing '%s' (%s)", source.record.name, source.path.name)
            removals.append(source.path.name)
            report.non_plants += 1
        else:
            plants.append(source)

    if sync_images:
        for source in plants:
            if sync_record_images(source.record, settings.images_dir):
                report.images_synced += 1

    if enricher is not None:
        for source in plants:
            record = source.record
            enrichment = enricher.fetch_enrichment(record.scientific_name or record.name)
            if apply_enrichment(record, enrichment):
                report.enriched += 1

    result = reconcile_duplicates([source.record for source in plants], vocab.care_placeholders)
    report.duplicate_groups = len(result.groups)
    report.merged = result.merged
    report.variants = result.variant_count
    removals.extend(plants[idx].path.name for idx in sorted(result.consumed))
    survivors = [(plants[idx], record) for idx, record in zip(result.survivor_indexes, result.survivors)]

    report.id_reassigned = len(resolve_id_conflicts([record for _, record in survivors], assign_missing=assign_ids))

    for _, record in survivors:
        if apply_classification(record, classify(record, vocab)):
            report.classified += 1
    report.null_attributes = null_attribute_counts(record for _, record in survivors)

    pending: list[tuple[str, str]] = []
    for source, record in survivors:
        filename = source.path.name
        text = dump_record(record)
        if _existing_text(output_dir / filename, source) == text:
            report.skipped += 1
        else:
            pending.append((filename, text))

    removal_paths = [output_dir / name for name in removals if (output_dir / name).exists()]

    if settings.dry_run:
        report.updated = len(pending)
        report.removed = len(removal_paths)
        present = {path.name for path in iter_record_files(output_dir, settings.index_name)}
        present -= set(removals)
        present |= {source.path.name for source, _ in survivors}
        report.manifest_count = len(present)
        LOGGER.info("Dry run: no files written. Summary: %s", report.as_dict())
        return report

    output_dir.mkdir(parents=True, exist_ok=True)
    with StagingArea(output_dir) as staging:
        staged: list[Path] = []
        for filename, text in pending:
            try:
                staged.append(staging.stage(filename, text))
            except OSError as exc:
                LOGGER.warning("Could not stage %s: %s", filename, exc)
                report.errored += 1
        for path in staged:
            try:
                staging.commit(path)
            except OSError as exc:
                LOGGER.warning("Could not write %s: %s", path.name, exc)
                report.errored += 1
                continue
            report.updated += 1

    removed, errors = remove_files(removal_paths)
    report.removed = len(removed)
    report.errored += len(errors)

    manifest = write_index(output_dir, settings.index_name)
    report.manifest_count = manifest.count
    LOGGER.info("Run summary: %s", report.as_dict())
    return report


def validate_corpus(directory: Path, index_name: str, vocab: Vocabulary = DEFAULT_VOCABULARY) -> dict:
    """Out-of-vocabulary values and shared ids, without modifying anything."""
    sources, malformed = load_corpus(directory, index_name)
    violations: dict[str, list[tuple[str, str]]] = {}
    for source in sources:
        found = vocabulary_violations(source.record, vocab)
        if found:
            violations[source.path.name] = found
    duplicate_ids = find_duplicate_ids([source.record for source in sources])
    for filename, found in violations.items():
        for field_name, value in found:
            LOGGER.warning("%s: %s=%r is outside the vocabulary", filename, field_name, value)
    for plant_id, count in duplicate_ids.items():
        LOGGER.warning("id %d is shared by %d records", plant_id, count)
    return {
        "files": len(sources),
        "malformed": [path.name for path in malformed],
        "violations": violations,
        "duplicate_ids": duplicate_ids,
    }


__all__ = ["RunReport", "SourceRecord", "load_corpus", "run_pipeline", "validate_corpus"]
