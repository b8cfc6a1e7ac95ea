"""Numeric id bookkeeping: no two surviving records may share a non-null id."""
from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from ..schema import PlantRecord

LOGGER = logging.getLogger(__name__)


def find_duplicate_ids(records: Sequence[PlantRecord]) -> dict[int, int]:
    """id -> number of records holding it, for ids held more than once."""
    counts = Counter(record.id for record in records if record.id is not None)
    return {plant_id: count for plant_id, count in sorted(counts.items()) if count > 1}


def resolve_id_conflicts(records: Sequence[PlantRecord], assign_missing: bool = False) -> list[tuple[PlantRecord, int | None, int]]:
    """Give every later holder of a contested id a fresh one (max id + 1, + 2, ...).

    The first record (in the given order) keeps its id. With `assign_missing`,
    records without an id are numbered too. Returns (record, old, new) per change.
    """
    next_id = max((record.id for record in records if record.id is not None), default=0) + 1
    seen: set[int] = set()
    changes: list[tuple[PlantRecord, int | None, int]] = []

    for record in records:
        old = record.id
        if old is None:
            if not assign_missing:
                continue
        elif old not in seen:
            seen.add(old)
            continue

        record.id = next_id
        seen.add(next_id)
        changes.append((record, old, next_id))
        if old is None:
            LOGGER.info("Assigned id %d to '%s'", next_id, record.name)
        else:
            LOGGER.info("Reassigned duplicate id %d -> %d for '%s'", old, next_id, record.name)
        next_id += 1
    return changes


__all__ = ["find_duplicate_ids", "resolve_id_conflicts"]
