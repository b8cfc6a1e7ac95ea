"""Completeness scores used to pick the surviving record of a duplicate group."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..schema import PlantRecord

LOGGER = logging.getLogger(__name__)

DESCRIPTION_CAP = 1000
IMAGE_WEIGHT = 10
SCIENTIFIC_NAME_BONUS = 50


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def score(record: PlantRecord) -> int:
    description = _text(record.description)
    total = min(len(description), DESCRIPTION_CAP) + IMAGE_WEIGHT * len(record.images)
    if _text(record.scientific_name):
        total += SCIENTIFIC_NAME_BONUS
    return total


def secondary_score(record: PlantRecord) -> int:
    return (
        len(_text(record.description))
        + 3 * len(_text(record.scientific_name))
        + IMAGE_WEIGHT * len(record.images)
    )


def _best_index(records: Sequence[PlantRecord], scorer) -> int:
    best, best_score = 0, None
    for idx, record in enumerate(records):
        value = scorer(record)
        # Strictly greater: ties stay with the first-seen record.
        if best_score is None or value > best_score:
            best, best_score = idx, value
    return best


def select_survivor(records: Sequence[PlantRecord]) -> Optional[int]:
    """Index of the record to keep; the primary score decides, first-seen wins ties."""
    if not records:
        return None
    winner = _best_index(records, score)
    alternative = _best_index(records, secondary_score)
    if alternative != winner:
        LOGGER.debug(
            "Scorers disagree for '%s': primary picks #%d, secondary picks #%d",
            records[winner].name,
            winner,
            alternative,
        )
    return winner


__all__ = ["score", "secondary_score", "select_survivor"]
