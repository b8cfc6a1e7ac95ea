"""Field-level merge of duplicate plant records into their survivor.

Every field rule is a keep-the-better comparison, so folding the same losers in
any order produces the same scalar fields. `merge_group` additionally fixes the
fold order and the image order so a whole group always merges identically.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..schema import PlantRecord
from .scoring import score
from .taxonomy_constants import CARE_PLACEHOLDERS

CARE_FIELDS = ("light_requirements", "humidity", "temperature")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def is_placeholder(field_name: str, value: Any, placeholders: Mapping[str, Iterable[str]] = CARE_PLACEHOLDERS) -> bool:
    """Blank values and import defaults both count as "no real data"."""
    if value is None:
        return True
    if isinstance(value, str):
        cleaned = value.strip()
        return not cleaned or cleaned in tuple(placeholders.get(field_name, ()))
    return False


def _union(*image_lists: Iterable[str]) -> list[str]:
    images: list[str] = []
    for image_list in image_lists:
        for image in image_list:
            if image not in images:
                images.append(image)
    return images


def merge(
    survivor: PlantRecord,
    loser: PlantRecord,
    placeholders: Optional[Mapping[str, Iterable[str]]] = None,
) -> PlantRecord:
    """Return a copy of `survivor` enriched with the better fields of `loser`."""
    placeholders = CARE_PLACEHOLDERS if placeholders is None else placeholders
    merged = survivor.model_copy(deep=True)
    if loser is survivor:
        return merged

    if len(_text(loser.description)) > len(_text(merged.description)):
        merged.description = loser.description
    if len(_text(loser.scientific_name)) > len(_text(merged.scientific_name)):
        merged.scientific_name = loser.scientific_name

    images = _union(merged.images, loser.images)
    if images != merged.images:
        merged.images = images

    survivor_ranks = merged.taxonomy.populated_ranks() if merged.taxonomy else 0
    loser_ranks = loser.taxonomy.populated_ranks() if loser.taxonomy else 0
    if loser_ranks > survivor_ranks:
        merged.taxonomy = loser.taxonomy.model_copy(deep=True)

    for field_name in CARE_FIELDS:
        current = getattr(merged, field_name)
        candidate = getattr(loser, field_name)
        if is_placeholder(field_name, current, placeholders) and not is_placeholder(field_name, candidate, placeholders):
            setattr(merged, field_name, candidate)
    return merged


def _fold_key(record: PlantRecord) -> tuple[int, str]:
    return -score(record), json.dumps(record.to_json_dict(), sort_keys=True, ensure_ascii=False)


def merge_group(
    survivor: PlantRecord,
    losers: Sequence[PlantRecord],
    placeholders: Optional[Mapping[str, Iterable[str]]] = None,
    *,
    load_order: Optional[Sequence[PlantRecord]] = None,
) -> PlantRecord:
    """Fold every loser into the survivor.

    Losers are folded best-first (score, then content) so the result does not
    depend on the order they are passed in. When `load_order` (all members,
    survivor included, as loaded) is given, the merged image list follows it so
    the first-loaded record's primary image stays first.
    """
    merged = survivor.model_copy(deep=True)
    for loser in sorted(losers, key=_fold_key):
        merged = merge(merged, loser, placeholders)

    if load_order:
        ordered = _union(*(member.images for member in load_order), merged.images)
        if ordered != merged.images:
            merged.images = ordered
    return merged


__all__ = ["CARE_FIELDS", "is_placeholder", "merge", "merge_group"]
