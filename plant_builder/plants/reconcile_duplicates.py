"""Duplicate and variant reconciliation for the plant corpus.

Records are bucketed by their identity key (normalized scientific name, else the
lowercased name). Inside a bucket, records carrying a cultivar/variety marker are
variants: each keeps its own document and is stamped with `variantInfo`. The
remaining members are true duplicates and collapse into the best-scoring one.

Filtering of non-plant product listings happens before grouping so that a
"Monstera deliciosa starter kit" never occupies the taxon slot of the plant.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Sequence

from ..schema import PlantRecord, VariantInfo
from .merge_records import merge_group
from .name_normalizer import has_variant_indicator, identity_key, variant_token
from .scoring import select_survivor

if TYPE_CHECKING:
    from ..config import Vocabulary

LOGGER = logging.getLogger(__name__)


def _clean(value: object) -> str:
    return ("" if value is None else str(value)).strip()


@dataclass(frozen=True)
class DuplicateGroup:
    key: str
    survivor_index: int
    loser_indexes: tuple[int, ...]


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass; indexes refer to the input sequence."""

    survivors: list[PlantRecord]
    survivor_indexes: list[int]
    groups: list[DuplicateGroup] = field(default_factory=list)
    variants: dict[str, list[int]] = field(default_factory=dict)
    consumed: frozenset[int] = frozenset()

    @property
    def merged(self) -> int:
        return sum(len(group.loser_indexes) for group in self.groups)

    @property
    def variant_count(self) -> int:
        return sum(len(indexes) for indexes in self.variants.values())

    def stats(self) -> dict[str, int]:
        return {
            "survivors": len(self.survivors),
            "duplicate_groups": len(self.groups),
            "merged": self.merged,
            "variants": self.variant_count,
        }


def is_non_plant(record: PlantRecord, vocab: "Vocabulary") -> bool:
    name = _clean(record.name).lower()
    if not name:
        return False
    haystack = f"{name} {_clean(record.scientific_name).lower()}"
    if any(re.search(rf"\b{re.escape(exception)}", haystack) for exception in vocab.non_plant_exceptions):
        return False
    return any(pattern.search(name) for pattern in vocab.non_plant_patterns)


def split_non_plants(
    records: Iterable[PlantRecord], vocab: "Vocabulary"
) -> tuple[list[PlantRecord], list[PlantRecord]]:
    plants: list[PlantRecord] = []
    non_plants: list[PlantRecord] = []
    for record in records:
        (non_plants if is_non_plant(record, vocab) else plants).append(record)
    return plants, non_plants


def stamp_variant(record: PlantRecord, base_key: str) -> bool:
    """Attach fresh lineage info; returns True when the record changed."""
    info = VariantInfo(
        is_variant=True,
        base_species=base_key,
        variant_name=record.name,
        variant_scientific_name=record.scientific_name,
    )
    current = record.variant_info
    if current is not None and current.model_dump(by_alias=True) == info.model_dump(by_alias=True):
        return False
    record.variant_info = info
    return True


def reconcile_duplicates(
    records: Sequence[PlantRecord],
    placeholders: Optional[Mapping[str, Iterable[str]]] = None,
) -> ReconcileResult:
    """Merge true duplicates and stamp variants. The input records are not modified."""
    output = [record.model_copy(deep=True) for record in records]

    buckets: dict[str, list[int]] = {}
    for idx, record in enumerate(records):
        key = identity_key(record.name, record.scientific_name)
        if key is None:
            LOGGER.warning("Record #%d has neither name nor scientific name; kept as-is", idx)
            continue
        buckets.setdefault(key, []).append(idx)

    groups: list[DuplicateGroup] = []
    variants: dict[str, list[int]] = {}
    consumed: set[int] = set()

    for key, members in buckets.items():
        non_variants: list[int] = []
        for idx in members:
            record = records[idx]
            if has_variant_indicator(record.name, record.scientific_name):
                stamp_variant(output[idx], key)
                variants.setdefault(key, []).append(idx)
                LOGGER.info(
                    "Variant '%s' of %s (%s)",
                    record.name,
                    key,
                    variant_token(record.name, record.scientific_name) or "unnamed",
                )
            else:
                non_variants.append(idx)

        if len(non_variants) < 2:
            continue

        candidates = [records[idx] for idx in non_variants]
        survivor_idx = non_variants[select_survivor(candidates)]
        loser_idxs = tuple(idx for idx in non_variants if idx != survivor_idx)
        output[survivor_idx] = merge_group(
            records[survivor_idx],
            [records[idx] for idx in loser_idxs],
            placeholders,
            load_order=candidates,
        )
        consumed.update(loser_idxs)
        groups.append(DuplicateGroup(key, survivor_idx, loser_idxs))
        LOGGER.info(
            "Merged %d duplicate(s) of %s into '%s' (#%d)",
            len(loser_idxs),
            key,
            records[survivor_idx].name,
            survivor_idx,
        )

    survivor_indexes = [idx for idx in range(len(records)) if idx not in consumed]
    return ReconcileResult(
        survivors=[output[idx] for idx in survivor_indexes],
        survivor_indexes=survivor_indexes,
        groups=groups,
        variants=variants,
        consumed=frozenset(consumed),
    )


__all__ = [
    "DuplicateGroup",
    "ReconcileResult",
    "is_non_plant",
    "reconcile_duplicates",
    "split_non_plants",
    "stamp_variant",
]
