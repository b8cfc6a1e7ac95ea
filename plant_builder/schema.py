"""Pydantic models that describe the plant record documents."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

TAXONOMY_RANKS = ("kingdom", "phylum", "class", "order", "family", "genus", "species")


def _clean(value: Any) -> str:
    return ("" if value is None else str(value)).strip()


def _as_string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item.strip()]
    raise ValueError(f"expected a string or a list of strings, got {type(value).__name__}")


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Taxonomy(_Document):
    kingdom: Optional[str] = None
    phylum: Optional[str] = None
    class_: Optional[str] = Field(default=None, alias="class")
    order: Optional[str] = None
    family: Optional[str] = None
    genus: Optional[str] = None
    species: Optional[str] = None

    def rank(self, name: str) -> str:
        """Lowercased value of a rank ("class" maps to ``class_``); empty when missing."""
        attr = "class_" if name == "class" else name
        value = getattr(self, attr, None)
        return _clean(value).lower() if isinstance(value, str) else ""

    def populated_ranks(self) -> int:
        return sum(1 for rank in TAXONOMY_RANKS if self.rank(rank))


class VariantInfo(_Document):
    is_variant: bool = Field(default=False, alias="isVariant")
    base_species: Optional[str] = Field(default=None, alias="baseSpecies")
    variant_name: Optional[str] = Field(default=None, alias="variantName")
    variant_scientific_name: Optional[str] = Field(default=None, alias="variantScientificName")


class PlantRecord(_Document):
    """One plant document. Unknown fields are carried through untouched."""

    id: Optional[int] = None
    name: str
    scientific_name: Optional[str] = Field(default=None, alias="scientificName")
    taxonomy: Optional[Taxonomy] = None
    category: List[str] = Field(default_factory=list)
    type_tags: List[str] = Field(default_factory=list, alias="type")
    description: Optional[str] = None
    images: List[str] = Field(default_factory=list)

    # Enumerated attributes
    plant_type: Optional[str] = Field(default=None, alias="plantType")
    growth_pattern: Optional[str] = Field(default=None, alias="growthPattern")
    growth_habit: Optional[str] = Field(default=None, alias="growthHabit")
    hazard: Optional[str] = None
    rarity: Optional[str] = None
    propagation: Optional[str] = None
    flowering_period: Optional[str] = Field(default=None, alias="floweringPeriod")
    co2: Optional[str] = None

    # Free-text care fields
    difficulty: Optional[Any] = None
    light_requirements: Optional[Any] = Field(default=None, alias="lightRequirements")
    humidity: Optional[Any] = None
    temperature: Optional[Any] = None
    watering: Optional[Any] = None
    substrate: Optional[Any] = None
    size: Optional[Any] = None
    growth_rate: Optional[Any] = Field(default=None, alias="growthRate")

    variant_info: Optional[VariantInfo] = Field(default=None, alias="variantInfo")

    _key_order: List[str] = PrivateAttr(default_factory=list)

    @field_validator(
        "plant_type",
        "growth_pattern",
        "growth_habit",
        "hazard",
        "rarity",
        "propagation",
        "flowering_period",
        "co2",
        mode="before",
    )
    @classmethod
    def coerce_enumerated(cls, value: Any) -> Optional[str]:
        # Mistyped values are kept as text so the classifier can repair them.
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return None

    @field_validator("category", "type_tags", mode="before")
    @classmethod
    def coerce_tag_list(cls, value: Any) -> List[str]:
        return _as_string_list(value)

    @field_validator("images", mode="before")
    @classmethod
    def dedupe_images(cls, value: Any) -> List[str]:
        images: List[str] = []
        for image in _as_string_list(value):
            if image not in images:
                images.append(image)
        return images

    @classmethod
    def from_json_dict(cls, data: Any) -> "PlantRecord":
        record = cls.model_validate(data)
        record._key_order = list(data.keys())
        return record

    def tags(self) -> List[str]:
        tags: List[str] = []
        for tag in [*self.category, *self.type_tags]:
            cleaned = _clean(tag).lower()
            if cleaned and cleaned not in tags:
                tags.append(cleaned)
        return tags

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize with corpus field names, keeping the document's original key order."""
        payload = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        ordered = {key: payload[key] for key in self._key_order if key in payload}
        for key, value in payload.items():
            ordered.setdefault(key, value)
        return ordered


class ClassifiedAttributes(BaseModel):
    plant_type: Optional[str] = None
    growth_habit: Optional[str] = None
    growth_pattern: Optional[str] = None
    hazard: Optional[str] = None
    rarity: Optional[str] = None
    flowering_period: Optional[str] = None
    co2: Optional[str] = None
    propagation: Optional[str] = None


class Enrichment(BaseModel):
    description: Optional[str] = None
    accepted_taxonomy: Optional[Taxonomy] = None

    @property
    def is_empty(self) -> bool:
        return not self.description and self.accepted_taxonomy is None


class IndexManifest(BaseModel):
    count: int
    plants: List[str] = Field(default_factory=list)


__all__ = [
    "ClassifiedAttributes",
    "Enrichment",
    "IndexManifest",
    "PlantRecord",
    "TAXONOMY_RANKS",
    "Taxonomy",
    "VariantInfo",
]
