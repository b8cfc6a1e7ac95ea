"""Rule-driven classification of the enumerated plant attributes.

Each field owns an ordered list of rules compiled from
`taxonomy_constants.ATTRIBUTE_RULE_SEED`. Rules are evaluated by stage:

    existing > tag > taxonomy > keyword > derived > default

An already-valid value is always kept. An invalid value is first mapped through
the field's variant table; only when that fails do the rules run. A field no
rule decides stays None. Propagation is the exception: it always resolves,
falling back to a fixed pair of methods.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional

from ..schema import ClassifiedAttributes, PlantRecord
from .taxonomy_constants import CLASSIFIED_FIELDS

if TYPE_CHECKING:
    from ..config import Vocabulary

LOGGER = logging.getLogger(__name__)

STAGES = ("existing", "tag", "taxonomy", "keyword", "derived", "default")
TAXON_SOURCES = ("kingdom", "phylum", "class", "order", "family", "genus")
KEYWORD_SCOPES = ("names", "text", "description")

_PROPAGATION_SPLIT_RE = re.compile(r"[,;/+]|\band\b|\bor\b|&", re.IGNORECASE)


def _clean(value: Any) -> str:
    return ("" if value is None else str(value)).strip()


def _norm(value: Any) -> str:
    return re.sub(r"\s+", " ", _clean(value).lower().replace("_", "-"))


@dataclass
class RecordContext:
    """Lowercased views of one record that the matchers consult."""

    tags: frozenset[str]
    ranks: dict[str, str]
    names: str
    text: str
    description: str
    attributes: dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: PlantRecord, attributes: Optional[Mapping[str, Optional[str]]] = None) -> "RecordContext":
        ranks = {rank: record.taxonomy.rank(rank) for rank in TAXON_SOURCES} if record.taxonomy else {}
        sci = _clean(record.scientific_name).lower()
        if not ranks.get("genus") and sci:
            ranks["genus"] = sci.split()[0].strip("'\"‘’“”")
        names = f"{_clean(record.name).lower()} {sci}".strip()
        description = _clean(record.description).lower()
        return cls(
            tags=frozenset(record.tags()),
            ranks=ranks,
            names=names,
            text=f"{names} {description}".strip(),
            description=description,
            attributes=dict(attributes or {}),
        )

    def rank(self, name: str) -> str:
        return self.ranks.get(name, "")


Matcher = Callable[[RecordContext], bool]


@dataclass(frozen=True)
class TagMatch:
    tags: frozenset[str]

    def __call__(self, ctx: RecordContext) -> bool:
        return bool(self.tags & ctx.tags)


@dataclass(frozen=True)
class TaxonMatch:
    rank: str
    names: frozenset[str]

    def __call__(self, ctx: RecordContext) -> bool:
        return ctx.rank(self.rank) in self.names


@dataclass(frozen=True)
class GenusMatch:
    """Genus rank, falling back to the first word of the scientific name."""

    names: frozenset[str]

    def __call__(self, ctx: RecordContext) -> bool:
        return ctx.rank("genus") in self.names


@dataclass(frozen=True)
class KeywordMatch:
    patterns: tuple[re.Pattern, ...]
    scope: str = "text"

    def __call__(self, ctx: RecordContext) -> bool:
        haystack = getattr(ctx, self.scope)
        return bool(haystack) and any(pattern.search(haystack) for pattern in self.patterns)


@dataclass(frozen=True)
class AttributeMatch:
    field: str
    values: frozenset[str]

    def __call__(self, ctx: RecordContext) -> bool:
        return ctx.attributes.get(self.field) in self.values


@dataclass(frozen=True)
class AllOf:
    matchers: tuple[Matcher, ...]

    def __call__(self, ctx: RecordContext) -> bool:
        return all(matcher(ctx) for matcher in self.matchers)


@dataclass(frozen=True)
class AnyOf:
    matchers: tuple[Matcher, ...]

    def __call__(self, ctx: RecordContext) -> bool:
        return any(matcher(ctx) for matcher in self.matchers)


@dataclass(frozen=True)
class NoneOf:
    matchers: tuple[Matcher, ...]

    def __call__(self, ctx: RecordContext) -> bool:
        return not any(matcher(ctx) for matcher in self.matchers)


@dataclass(frozen=True)
class Always:
    def __call__(self, ctx: RecordContext) -> bool:
        return True


@dataclass(frozen=True)
class Rule:
    value: str
    stage: str
    source: str
    match: Matcher


@dataclass(frozen=True)
class PropagationRule:
    methods: str
    match: Matcher


def stage_for_source(source: str) -> str:
    if source == "tag":
        return "tag"
    if source in TAXON_SOURCES:
        return "taxonomy"
    if source in KEYWORD_SCOPES:
        return "keyword"
    if source in CLASSIFIED_FIELDS:
        return "derived"
    if source == "default":
        return "default"
    raise ValueError(f"Unknown rule source '{source}'")


def _matcher_for(source: str, patterns: Iterable[str]) -> Matcher:
    patterns = tuple(patterns)
    stage = stage_for_source(source)
    if stage == "tag":
        return TagMatch(frozenset(p.lower() for p in patterns))
    if source == "genus":
        return GenusMatch(frozenset(p.lower() for p in patterns))
    if stage == "taxonomy":
        return TaxonMatch(source, frozenset(p.lower() for p in patterns))
    if stage == "keyword":
        positive = tuple(re.compile(p, re.IGNORECASE) for p in patterns if not p.startswith("!"))
        negative = tuple(re.compile(p[1:], re.IGNORECASE) for p in patterns if p.startswith("!"))
        matcher: Matcher = KeywordMatch(positive, scope=source)
        if negative:
            matcher = AllOf((matcher, NoneOf((KeywordMatch(negative, scope=source),))))
        return matcher
    if stage == "derived":
        return AttributeMatch(source, frozenset(patterns))
    return Always()


def build_rules(
    seed: Iterable[tuple[str, str, str, tuple[str, ...]]],
    enumerations: Mapping[str, tuple[str, ...]],
) -> dict[str, tuple[Rule, ...]]:
    """Compile seed tuples into per-field rules ordered by stage (table order within a stage)."""
    by_field: dict[str, list[Rule]] = {name: [] for name in CLASSIFIED_FIELDS}
    for field_name, value, source, patterns in seed:
        if field_name not in by_field:
            raise ValueError(f"Unknown classified field '{field_name}'")
        if value not in enumerations.get(field_name, ()):
            raise ValueError(f"'{value}' is not a valid {field_name} value")
        by_field[field_name].append(Rule(value, stage_for_source(source), source, _matcher_for(source, patterns)))
    return {
        name: tuple(sorted(rules, key=lambda rule: STAGES.index(rule.stage)))
        for name, rules in by_field.items()
    }


def build_propagation_rules(
    seed: Iterable[tuple[str, tuple[tuple[str, tuple[str, ...]], ...]]],
) -> tuple[PropagationRule, ...]:
    rules = []
    for methods, requirements in seed:
        clauses = tuple(
            AnyOf(tuple(_matcher_for(source, values) for source in sources.split("|")))
            for sources, values in requirements
        )
        rules.append(PropagationRule(methods, AllOf(clauses)))
    return tuple(rules)


def canonical_value(field_name: str, value: Any, vocab: "Vocabulary") -> Optional[str]:
    """Map a free-text attribute value onto the field's enumeration, or None."""
    if not isinstance(value, str):
        return None
    cleaned = _norm(value)
    if not cleaned:
        return None
    allowed = vocab.enumerations[field_name]
    for candidate in (cleaned, cleaned.replace(" ", "-")):
        if candidate in allowed:
            return candidate

    variants = vocab.value_variants.get(field_name, {})
    for canonical, phrases in variants.items():
        if cleaned in phrases:
            return canonical
    for canonical, phrases in variants.items():
        for phrase in phrases:
            if re.search(rf"\b{re.escape(phrase)}\b", cleaned):
                return canonical
    return None


def canonical_propagation(value: Any, vocab: "Vocabulary") -> Optional[str]:
    """Canonicalize free-text propagation into the known method names (comma-joined)."""
    if not isinstance(value, str) or not value.strip():
        return None
    by_lower = {method.lower(): method for method in vocab.propagation_methods}
    methods: list[str] = []
    for part in _PROPAGATION_SPLIT_RE.split(value):
        cleaned = _norm(part)
        if not cleaned:
            continue
        method = by_lower.get(cleaned)
        if method is None:
            method = next(
                (
                    canonical
                    for canonical, phrases in vocab.propagation_variants.items()
                    if any(re.search(rf"\b{re.escape(phrase)}\b", cleaned) for phrase in phrases)
                ),
                None,
            )
        if method and method not in methods:
            methods.append(method)
    return ", ".join(methods) if methods else None


def _classify_field(
    record: PlantRecord, field_name: str, ctx: RecordContext, vocab: "Vocabulary"
) -> Optional[str]:
    current = getattr(record, field_name)
    existing = canonical_value(field_name, current, vocab)
    if existing is not None:
        if existing != current:
            LOGGER.debug("%s: %s %r -> %s via existing", record.name, field_name, current, existing)
        return existing

    for rule in vocab.attribute_rules.get(field_name, ()):
        if rule.match(ctx):
            LOGGER.debug("%s: %s=%s via %s (%s)", record.name, field_name, rule.value, rule.stage, rule.source)
            return rule.value
    return None


def infer_propagation(
    record: PlantRecord, attributes: Mapping[str, Optional[str]], vocab: "Vocabulary"
) -> str:
    existing = canonical_propagation(record.propagation, vocab)
    if existing:
        return existing

    ctx = RecordContext.from_record(record, attributes)
    for rule in vocab.propagation_rules:
        if rule.match(ctx):
            return rule.methods
    return vocab.propagation_fallback


def classify(record: PlantRecord, vocab: "Vocabulary") -> ClassifiedAttributes:
    """Compute every enumerated attribute for one record without touching it."""
    ctx = RecordContext.from_record(record)
    values: dict[str, Optional[str]] = {}
    for field_name in CLASSIFIED_FIELDS:
        value = _classify_field(record, field_name, ctx, vocab)
        values[field_name] = value
        ctx.attributes[field_name] = value
    values["propagation"] = infer_propagation(record, values, vocab)
    return ClassifiedAttributes(**values)


def apply_classification(record: PlantRecord, attributes: ClassifiedAttributes) -> list[str]:
    """Write changed attributes onto the record; returns the names of the fields that changed."""
    changed: list[str] = []
    for field_name, value in attributes.model_dump().items():
        if getattr(record, field_name) != value:
            setattr(record, field_name, value)
            changed.append(field_name)
    return changed


def null_attribute_counts(records: Iterable[PlantRecord]) -> dict[str, int]:
    counts = {name: 0 for name in (*CLASSIFIED_FIELDS, "propagation")}
    for record in records:
        for name in counts:
            if getattr(record, name) is None:
                counts[name] += 1
    return counts


def vocabulary_violations(record: PlantRecord, vocab: "Vocabulary") -> list[tuple[str, str]]:
    """(json field, value) pairs whose value lies outside the closed vocabularies."""
    violations: list[tuple[str, str]] = []
    for field_name in CLASSIFIED_FIELDS:
        value = getattr(record, field_name)
        if value is not None and value not in vocab.enumerations[field_name]:
            violations.append((PlantRecord.model_fields[field_name].alias or field_name, str(value)))
    if record.propagation is not None:
        methods = [part.strip() for part in str(record.propagation).split(",")]
        if not all(method in vocab.propagation_methods for method in methods):
            violations.append(("propagation", str(record.propagation)))
    return violations


__all__ = [
    "AllOf",
    "AnyOf",
    "AttributeMatch",
    "GenusMatch",
    "KeywordMatch",
    "NoneOf",
    "PropagationRule",
    "RecordContext",
    "Rule",
    "TagMatch",
    "TaxonMatch",
    "apply_classification",
    "build_propagation_rules",
    "build_rules",
    "canonical_propagation",
    "canonical_value",
    "classify",
    "infer_propagation",
    "null_attribute_counts",
    "vocabulary_violations",
]
