"""Scientific-name normalization and variant detection.

`normalize()` reduces a scientific name to the key used to bucket records of
the same taxon: cultivar and variety markers are stripped, rank abbreviations
dropped, and hybrids keep their `x` so they never collide with a parent.
"""
from __future__ import annotations

import re
from typing import Any, Optional

QUOTE_CHARS = "'\"‘’“”`´"

_QUOTED_SEGMENT_RE = re.compile(r"(['\"‘’“”`´]).*?(['\"‘’“”`´])")
_STRAY_QUOTE_RE = re.compile(r"['\"‘’“”`´]")
_MARKER_RE = re.compile(r"\b(?:var|cv|f|subsp|ssp)\.\s*\S+")
_VARIEGATED_RE = re.compile(r"\bvariegat(?:a|ed|um)\b")
_WHITESPACE_RE = re.compile(r"\s+")

RANK_TOKENS = frozenset({"var", "ssp", "subsp", "f", "form", "forma", "cultivar", "cv"})
HYBRID_MARKERS = frozenset({"x", "×"})
_RANK_MARKER_RE = re.compile(r"\b(?:var|cv|cultivar|forma?|f|subsp|ssp)\.?\s+([^\s'\"‘’“”`´]+)")

_VARIANT_INDICATOR_RES = (
    re.compile(r"(?:^|\s)['\"‘’“”`´][^'\"‘’“”`´]+['\"‘’“”`´]"),
    _RANK_MARKER_RE,
    re.compile(r"\bcultivar\b"),
    re.compile(r"variegat"),
)
_VARIANT_TOKEN_RES = (
    re.compile(r"(?:^|\s)['\"‘’“”`´]([^'\"‘’“”`´]+)['\"‘’“”`´]"),
    _RANK_MARKER_RE,
    re.compile(r"\b(variegat(?:a|ed|um))\b"),
)


def _clean(value: Any) -> str:
    return ("" if value is None else str(value)).strip()


def _collapse(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize(scientific_name: Optional[str]) -> Optional[str]:
    """Return the taxon key for a scientific name, or None when nothing usable remains."""
    text = _clean(scientific_name).lower()
    if not text:
        return None

    text = _QUOTED_SEGMENT_RE.sub(" ", text)
    text = _STRAY_QUOTE_RE.sub(" ", text)
    text = _MARKER_RE.sub(" ", text)
    text = _VARIEGATED_RE.sub(" ", text).replace("×", " × ")

    tokens = [tok for tok in _collapse(text).split(" ") if tok and tok.rstrip(".") not in RANK_TOKENS]
    if not tokens:
        return None

    # Genus x species (intergeneric/named hybrid)
    if len(tokens) >= 3 and tokens[1] in HYBRID_MARKERS:
        return f"{tokens[0]} x {tokens[2]}"
    # Genus species x species (hybrid formula)
    if len(tokens) >= 4 and tokens[2] in HYBRID_MARKERS:
        return f"{tokens[0]} {tokens[1]} x {tokens[3]}"
    if len(tokens) >= 2 and tokens[1] not in HYBRID_MARKERS:
        return f"{tokens[0]} {tokens[1]}"
    return tokens[0]


def identity_key(name: Optional[str], scientific_name: Optional[str]) -> Optional[str]:
    """Bucket key: the normalized scientific name, else the collapsed lowercase name."""
    key = normalize(scientific_name)
    if key:
        return key
    fallback = _collapse(_clean(name).lower())
    return fallback or None


def has_variant_indicator(name: Optional[str], scientific_name: Optional[str]) -> bool:
    for text in (_clean(name).lower(), _clean(scientific_name).lower()):
        if text and any(pattern.search(text) for pattern in _VARIANT_INDICATOR_RES):
            return True
    return False


def variant_token(name: Optional[str], scientific_name: Optional[str]) -> Optional[str]:
    """The distinguishing cultivar token ('Escargot', var. epithet, variegata), if any."""
    for text in (_clean(scientific_name), _clean(name)):
        if not text:
            continue
        for pattern in _VARIANT_TOKEN_RES:
            match = pattern.search(text.lower())
            if match:
                start, end = match.span(1)
                return _collapse(text[start:end]) or None
    return None


def folder_slug(scientific_name: Optional[str]) -> str:
    """Image folder name for a scientific name ("Begonia rex" -> "begonia-rex")."""
    slug = _WHITESPACE_RE.sub("-", _clean(scientific_name).lower())
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return re.sub(r"-+", "-", slug).strip("-")


__all__ = [
    "folder_slug",
    "has_variant_indicator",
    "identity_key",
    "normalize",
    "variant_token",
]
