"""Best-effort enrichment from public sources (GBIF backbone + Wikipedia summaries).

Nothing in the reconciliation core depends on this module: every failure is
logged and returned as an empty `Enrichment`, which callers treat as "no change".
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import Settings
from .schema import TAXONOMY_RANKS, Enrichment, PlantRecord, Taxonomy

LOGGER = logging.getLogger(__name__)

GBIF_MATCH_URL = "https://api.gbif.org/v1/species/match"
WIKIPEDIA_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/{title}"


def _clean(value: Any) -> str:
    return ("" if value is None else str(value)).strip()


class EnrichmentClient:
    """Sequential, rate-limited HTTP client. One instance per run."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": settings.user_agent, "Accept": "application/json"})
        self._last_call: Optional[float] = None
        self._get_json = retry(
            stop=stop_after_attempt(max(1, settings.max_retries)),
            wait=wait_exponential(min=1, max=10),
            retry=retry_if_exception_type(requests.RequestException),
            reraise=True,
        )(self._get_json_once)

    def _throttle(self) -> None:
        if self._last_call is not None and self.settings.enrich_delay > 0:
            remaining = self.settings.enrich_delay - (time.monotonic() - self._last_call)
            if remaining > 0:
                time.sleep(remaining)
        self._last_call = time.monotonic()

    def _get_json_once(self, url: str, params: Optional[dict[str, Any]] = None) -> Optional[dict[str, Any]]:
        self._throttle()
        resp = self.session.get(url, params=params, timeout=self.settings.http_timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        blob = resp.json() if resp.content else None
        return blob if isinstance(blob, dict) else None

    def fetch_taxonomy(self, scientific_name: str) -> Optional[Taxonomy]:
        blob = self._get_json(GBIF_MATCH_URL, {"name": scientific_name, "verbose": "false"})
        if not blob or blob.get("matchType") in (None, "NONE"):
            return None
        ranks = {rank: _clean(blob.get(rank)) for rank in TAXONOMY_RANKS}
        ranks = {rank: value for rank, value in ranks.items() if value}
        return Taxonomy.model_validate(ranks) if ranks else None

    def fetch_description(self, title: str) -> Optional[str]:
        url = WIKIPEDIA_SUMMARY_URL.format(title=requests.utils.quote(title.replace(" ", "_"), safe=""))
        blob = self._get_json(url)
        if not blob or blob.get("type") == "disambiguation":
            return None
        return _clean(blob.get("extract")) or None

    def fetch_enrichment(self, scientific_name: Optional[str]) -> Enrichment:
        name = _clean(scientific_name)
        if not name:
            return Enrichment()
        try:
            taxonomy = self.fetch_taxonomy(name)
            description = self.fetch_description(name)
        except (requests.RequestException, ValueError) as exc:
            LOGGER.warning("Enrichment failed for '%s': %s", name, exc)
            return Enrichment()
        return Enrichment(description=description, accepted_taxonomy=taxonomy)


def apply_enrichment(record: PlantRecord, enrichment: Enrichment) -> bool:
    """Adopt a strictly longer description and a strictly more populated taxonomy."""
    changed = False
    if enrichment.description and len(enrichment.description.strip()) > len(_clean(record.description)):
        record.description = enrichment.description.strip()
        changed = True

    accepted = enrichment.accepted_taxonomy
    current_ranks = record.taxonomy.populated_ranks() if record.taxonomy else 0
    if accepted is not None and accepted.populated_ranks() > current_ranks:
        record.taxonomy = accepted.model_copy(deep=True)
        changed = True
    return changed


__all__ = ["EnrichmentClient", "apply_enrichment"]
