"""Trusted-domain search through the DuckDuckGo instant-answer API."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Iterable, List, Optional

import requests

from .base import METADATA_KEY, DataSource, LookupQuery, RecordBatch, SourceMetadata
from ..config import SearchSettings

logger = logging.getLogger(__name__)

NO_PRECISE_DATA = "No precise data"


def load_trusted_domains(path: Path | str) -> List[str]:
    """Flatten the ``sources`` groups of a sources file into a domain list.

    A missing or malformed file is logged and yields an empty list so the
    endpoint keeps working on the language-model path alone.
    """

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not load trusted sources from %s: %s", path, exc)
        return []

    groups = data.get("sources", []) if isinstance(data, dict) else []
    domains: List[str] = []
    for group in groups:
        if not isinstance(group, dict):
            continue
        for domain in group.get("domains") or []:
            if isinstance(domain, str) and domain.strip():
                domains.append(domain.strip())
    return domains


class TrustedDomainSearchSource(DataSource):
    """Runs one ``site:`` search per trusted domain and keeps the first topic."""

    name = "trusted_domain_search"

    def __init__(
        self,
        settings: SearchSettings,
        domains: Iterable[str],
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.domains = list(domains)
        self.session = session or requests.Session()

    def fetch(self, query: LookupQuery) -> Iterable[RecordBatch]:
        if not self.settings.enabled or not self.domains:
            return []

        text = query.search_text(self.settings.query_suffix)
        batch: RecordBatch = []
        for domain in self.domains:
            try:
                data = self._search(domain, text)
            except (requests.RequestException, ValueError) as exc:
                logger.warning("Search on %s failed: %s", domain, exc)
                continue
            snippet = _first_topic_text(data)
            if snippet is None:
                continue
            batch.append(
                {
                    "domain": domain,
                    "snippet": snippet,
                    METADATA_KEY: SourceMetadata(
                        source=self.name,
                        retrieved_at=datetime.now(UTC),
                        confidence=0.6,
                    ),
                }
            )
        logger.info(
            "Trusted-domain search: %d/%d domains answered", len(batch), len(self.domains)
        )
        return [batch] if batch else []

    def _search(self, domain: str, text: str) -> dict:
        response = self.session.get(
            self.settings.base_url,
            params={
                "q": f"site:{domain} {text}",
                "format": "json",
                "no_html": 1,
                "no_redirect": 1,
            },
            timeout=self.settings.timeout,
        )
        response.raise_for_status()
        data = response.json()
        return data if isinstance(data, dict) else {}


def _first_topic_text(data: dict) -> Optional[str]:
    topics = data.get("RelatedTopics") or []
    if not isinstance(topics, list) or not topics:
        return None
    first = topics[0]
    text = first.get("Text") if isinstance(first, dict) else None
    return text or NO_PRECISE_DATA


__all__ = ["TrustedDomainSearchSource", "load_trusted_domains", "NO_PRECISE_DATA"]
