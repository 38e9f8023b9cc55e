"""High-level orchestration for the edu-stats lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from .config import EduStatsSettings
from .data_sources import (
    DataSource,
    LookupQuery,
    OpenRegistrySource,
    RegistryUnavailable,
    TrustedDomainSearchSource,
    load_trusted_domains,
)
from .data_sources.base import RecordBatch
from .enrichment import LanguageModel, build_estimate_prompt, build_fusion_prompt
from .processing import DisciplineTable, build_payload, mark_as_estimate, parse_model_output
from .processing.normalization import strip_metadata

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    payload: Dict[str, Any]
    mode: str
    registry_records: RecordBatch = field(default_factory=list)
    search_records: RecordBatch = field(default_factory=list)

    @property
    def estimated(self) -> bool:
        return self.mode == "estimate"


class EduStatsPipeline:
    """Registry lookup, trusted-domain search, then fusion or estimate."""

    def __init__(
        self,
        settings: EduStatsSettings,
        sources: Sequence[DataSource] | None = None,
        *,
        model: Optional[LanguageModel] = None,
    ) -> None:
        self.settings = settings
        self.sources = list(sources) if sources is not None else self._default_sources()
        self.model = model or LanguageModel(settings.openai)

    def _default_sources(self) -> list[DataSource]:
        sources: list[DataSource] = []
        if self.settings.registry.enabled:
            disciplines = DisciplineTable.load(self.settings.tables.disciplines_path)
            sources.append(OpenRegistrySource(self.settings.registry, disciplines))
        if self.settings.search.enabled:
            domains = load_trusted_domains(self.settings.tables.sources_path)
            sources.append(TrustedDomainSearchSource(self.settings.search, domains))
        return sources

    def run(self, school: str, program: str) -> PipelineResult:
        query = LookupQuery(school=school, program=program)
        self.model.ensure_ready()

        registry: RecordBatch = []
        snippets: RecordBatch = []
        for source in self.sources:
            records = self._collect(source, query)
            if getattr(source, "name", "") == OpenRegistrySource.name:
                registry.extend(records)
            else:
                snippets.extend(records)

        if registry or snippets:
            mode = "fusion"
            prompt = build_fusion_prompt(query, strip_metadata(registry), strip_metadata(snippets))
        else:
            mode = "estimate"
            prompt = build_estimate_prompt(query)
        logger.info(
            "Lookup %r / %r: %d registry, %d search records -> %s",
            school,
            program,
            len(registry),
            len(snippets),
            mode,
        )

        figures = parse_model_output(self.model.complete(prompt))
        if mode == "estimate":
            figures = mark_as_estimate(figures)
        return PipelineResult(
            payload=build_payload(figures, school=school, program=program),
            mode=mode,
            registry_records=registry,
            search_records=snippets,
        )

    def _collect(self, source: DataSource, query: LookupQuery) -> RecordBatch:
        try:
            batches = source.fetch(query)
        except RegistryUnavailable as exc:
            logger.warning("Registry lookup skipped: %s", exc)
            return []
        collected: RecordBatch = []
        for batch in batches:
            collected.extend(batch)
        return collected


__all__ = ["EduStatsPipeline", "PipelineResult"]
