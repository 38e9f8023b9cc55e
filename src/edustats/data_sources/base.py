"""Abstract base classes for edu-stats data sources."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Protocol, runtime_checkable

RecordBatch = List[dict]

METADATA_KEY = "__metadata__"


@dataclass(slots=True)
class LookupQuery:
    """A school/program pair as received from the caller."""

    school: str
    program: str

    def search_text(self, suffix: str = "") -> str:
        return " ".join(part for part in (self.school, self.program, suffix) if part)


@dataclass(slots=True)
class SourceMetadata:
    """Metadata attached to an evidence record."""

    source: str
    retrieved_at: datetime
    confidence: float


@runtime_checkable
class DataSource(Protocol):
    """Protocol representing a fetchable data source."""

    name: str

    def fetch(self, query: LookupQuery) -> Iterable[RecordBatch]:
        """Return an iterable of record batches for ``query``."""


__all__ = ["DataSource", "LookupQuery", "SourceMetadata", "RecordBatch", "METADATA_KEY"]
