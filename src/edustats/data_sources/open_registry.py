"""National open-data registry: Master's graduates' professional insertion."""

from __future__ import annotations

import logging
import math
import re
from datetime import UTC, datetime
from statistics import mean
from typing import Any, Iterable, List, Optional

import requests

from .base import METADATA_KEY, DataSource, LookupQuery, RecordBatch, SourceMetadata
from ..config import RegistrySettings
from ..processing.disciplines import DisciplineTable, fold, is_masters_program

logger = logging.getLogger(__name__)

RATE_FIELD = "taux_dinsertion"
NET_SALARY_FIELD = "salaire_net_median_des_emplois_a_temps_plein"
GROSS_SALARY_FIELD = "salaire_brut_annuel_estime"
ESTABLISHMENT_FIELDS = ("etablissement", "etablissementactuel")


class RegistryUnavailable(RuntimeError):
    """The registry could not be reached or returned an unreadable body."""


class OpenRegistrySource(DataSource):
    """Looks up insertion statistics for the discipline matching a Master's program."""

    name = "open_registry"

    def __init__(
        self,
        settings: RegistrySettings,
        disciplines: DisciplineTable,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.disciplines = disciplines
        self.session = session or requests.Session()

    @property
    def records_url(self) -> str:
        base = self.settings.base_url.rstrip("/")
        return f"{base}/catalog/datasets/{self.settings.dataset}/records"

    def discipline_for(self, query: LookupQuery) -> Optional[str]:
        if not is_masters_program(query.program):
            return None
        return self.disciplines.match(query.program)

    def fetch(self, query: LookupQuery) -> Iterable[RecordBatch]:
        if not self.settings.enabled:
            return []
        discipline = self.discipline_for(query)
        if discipline is None:
            logger.info("No registry discipline for program %r", query.program)
            return []

        rows = self._download(discipline, school=query.school)
        if not rows and query.school:
            logger.info("No registry rows for %r, using all of %r", query.school, discipline)
            rows = self._download(discipline)
        summary = summarize_rows(rows, discipline=discipline, school=query.school)
        if summary is None:
            return []
        summary[METADATA_KEY] = SourceMetadata(
            source=self.name,
            retrieved_at=datetime.now(UTC),
            confidence=0.85,
        )
        return [[summary]]

    def _download(self, discipline: str, school: str = "") -> List[dict]:
        where = f'discipline="{_escape(discipline)}"'
        if school:
            where += f' AND search(etablissement, "{_escape(school)}")'
        params = {
            "where": where,
            "order_by": "annee desc",
            "limit": self.settings.max_results,
        }
        try:
            response = self.session.get(
                self.records_url, params=params, timeout=self.settings.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise RegistryUnavailable(
                f"Could not download registry records for {discipline!r}"
            ) from exc

        rows = data.get("results", []) if isinstance(data, dict) else data
        if not isinstance(rows, list):
            return []
        return [row for row in rows if isinstance(row, dict)]


def summarize_rows(rows: List[dict], *, discipline: str, school: str = "") -> Optional[dict]:
    """Average the most recent survey year, preferring rows of the queried school."""

    if not rows:
        return None

    years = [str(row.get("annee")) for row in rows if row.get("annee")]
    latest = max(years) if years else None
    if latest is not None:
        rows = [row for row in rows if str(row.get("annee")) == latest]

    school_key = fold(school)
    if school_key:
        own = [
            row
            for row in rows
            if any(school_key in fold(str(row.get(f) or "")) for f in ESTABLISHMENT_FIELDS)
        ]
        if own:
            rows = own

    rates = _numbers(rows, RATE_FIELD)
    net = _numbers(rows, NET_SALARY_FIELD)
    gross = _numbers(rows, GROSS_SALARY_FIELD)
    if not (rates or net or gross):
        return None

    establishments = sorted(
        {str(row.get("etablissement")) for row in rows if row.get("etablissement")}
    )
    situations = sorted({str(row.get("situation")) for row in rows if row.get("situation")})
    return {
        "discipline": discipline,
        "year": latest,
        "situation": ", ".join(situations) or None,
        "employabilityRate": _rounded(rates),
        "medianNetSalary": _rounded(net),
        "annualGrossSalary": _rounded(gross),
        "establishments": establishments[:10],
        "sampleSize": len(rows),
    }


def to_number(value: Any) -> Optional[float]:
    """Parse ``92``, ``"92"``, ``"1 950"`` or ``"92,5"``; markers like ``nd`` give None."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None
    cleaned = re.sub(r"[\s%€]", "", value).replace(",", ".")
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _numbers(rows: List[dict], field: str) -> List[float]:
    values = (to_number(row.get(field)) for row in rows)
    return [value for value in values if value is not None]


def _rounded(values: List[float]) -> Optional[float]:
    return round(mean(values), 1) if values else None


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


__all__ = ["OpenRegistrySource", "RegistryUnavailable", "summarize_rows", "to_number"]
