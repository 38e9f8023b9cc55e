"""Normalization helpers for model output and response payloads."""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from typing import Any, Dict, Iterable, List, Optional

from ..data_sources.base import METADATA_KEY

FIGURE_KEYS = ("cost", "averageSalary", "employabilityRate")
PARSE_FAILURE_SOURCE = "Unparsed model response"
ESTIMATE_MARKER = "estimate"
ESTIMATE_SOURCE = "AI estimate (no verified source found)"

_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")
_OBJECT = re.compile(r"\{[\s\S]*\}")


def empty_figures(source: Optional[str] = None) -> Dict[str, Any]:
    figures: Dict[str, Any] = {key: None for key in FIGURE_KEYS}
    figures["source"] = source
    return figures


def parse_model_output(raw: Optional[str]) -> Dict[str, Any]:
    """Optimistically decode the model answer into the four payload figures.

    Code fences and chatter around the outermost JSON object are tolerated.
    Anything that does not decode to an object yields null figures with
    ``source`` set to the parse-failure marker.
    """

    text = _FENCE.sub("", (raw or "").strip())
    match = _OBJECT.search(text)
    if not match:
        return empty_figures(PARSE_FAILURE_SOURCE)
    try:
        data = json.loads(match.group())
    except json.JSONDecodeError:
        return empty_figures(PARSE_FAILURE_SOURCE)
    if not isinstance(data, dict):
        return empty_figures(PARSE_FAILURE_SOURCE)

    figures = {key: data.get(key) for key in FIGURE_KEYS}
    source = data.get("source")
    figures["source"] = str(source) if source not in (None, "") else None
    return figures


def mark_as_estimate(figures: Dict[str, Any]) -> Dict[str, Any]:
    """Ensure an estimate answer is labelled as such, unless parsing already failed."""

    marked = dict(figures)
    source = marked.get("source") or ""
    if source == PARSE_FAILURE_SOURCE:
        return marked
    if ESTIMATE_MARKER not in source.lower():
        marked["source"] = ESTIMATE_SOURCE
    return marked


def build_payload(
    figures: Dict[str, Any],
    *,
    school: str,
    program: str,
    refreshed_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    payload = {key: figures.get(key) for key in FIGURE_KEYS}
    payload["source"] = figures.get("source")
    payload["schoolQueried"] = school
    payload["programQueried"] = program
    payload["refreshedAt"] = (refreshed_at or datetime.now(UTC)).isoformat()
    return payload


def strip_metadata(records: Iterable[dict], key: str = METADATA_KEY) -> List[dict]:
    """Return JSON-friendly copies of evidence records for prompting."""

    cleaned: List[dict] = []
    for record in records:
        updated = {k: v for k, v in record.items() if k != key}
        metadata = record.get(key)
        if metadata is not None:
            updated["retrievedAt"] = metadata.retrieved_at.isoformat(timespec="seconds")
        cleaned.append(updated)
    return cleaned


__all__ = [
    "FIGURE_KEYS",
    "PARSE_FAILURE_SOURCE",
    "ESTIMATE_MARKER",
    "ESTIMATE_SOURCE",
    "empty_figures",
    "parse_model_output",
    "mark_as_estimate",
    "build_payload",
    "strip_metadata",
]
