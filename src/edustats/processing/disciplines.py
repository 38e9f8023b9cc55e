"""Keyword matching between program names and registry disciplines."""

from __future__ import annotations

import json
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

MASTERS_PATTERN = re.compile(r"\b(masters?|mastere|msc|m1|m2)\b", re.IGNORECASE)


def fold(value: str) -> str:
    """Lowercase and strip accents so ``Mastère`` and ``mastere`` compare equal."""

    decomposed = unicodedata.normalize("NFKD", value or "")
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return " ".join(stripped.replace("\u2019", "'").lower().split())


def is_masters_program(program: str) -> bool:
    return bool(MASTERS_PATTERN.search(fold(program)))


@dataclass
class DisciplineTable:
    """Ordered ``(label, keywords)`` pairs; the first matching entry wins."""

    entries: List[Tuple[str, List[str]]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "DisciplineTable":
        entries: List[Tuple[str, List[str]]] = []
        for item in data.get("disciplines", []) if isinstance(data, dict) else []:
            if not isinstance(item, dict) or not item.get("label"):
                continue
            keywords = [fold(str(k)) for k in item.get("keywords") or [] if str(k).strip()]
            entries.append((str(item["label"]), keywords))
        return cls(entries)

    @classmethod
    def load(cls, path: Path | str) -> "DisciplineTable":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Could not load discipline table from %s: %s", path, exc)
            return cls()
        return cls.from_dict(data)

    def match(self, program: str) -> Optional[str]:
        haystack = fold(program)
        if not haystack:
            return None
        for label, keywords in self.entries:
            if any(keyword in haystack for keyword in keywords):
                return label
        return None

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ["DisciplineTable", "MASTERS_PATTERN", "fold", "is_masters_program"]
