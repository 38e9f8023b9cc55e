"""Configuration models for the edu-stats lookup."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass
class OpenAISettings:
    api_key: str = ""
    model: str = "gpt-4.1-mini"
    base_url: Optional[str] = None
    timeout: float = 60.0
    temperature: float = 0.2


@dataclass
class SearchSettings:
    enabled: bool = True
    base_url: str = "https://api.duckduckgo.com/"
    timeout: float = 10.0
    query_suffix: str = "coût salaire employabilité"


@dataclass
class RegistrySettings:
    enabled: bool = True
    base_url: str = "https://data.enseignementsup-recherche.gouv.fr/api/explore/v2.1"
    dataset: str = "fr-esr-insertion_professionnelle-master"
    max_results: int = 100
    timeout: float = 15.0


@dataclass
class TableSettings:
    sources_path: Path = DATA_DIR / "sources.json"
    disciplines_path: Path = DATA_DIR / "disciplines.json"


@dataclass
class EduStatsSettings:
    openai: OpenAISettings = field(default_factory=OpenAISettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    registry: RegistrySettings = field(default_factory=RegistrySettings)
    tables: TableSettings = field(default_factory=TableSettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EduStatsSettings":
        settings = cls()
        settings._update_from_dict(data)
        return settings

    @classmethod
    def from_file(cls, path: Path | str) -> "EduStatsSettings":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        if path.suffix.lower() == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        elif path.suffix.lower() in {".toml", ".tml"}:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        else:
            raise ValueError("Unsupported config format. Use TOML or JSON.")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = "EDUSTATS_") -> "EduStatsSettings":
        data: Dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            nested_keys = key[len(prefix) :].lower().split("__")
            current = data
            for part in nested_keys[:-1]:
                current = current.setdefault(part, {})
            current[nested_keys[-1]] = _coerce_env_value(value)
        settings = cls.from_dict(data)
        if not settings.openai.api_key:
            settings.openai.api_key = os.getenv("OPENAI_API_KEY", "")
        return settings

    def _update_from_dict(self, data: Dict[str, Any]) -> None:
        if "openai" in data:
            self.openai = _merge_dataclass(OpenAISettings, self.openai, data["openai"])
            # keys and model names must stay strings even if they look numeric
            self.openai.api_key = str(self.openai.api_key or "")
            self.openai.model = str(self.openai.model)
        if "search" in data:
            self.search = _merge_dataclass(SearchSettings, self.search, data["search"])
        if "registry" in data:
            self.registry = _merge_dataclass(
                RegistrySettings, self.registry, data["registry"]
            )
        if "tables" in data:
            tables = _merge_dataclass(TableSettings, self.tables, data["tables"])
            tables.sources_path = Path(tables.sources_path)
            tables.disciplines_path = Path(tables.disciplines_path)
            self.tables = tables


def _coerce_env_value(value: str) -> Any:
    lower = value.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower.isdigit():
        return int(lower)
    try:
        return float(value)
    except ValueError:
        return value


def _merge_dataclass(cls, current, overrides):
    values = asdict(current)
    values.update(overrides)
    return cls(**values)


__all__ = [
    "OpenAISettings",
    "SearchSettings",
    "RegistrySettings",
    "TableSettings",
    "EduStatsSettings",
]
