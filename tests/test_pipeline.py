from __future__ import annotations

from datetime import datetime

import pytest

from edustats.config import EduStatsSettings
from edustats.data_sources import RegistryUnavailable
from edustats.enrichment import MissingCredentials
from edustats.pipeline import EduStatsPipeline
from edustats.processing.normalization import PARSE_FAILURE_SOURCE
from fakes import FakeSource

FUSED = '{"cost": 15000, "averageSalary": 41000, "employabilityRate": 92, "source": "open_registry, cereq.fr"}'


@pytest.fixture()
def registry_batch() -> list:
    return [{"discipline": "Informatique", "year": "2021", "employabilityRate": 93.0, "medianNetSalary": 2300.0}]


@pytest.fixture()
def snippet_batch() -> list:
    return [{"domain": "cereq.fr", "snippet": "Salaire médian 2 300 € net"}]


def test_pipeline_fuses_registry_and_search(settings, make_model, registry_batch, snippet_batch) -> None:
    model = make_model(FUSED)
    sources = [FakeSource("open_registry", registry_batch), FakeSource("trusted_domain_search", snippet_batch)]
    pipeline = EduStatsPipeline(settings, sources=sources, model=model)

    result = pipeline.run("Université de Bordeaux", "Master Informatique")

    assert result.mode == "fusion"
    assert not result.estimated
    assert result.payload["cost"] == 15000
    assert result.payload["schoolQueried"] == "Université de Bordeaux"
    assert result.payload["programQueried"] == "Master Informatique"
    prompt = model.client.completions.prompts[0]
    assert "Never invent a value" in prompt
    assert "Informatique" in prompt
    assert "cereq.fr" in prompt


def test_pipeline_falls_back_to_estimate(settings, make_model) -> None:
    model = make_model('{"cost": 8000, "averageSalary": 30000, "employabilityRate": 80, "source": "school website"}')
    pipeline = EduStatsPipeline(settings, sources=[FakeSource("open_registry"), FakeSource("trusted_domain_search")], model=model)

    result = pipeline.run("École X", "Bachelor Y")

    assert result.estimated
    assert "estimate" in result.payload["source"].lower()
    assert result.payload["cost"] == 8000
    assert "best estimate" in model.client.completions.prompts[0]


def test_unparsable_model_output(settings, make_model, snippet_batch) -> None:
    pipeline = EduStatsPipeline(
        settings, sources=[FakeSource("trusted_domain_search", snippet_batch)], model=make_model("Sorry, I can't help.")
    )

    payload = pipeline.run("ESSEC", "MSc Finance").payload

    assert payload["cost"] is None
    assert payload["averageSalary"] is None
    assert payload["employabilityRate"] is None
    assert payload["source"] == PARSE_FAILURE_SOURCE
    datetime.fromisoformat(payload["refreshedAt"])


def test_registry_failure_does_not_fail_the_request(settings, make_model, snippet_batch) -> None:
    sources = [
        FakeSource("open_registry", error=RegistryUnavailable("down")),
        FakeSource("trusted_domain_search", snippet_batch),
    ]
    pipeline = EduStatsPipeline(settings, sources=sources, model=make_model(FUSED))

    result = pipeline.run("Université de Bordeaux", "Master Informatique")

    assert result.mode == "fusion"
    assert result.registry_records == []
    assert len(result.search_records) == 1


def test_missing_credentials_stop_before_searching() -> None:
    settings = EduStatsSettings.from_dict({"openai": {"api_key": ""}})
    source = FakeSource("trusted_domain_search")
    pipeline = EduStatsPipeline(settings, sources=[source])

    with pytest.raises(MissingCredentials):
        pipeline.run("ESSEC", "MSc Finance")
    assert source.queries == []


def test_default_sources_follow_settings(tmp_path) -> None:
    settings = EduStatsSettings.from_dict(
        {
            "openai": {"api_key": "sk-test"},
            "registry": {"enabled": False},
            "tables": {"sources_path": str(tmp_path / "absent.json")},
        }
    )

    pipeline = EduStatsPipeline(settings)

    assert [source.name for source in pipeline.sources] == ["trusted_domain_search"]
