from __future__ import annotations

from typing import Optional

import pytest

from edustats.config import EduStatsSettings, OpenAISettings
from edustats.enrichment import LanguageModel
from fakes import FakeChatClient


@pytest.fixture()
def settings() -> EduStatsSettings:
    return EduStatsSettings.from_dict({"openai": {"api_key": "sk-test"}})


@pytest.fixture()
def make_model():
    def _make(content: Optional[str], error: Optional[Exception] = None) -> LanguageModel:
        return LanguageModel(OpenAISettings(api_key="sk-test"), client=FakeChatClient(content, error))

    return _make
