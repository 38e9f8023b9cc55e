from __future__ import annotations

import pytest
from openai import OpenAIError

from edustats.config import OpenAISettings
from edustats.enrichment import LanguageModel, LanguageModelError, MissingCredentials
from fakes import FakeChatClient


def test_complete_sends_system_and_user_messages() -> None:
    client = FakeChatClient('{"cost": 1}')
    model = LanguageModel(OpenAISettings(api_key="sk-test", model="gpt-test"), client=client)

    assert model.complete("hello") == '{"cost": 1}'
    sent = client.completions.kwargs[0]
    assert sent["model"] == "gpt-test"
    assert sent["response_format"] == {"type": "json_object"}
    assert [m["role"] for m in sent["messages"]] == ["system", "user"]
    assert sent["messages"][1]["content"] == "hello"


def test_empty_content_becomes_empty_string() -> None:
    model = LanguageModel(OpenAISettings(api_key="sk-test"), client=FakeChatClient(None))

    assert model.complete("hello") == ""


def test_sdk_errors_are_wrapped() -> None:
    model = LanguageModel(OpenAISettings(api_key="sk-test"), client=FakeChatClient(None, OpenAIError("boom")))

    with pytest.raises(LanguageModelError):
        model.complete("hello")


def test_missing_key_is_reported() -> None:
    model = LanguageModel(OpenAISettings(api_key=""))

    with pytest.raises(MissingCredentials, match="OPENAI_API_KEY"):
        model.ensure_ready()
