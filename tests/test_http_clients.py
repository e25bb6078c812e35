"""Tests for the OpenAI coach client."""

import asyncio
from types import SimpleNamespace

import pytest

from fuel_hub.adapters.openai_coach_client import OpenAICoachClient


class _FakeResponses:
    def __init__(self, response: object) -> None:
        self.response = response
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return self.response


class _FakeOpenAI:
    def __init__(self, response: object) -> None:
        self.responses = _FakeResponses(response)


def _citation(url: str, title: str | None) -> SimpleNamespace:
    return SimpleNamespace(type="url_citation", url=url, title=title)


def test_generate_builds_text_request() -> None:
    fake = _FakeOpenAI(SimpleNamespace(output_text="Drink water.", output=[]))
    client = OpenAICoachClient(client=fake)

    reply = asyncio.run(
        client.generate(
            model="gpt-4.1-mini",
            instructions="Be a coach.",
            prompt="How much water?",
            temperature=0.7,
        )
    )

    assert reply.text == "Drink water."
    assert reply.sources == []
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4.1-mini"
    assert payload["instructions"] == "Be a coach."
    assert payload["temperature"] == 0.7
    assert payload["store"] is False
    assert "tools" not in payload
    content = payload["input"][0]["content"]  # type: ignore[index]
    assert content == [{"type": "input_text", "text": "How much water?"}]


def test_generate_with_image_and_web_search_collects_sources() -> None:
    message = SimpleNamespace(
        type="message",
        content=[
            SimpleNamespace(
                type="output_text",
                annotations=[
                    _citation("https://a.example/1", "Study A"),
                    _citation("https://a.example/1", "Study A again"),
                    _citation("https://b.example/2", None),
                    SimpleNamespace(type="file_citation"),
                ],
            )
        ],
    )
    response = SimpleNamespace(
        output_text="Findings",
        output=[SimpleNamespace(type="web_search_call"), message],
    )
    fake = _FakeOpenAI(response)
    client = OpenAICoachClient(client=fake)

    reply = asyncio.run(
        client.generate(
            model="gpt-4.1-mini",
            instructions="Be a coach.",
            prompt="Analyze",
            temperature=None,
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            web_search=True,
        )
    )

    assert [(source.title, source.uri) for source in reply.sources] == [
        ("Study A", "https://a.example/1"),
        ("Source", "https://b.example/2"),
    ]
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["tools"] == [{"type": "web_search"}]
    assert "temperature" not in payload
    content = payload["input"][0]["content"]  # type: ignore[index]
    assert content[1] == {
        "type": "input_image",
        "image_url": "data:image/jpeg;base64,ZmFrZQ==",
    }


def test_generate_rejects_empty_output() -> None:
    fake = _FakeOpenAI(SimpleNamespace(output_text="", output=[]))
    client = OpenAICoachClient(client=fake)

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.generate(
                model="gpt-4.1-mini",
                instructions="",
                prompt="Hi",
                temperature=None,
            )
        )
