import asyncio
import json
from typing import Any, Callable, List

import httpx
import pytest

from services.question_generator.app.errors import (
    NO_CONTENT,
    UPSTREAM_ERROR,
    NOT_JSON,
    FormatError,
    UpstreamError,
)
from services.question_generator.app.gemini import GeminiClient
from shared.settings import Settings


def _settings() -> Settings:
    return Settings(
        gl_api_key="secret",
        model="gemini-test",
        api_base="https://example.test/v1beta/models/",
        question_count=3,
    )


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> GeminiClient:
    return GeminiClient(_settings(), transport=httpx.MockTransport(handler))


def _run(client: GeminiClient, topic: str = "Cardiology") -> Any:
    return asyncio.run(client.generate_questions(topic))


def test_request_shape_and_endpoint() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_reply('{"topic": "Cardiology", "questions": []}'))

    data = _run(_client(handler))
    assert data == {"topic": "Cardiology", "questions": []}

    assert len(seen) == 1
    req = seen[0]
    assert req.method == "POST"
    assert req.url.path == "/v1beta/models/gemini-test:generateContent"
    assert req.url.params["key"] == "secret"
    body = json.loads(req.content)
    parts = body["contents"][0]["parts"]
    assert len(body["contents"]) == 1 and len(parts) == 1
    assert '"Cardiology"' in parts[0]["text"]
    assert "Generate 3 high-quality" in parts[0]["text"]


def test_fallback_extraction_scenario() -> None:
    text = 'Here you go: {"topic":"Cardiology","questions":[]} thanks'
    client = _client(lambda r: httpx.Response(200, json=_reply(text)))
    assert _run(client) == {"topic": "Cardiology", "questions": []}


def test_upstream_error_message_is_relayed_verbatim() -> None:
    payload = {"error": {"code": 400, "message": "API key not valid. Please pass a valid API key."}}
    client = _client(lambda r: httpx.Response(400, json=payload))
    with pytest.raises(UpstreamError) as ei:
        _run(client)
    assert ei.value.message == "API key not valid. Please pass a valid API key."
    assert ei.value.status_code == 500


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"finishReason": "SAFETY"}]},
        _reply(""),
    ],
)
def test_missing_text_is_upstream_error(payload: dict) -> None:
    client = _client(lambda r: httpx.Response(200, json=payload))
    with pytest.raises(UpstreamError) as ei:
        _run(client)
    assert ei.value.message == NO_CONTENT


def test_unparseable_text_is_format_error() -> None:
    client = _client(lambda r: httpx.Response(200, json=_reply("Sorry, I cannot help.")))
    with pytest.raises(FormatError) as ei:
        _run(client)
    assert ei.value.message == NOT_JSON


def test_transport_failure_is_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as ei:
        _run(_client(handler))
    assert ei.value.message == "connection refused"


def test_non_json_reply_body_is_upstream_error() -> None:
    client = _client(lambda r: httpx.Response(502, text="<html>Bad Gateway</html>"))
    with pytest.raises(UpstreamError) as ei:
        _run(client)
    assert ei.value.message.startswith("Invalid JSON from model API")


@pytest.mark.parametrize(
    "error, expected",
    [
        ({"code": 500, "message": ""}, ""),
        ({"code": 429, "message": "Resource has been exhausted"}, "Resource has been exhausted"),
        ({"code": 500, "status": "INTERNAL"}, UPSTREAM_ERROR),
        ("boom", UPSTREAM_ERROR),
    ],
)
def test_upstream_error_without_usable_message(error: Any, expected: str) -> None:
    client = _client(lambda r: httpx.Response(500, json={"error": error}))
    with pytest.raises(UpstreamError) as ei:
        _run(client)
    assert ei.value.message == expected
