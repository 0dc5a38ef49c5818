"""Unit tests for the OpenRouterClient."""

import json

import httpx
import pytest

from helpdesk.infrastructure.openrouter.openrouter_client import OpenRouterClient
from helpdesk.domain.entities import ChatMessage
from helpdesk.domain.exceptions import ChatProviderError


# ── Helpers ──


def _mock_openrouter_response(
    content: str | None = "Hello!",
    model: str = "openai/gpt-4o-mini",
    tool_calls: list[dict] | None = None,
    cost: float | None = 0.00014,
) -> dict:
    """Build a mock OpenRouter JSON response."""
    message: dict = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-test123",
        "choices": [
            {
                "index": 0,
                "message": message,
                "finish_reason": "tool_calls" if tool_calls else "stop",
            }
        ],
        "model": model,
        "usage": {
            "prompt_tokens": 10,
            "completion_tokens": 5,
            "total_tokens": 15,
            **({"cost": cost} if cost is not None else {}),
        },
    }


def _client_returning(status_code: int = 200, body: dict | None = None, seen: list | None = None) -> OpenRouterClient:
    """Client whose transport answers every request with a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body or {})

    return OpenRouterClient(
        api_key="test-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


LIST_OPERATORS = {
    "type": "function",
    "function": {"name": "listOperators", "parameters": {"type": "object", "properties": {}}},
}


# ── Tests ──


@pytest.mark.asyncio
async def test_complete_parses_response():
    client = _client_returning(body=_mock_openrouter_response(content="The answer is 42."))

    result = await client.complete(
        messages=[ChatMessage(role="user", content="What is 42?")],
        model="openai/gpt-4o-mini",
    )

    assert result.content == "The answer is 42."
    assert result.model == "openai/gpt-4o-mini"
    assert result.usage.total_tokens == 15
    assert result.usage.cost == 0.00014
    assert result.provider == "openrouter"
    assert result.tool_calls == []


@pytest.mark.asyncio
async def test_complete_sends_tools_and_parses_tool_calls():
    seen: list[httpx.Request] = []
    body = _mock_openrouter_response(
        content=None,
        tool_calls=[
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": "listOperators", "arguments": '{"teamName": "Ops"}'},
            }
        ],
    )
    client = _client_returning(body=body, seen=seen)

    result = await client.complete(
        messages=[ChatMessage(role="user", content="Who is in Ops?")],
        model="openai/gpt-4o-mini",
        temperature=0.0,
        tools=[LIST_OPERATORS],
        tool_choice="auto",
    )

    payload = json.loads(seen[0].content)
    assert seen[0].url.path.endswith("/chat/completions")
    assert seen[0].headers["Authorization"] == "Bearer test-key"
    assert payload["tools"] == [LIST_OPERATORS]
    assert payload["tool_choice"] == "auto"
    assert payload["temperature"] == 0.0
    assert result.content == ""
    assert result.finish_reason == "tool_calls"
    assert result.tool_calls[0].function.name == "listOperators"
    assert json.loads(result.tool_calls[0].function.arguments) == {"teamName": "Ops"}


@pytest.mark.asyncio
async def test_tool_choice_is_omitted_without_tools():
    seen: list[httpx.Request] = []
    client = _client_returning(body=_mock_openrouter_response(), seen=seen)

    await client.complete(
        messages=[ChatMessage(role="user", content="Hi")],
        model="openai/gpt-4o-mini",
        tool_choice="auto",
    )

    payload = json.loads(seen[0].content)
    assert "tools" not in payload
    assert "tool_choice" not in payload


@pytest.mark.asyncio
async def test_complete_error_handling():
    """Non-200 responses raise ChatProviderError with the upstream status."""
    client = _client_returning(429, {"error": {"code": 429, "message": "Rate limit exceeded"}})

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="openai/gpt-4o-mini")

    assert exc_info.value.status_code == 429
    assert "Rate limit" in exc_info.value.message


@pytest.mark.asyncio
async def test_error_in_200_body_is_raised():
    client = _client_returning(200, {"error": {"code": 400, "message": "Model not found"}})

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="nope/model")

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Model not found"


@pytest.mark.asyncio
async def test_missing_choices_is_a_bad_gateway():
    client = _client_returning(200, {"id": "x", "choices": []})

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="openai/gpt-4o-mini")

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_transport_failure_is_a_bad_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = OpenRouterClient(
        api_key="test-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="openai/gpt-4o-mini")

    assert exc_info.value.status_code == 502
    assert "connection refused" in exc_info.value.message


@pytest.mark.asyncio
async def test_provider_name():
    """Provider name is correctly reported."""
    client = OpenRouterClient(api_key="test-key")
    assert client.provider_name == "openrouter"


@pytest.mark.asyncio
async def test_missing_api_key_fails_before_any_request():
    seen: list[httpx.Request] = []
    client = _client_returning(body=_mock_openrouter_response(), seen=seen)
    client._api_key = ""

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="openai/gpt-4o-mini")

    assert exc_info.value.status_code == 401
    assert seen == []


@pytest.mark.asyncio
async def test_tool_calls_without_a_name_are_ignored():
    body = _mock_openrouter_response(
        content=None,
        tool_calls=[
            {"id": "call_0", "type": "function", "function": {"arguments": "{}"}},
            {"id": "call_1", "type": "function", "function": {"name": "listOperators"}},
        ],
    )
    client = _client_returning(body=body)

    result = await client.complete(messages=[ChatMessage(role="user", content="Everyone")], model="m")

    assert [tc.id for tc in result.tool_calls] == ["call_1"]
    assert result.tool_calls[0].function.arguments == "{}"
    assert result.tool_call("listOperators") is result.tool_calls[0]
