"""ChatProvider adapter for OpenRouter's OpenAI-compatible chat completions.

Each admin command is a single request: the system instruction, the admin's
text and the ``listOperators`` tool schema go out, and the model's text or
tool calls come back. The caller runs the tool; nothing is executed here.
"""

import logging
from typing import Any

import httpx

from helpdesk.application.interfaces.chat_provider import ChatProvider
from helpdesk.domain.entities import (
    ChatMessage,
    ChatCompletionResult,
    TokenUsage,
    ToolCall,
    ToolCallFunction,
)
from helpdesk.domain.exceptions import ChatProviderError

logger = logging.getLogger(__name__)

PROVIDER = "openrouter"


def _bad_gateway(message: str) -> ChatProviderError:
    return ChatProviderError(provider=PROVIDER, status_code=502, message=message)


def _parse_tool_calls(raw_calls: list[dict[str, Any]] | None) -> list[ToolCall]:
    calls = []
    for raw in raw_calls or []:
        function = raw.get("function") or {}
        if not function.get("name"):
            logger.warning("Ignoring tool call without a function name: %r", raw)
            continue
        calls.append(
            ToolCall(
                id=raw.get("id", ""),
                type=raw.get("type", "function"),
                function=ToolCallFunction(function["name"], function.get("arguments") or "{}"),
            )
        )
    return calls


def _parse_usage(raw: dict[str, Any] | None) -> TokenUsage:
    raw = raw or {}
    return TokenUsage(
        prompt_tokens=raw.get("prompt_tokens", 0),
        completion_tokens=raw.get("completion_tokens", 0),
        total_tokens=raw.get("total_tokens", 0),
        cost=raw.get("cost"),
    )


class OpenRouterClient(ChatProvider):
    """Sends command completions to OpenRouter with httpx.

    An ``http_client`` may be injected (tests use ``httpx.MockTransport``);
    otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_name: str = "Helpdesk Admin",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
    ):
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._app_name = app_name
        self._http_client = http_client
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return PROVIDER

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        tools: list[dict[str, Any]] | None = None,
        tool_choice: str | dict[str, Any] | None = None,
    ) -> ChatCompletionResult:
        if not self._api_key:
            raise ChatProviderError(PROVIDER, 401, "OpenRouter API key is not configured")

        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        # tool_choice without tools is rejected upstream
        if tools:
            payload["tools"] = tools
            if tool_choice is not None:
                payload["tool_choice"] = tool_choice

        logger.debug("POST %s model=%s tools=%d", self._url, model, len(tools or []))
        response = await self._post(payload)

        if response.status_code != 200:
            raise ChatProviderError(PROVIDER, response.status_code, self._error_message(response))
        try:
            data = response.json()
        except ValueError as exc:
            raise _bad_gateway("OpenRouter returned a non-JSON response") from exc
        return self._to_result(data)

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": self._app_name,
        }
        try:
            if self._http_client is not None:
                return await self._http_client.post(self._url, headers=headers, json=payload)
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await client.post(self._url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise _bad_gateway(f"Request to OpenRouter failed: {exc}") from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error = response.json().get("error")
        except (ValueError, AttributeError):
            return response.text
        if isinstance(error, dict):
            return error.get("message") or response.text
        return str(error) if error else response.text

    @staticmethod
    def _to_result(data: dict[str, Any]) -> ChatCompletionResult:
        # OpenRouter reports some upstream failures inside a 200 body
        if data.get("error"):
            error = data["error"]
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
            raise ChatProviderError(PROVIDER, code if isinstance(code, int) else 502, message)

        choices = data.get("choices") or []
        if not choices:
            raise _bad_gateway("No choices in response")

        choice = choices[0]
        message = choice.get("message") or {}
        return ChatCompletionResult(
            model=data.get("model", ""),
            content=message.get("content") or "",
            finish_reason=choice.get("finish_reason") or "stop",
            usage=_parse_usage(data.get("usage")),
            provider=PROVIDER,
            tool_calls=_parse_tool_calls(message.get("tool_calls")),
        )
