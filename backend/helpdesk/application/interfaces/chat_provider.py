"""Abstract chat provider interface: port for AI provider adapters."""

from abc import ABC, abstractmethod
from typing import Any

from helpdesk.domain.entities import ChatMessage, ChatCompletionResult


class ChatProvider(ABC):
    """Port: defines what the application layer needs from any chat provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider (e.g. 'openrouter')."""
        ...

    @abstractmethod
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
        """Send a single non-streaming chat completion request.

        Args:
            messages: The conversation history.
            model: The model identifier (e.g. 'openai/gpt-4o-mini').
            temperature: Sampling temperature (0.0–2.0).
            max_tokens: Maximum tokens in the response.
            tools: OpenAI-format function tool definitions the model may call.
            tool_choice: "auto", "none", or a specific function selector.

        Returns:
            A ChatCompletionResult; requested tool calls are in ``tool_calls``
            and are not executed by the provider.

        Raises:
            ChatProviderError: If the provider returns an error.
        """
        ...
