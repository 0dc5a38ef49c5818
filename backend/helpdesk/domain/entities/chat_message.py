"""Chat completion entities exchanged with the reasoning model."""

from dataclasses import dataclass, field


@dataclass
class ToolCallFunction:
    name: str
    arguments: str  # raw JSON text as produced by the model


@dataclass
class ToolCall:
    """A function the model asked us to run; never executed by the provider."""

    id: str
    type: str
    function: ToolCallFunction


@dataclass
class ChatMessage:
    role: str  # "system" | "user"
    content: str = ""


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cost: float | None = None  # USD, only when the provider reports it


@dataclass
class ChatCompletionResult:
    """One completion: plain text in ``content`` and/or requested ``tool_calls``."""

    model: str
    content: str
    finish_reason: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    provider: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)

    def tool_call(self, name: str) -> ToolCall | None:
        """First requested call of the function ``name``, if any."""
        return next((tc for tc in self.tool_calls if tc.function.name == name), None)
