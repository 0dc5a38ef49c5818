"""Domain entity for LLM request logging: tracks usage and cost."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class ServiceRequestLog:
    """A logged model request with token usage, cost and timing.

    Every call the command dispatcher makes to a chat provider is recorded,
    successful or not, so that usage can be audited per feature.
    """

    model: str
    provider: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cost: float | None = None
    duration_ms: int | None = None
    status: str = "success"  # "success" | "error"
    error_message: str | None = None
    feature: str = "llm_command"
    tools_called: list[str] | None = None
    tool_call_count: int = 0
    request_context: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
