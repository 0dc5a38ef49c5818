"""LLM usage logger: single entry point for recording model requests.

Every call the command dispatcher makes is persisted with token usage,
cost, the tools the model asked for, and a clipped copy of the request.
"""

import logging

from helpdesk.application.interfaces import ServiceRequestLogRepository
from helpdesk.domain.entities import ServiceRequestLog
from helpdesk.domain.entities.chat_message import TokenUsage

logger = logging.getLogger(__name__)


class LLMUsageLogger:
    """Persists model usage and prints a one-line console summary.

    Usage:
        usage_logger = LLMUsageLogger(log_repository)
        await usage_logger.log_request(
            model="openai/gpt-4o-mini",
            provider="openrouter",
            feature="llm_command",
            usage=result.usage,
            duration_ms=420,
        )
    """

    def __init__(self, log_repository: ServiceRequestLogRepository):
        self._repo = log_repository

    async def log_request(
        self,
        *,
        model: str,
        provider: str,
        feature: str,
        usage: TokenUsage,
        duration_ms: int,
        status: str = "success",
        error_message: str | None = None,
        tools_called: list[str] | None = None,
        tool_call_count: int = 0,
        request_context: str | None = None,
    ) -> ServiceRequestLog:
        """Persist one request and log a summary line.

        Args:
            feature: Subsystem that made the call (e.g. "llm_command").
            usage: Token usage reported with the completion.
            duration_ms: Wall-clock time of the request.
            tools_called: Names of the tools the model requested.
            request_context: Short excerpt of the input, for auditing.
        """
        entry = ServiceRequestLog(
            model=model,
            provider=provider,
            feature=feature,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens,
            cost=usage.cost,
            duration_ms=duration_ms,
            status=status,
            error_message=error_message,
            tools_called=tools_called,
            tool_call_count=tool_call_count,
            request_context=request_context,
        )
        saved = await self._repo.create(entry)

        cost_str = f"${usage.cost:.6f}" if usage.cost else "n/a"
        logger.info(
            "LLM [%s] model=%s status=%s tokens=%d cost=%s %dms%s",
            feature,
            model,
            status,
            usage.total_tokens,
            cost_str,
            duration_ms,
            f" tools={tools_called}" if tools_called else "",
        )
        return saved

    async def log_error(
        self,
        *,
        model: str,
        provider: str,
        feature: str,
        duration_ms: int,
        error: Exception,
        request_context: str | None = None,
    ) -> ServiceRequestLog:
        """Record a failed request with zero usage."""
        return await self.log_request(
            model=model,
            provider=provider,
            feature=feature,
            usage=TokenUsage(),
            duration_ms=duration_ms,
            status="error",
            error_message=str(error),
            request_context=request_context,
        )
