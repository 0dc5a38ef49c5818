"""Concrete repository for LLM request logs backed by SQLAlchemy."""

import json

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.application.interfaces import ServiceRequestLogRepository
from helpdesk.domain.entities import ServiceRequestLog
from helpdesk.infrastructure.database.models import ServiceRequestLogModel

_COPIED_FIELDS = (
    "model",
    "provider",
    "prompt_tokens",
    "completion_tokens",
    "total_tokens",
    "cost",
    "duration_ms",
    "status",
    "error_message",
    "feature",
    "tool_call_count",
    "request_context",
)


class SQLAlchemyServiceRequestLogRepository(ServiceRequestLogRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ServiceRequestLogModel) -> ServiceRequestLog:
        return ServiceRequestLog(
            id=model.id,
            tools_called=json.loads(model.tools_called) if model.tools_called else None,
            created_at=model.created_at,
            **{name: getattr(model, name) for name in _COPIED_FIELDS},
        )

    async def create(self, log: ServiceRequestLog) -> ServiceRequestLog:
        model = ServiceRequestLogModel(
            tools_called=json.dumps(log.tools_called) if log.tools_called else None,
            created_at=log.created_at,
            **{name: getattr(log, name) for name in _COPIED_FIELDS},
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def list_recent(
        self, *, feature: str | None = None, limit: int = 100
    ) -> list[ServiceRequestLog]:
        stmt = select(ServiceRequestLogModel)
        if feature is not None:
            stmt = stmt.where(ServiceRequestLogModel.feature == feature)
        stmt = stmt.order_by(ServiceRequestLogModel.created_at.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
