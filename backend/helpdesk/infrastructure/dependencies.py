"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from helpdesk.config import get_settings
from helpdesk.application.interfaces import ChatProvider
from helpdesk.application.services import (
    ChangeFeed,
    CommandDispatcher,
    FieldCatalogService,
    LLMUsageLogger,
    MessageService,
    SkillService,
    TagService,
    TeamService,
    TicketMetadataService,
    TicketService,
    UserService,
)
from helpdesk.infrastructure.database.session import async_session_factory, get_db_session
from helpdesk.infrastructure.database.repositories import (
    SQLAlchemyFieldDefinitionRepository,
    SQLAlchemyMessageRepository,
    SQLAlchemyMetadataValueRepository,
    SQLAlchemyServiceRequestLogRepository,
    SQLAlchemySkillRepository,
    SQLAlchemyTagRepository,
    SQLAlchemyTeamRepository,
    SQLAlchemyTicketRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyVocabularyRepository,
)
from helpdesk.infrastructure.openrouter import OpenRouterClient


@lru_cache
def get_change_feed() -> ChangeFeed:
    """Process-wide change feed shared by publishers and SSE subscribers."""
    return ChangeFeed()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session_factory


def get_chat_provider() -> ChatProvider:
    settings = get_settings()
    return OpenRouterClient(
        api_key=settings.openrouter_api_key,
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
    )


async def get_field_catalog_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[FieldCatalogService, None]:
    yield FieldCatalogService(SQLAlchemyFieldDefinitionRepository(session))


async def get_ticket_metadata_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TicketMetadataService, None]:
    yield TicketMetadataService(
        values=SQLAlchemyMetadataValueRepository(session),
        fields=SQLAlchemyFieldDefinitionRepository(session),
        tickets=SQLAlchemyTicketRepository(session),
        users=SQLAlchemyUserRepository(session),
    )


async def get_ticket_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TicketService, None]:
    yield TicketService(
        tickets=SQLAlchemyTicketRepository(session),
        teams=SQLAlchemyTeamRepository(session),
        users=SQLAlchemyUserRepository(session),
    )


async def get_tag_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TagService, None]:
    yield TagService(SQLAlchemyTagRepository(session), SQLAlchemyTicketRepository(session))


async def get_team_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TeamService, None]:
    yield TeamService(SQLAlchemyTeamRepository(session), SQLAlchemyUserRepository(session))


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserService, None]:
    yield UserService(SQLAlchemyUserRepository(session), SQLAlchemyTeamRepository(session))


async def get_skill_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SkillService, None]:
    yield SkillService(SQLAlchemySkillRepository(session), SQLAlchemyUserRepository(session))


async def get_message_service(
    session: AsyncSession = Depends(get_db_session),
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> AsyncGenerator[MessageService, None]:
    yield MessageService(
        messages=SQLAlchemyMessageRepository(session),
        tickets=SQLAlchemyTicketRepository(session),
        users=SQLAlchemyUserRepository(session),
        change_feed=change_feed,
        commit=session.commit,
    )


async def get_command_dispatcher(
    session: AsyncSession = Depends(get_db_session),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    chat_provider: ChatProvider = Depends(get_chat_provider),
) -> AsyncGenerator[CommandDispatcher, None]:
    """Dispatcher whose vocabulary reads use their own sessions so they can run concurrently."""
    settings = get_settings()
    yield CommandDispatcher(
        chat_provider=chat_provider,
        vocabulary_repo=SQLAlchemyVocabularyRepository(session_factory),
        user_repo=SQLAlchemyUserRepository(session),
        usage_logger=LLMUsageLogger(SQLAlchemyServiceRequestLogRepository(session)),
        model=settings.command_model,
        temperature=settings.command_temperature,
        max_tokens=settings.command_max_tokens,
    )
