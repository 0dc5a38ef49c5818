"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from helpdesk.presentation.api.v1.endpoints.health import router as health_router
from helpdesk.presentation.api.v1.endpoints.field_types import router as field_types_router
from helpdesk.presentation.api.v1.endpoints.tickets import router as tickets_router
from helpdesk.presentation.api.v1.endpoints.ticket_metadata import router as ticket_metadata_router
from helpdesk.presentation.api.v1.endpoints.messages import router as messages_router
from helpdesk.presentation.api.v1.endpoints.tags import router as tags_router
from helpdesk.presentation.api.v1.endpoints.teams import router as teams_router
from helpdesk.presentation.api.v1.endpoints.users import router as users_router
from helpdesk.presentation.api.v1.endpoints.skills import router as skills_router
from helpdesk.presentation.api.v1.endpoints.power_tools import router as power_tools_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(field_types_router)
router.include_router(tickets_router)
router.include_router(ticket_metadata_router)
router.include_router(messages_router)
router.include_router(tags_router)
router.include_router(teams_router)
router.include_router(users_router)
router.include_router(skills_router)
router.include_router(power_tools_router)
