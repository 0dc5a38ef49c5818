"""Top-level API router, mounted under ``/api``."""

from fastapi import APIRouter

from helpdesk.presentation.api.v1.router import router as v1_router

router = APIRouter()
router.include_router(v1_router)
