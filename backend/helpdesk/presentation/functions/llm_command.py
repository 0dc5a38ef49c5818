"""``/functions/v1/llm-command``: natural-language operator query over HTTP."""

import logging
import secrets

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from helpdesk.application.schemas import command_metadata
from helpdesk.application.services import CommandDispatcher
from helpdesk.config import get_settings
from helpdesk.domain.exceptions import CommandDispatchError
from helpdesk.infrastructure.dependencies import get_command_dispatcher
from helpdesk.presentation.functions.cors import CORS_HEADERS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Functions"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@router.options("/llm-command")
async def llm_command_preflight() -> PlainTextResponse:
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/llm-command")
async def llm_command(
    request: Request,
    authorization: str | None = Header(None),
    dispatcher: CommandDispatcher = Depends(get_command_dispatcher),
) -> JSONResponse:
    """Run one command and return its output, metadata and execution trace."""
    token = _bearer_token(authorization)
    if token is None:
        return _error(401, "Missing authorization header")
    expected = get_settings().command_api_token
    if expected and not secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        return _error(401, "Invalid authorization token")

    try:
        body = await request.json()
    except ValueError:
        body = None
    text = body.get("text") if isinstance(body, dict) else None
    if not isinstance(text, str) or not text.strip():
        return _error(400, "Please provide a text string in the request body")

    try:
        outcome = await dispatcher.dispatch(text)
    except CommandDispatchError as e:
        return _error(e.status_code, e.message)
    except Exception as e:
        logger.exception("llm-command failed")
        return _error(500, str(e))

    return JSONResponse(
        {
            "input": outcome.input,
            "output": outcome.output,
            "description": outcome.description,
            "metadata": command_metadata(outcome).model_dump(),
            "trace": outcome.trace.to_list(),
        },
        headers=CORS_HEADERS,
    )
