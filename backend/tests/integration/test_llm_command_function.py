"""HTTP tests for /functions/v1/llm-command and the power-tools endpoint."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from helpdesk.application.interfaces import ChatProvider
from helpdesk.config import Settings
from helpdesk.domain.entities import (
    ChatCompletionResult,
    ChatMessage,
    Team,
    TokenUsage,
    ToolCall,
    ToolCallFunction,
    User,
    UserRole,
)
from helpdesk.domain.exceptions import ChatProviderError
from helpdesk.infrastructure.database.repositories import SQLAlchemyTeamRepository, SQLAlchemyUserRepository
from helpdesk.infrastructure.dependencies import get_chat_provider

CORS_ORIGIN = "Access-Control-Allow-Origin"
AUTH = {"Authorization": "Bearer test-token"}


class ScriptedChatProvider(ChatProvider):
    """Answers every completion with the same tool call, or raises."""

    def __init__(self, arguments: dict | None = None, error: ChatProviderError | None = None):
        self._arguments = arguments or {}
        self._error = error

    @property
    def provider_name(self) -> str:
        return "scripted"

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        tools: list[dict] | None = None,
        tool_choice: str | dict | None = None,
    ) -> ChatCompletionResult:
        if self._error:
            raise self._error
        return ChatCompletionResult(
            model=model,
            content="",
            finish_reason="tool_calls",
            usage=TokenUsage(prompt_tokens=50, completion_tokens=10, total_tokens=60),
            tool_calls=[
                ToolCall(
                    id="call_1",
                    type="function",
                    function=ToolCallFunction("listOperators", json.dumps(self._arguments)),
                )
            ],
        )


async def _seed_operators(session) -> dict[str, User]:
    teams = SQLAlchemyTeamRepository(session)
    users = SQLAlchemyUserRepository(session)
    second_line = await teams.create(Team(name="Second Line"))
    await teams.create(Team(name="First Line"))
    ann = await users.create(User(full_name="Ann Lee", role=UserRole.AGENT))
    bob = await users.create(User(full_name="Bob Roy", role=UserRole.AGENT))
    await users.set_team(ann.id, second_line.id, is_team_lead=True)
    await users.set_team(bob.id, second_line.id)
    await session.commit()
    return {"ann": ann, "bob": bob}


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


# ── Function ──


@pytest.mark.asyncio
async def test_preflight_always_succeeds(functions_app):
    async with _client(functions_app) as client:
        response = await client.options("/llm-command")

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers[CORS_ORIGIN] == "*"
    assert "authorization" in response.headers["Access-Control-Allow-Headers"]


@pytest.mark.asyncio
async def test_missing_authorization_is_rejected(functions_app):
    functions_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider()

    async with _client(functions_app) as client:
        response = await client.post("/llm-command", json={"text": "who leads second line?"})

    assert response.status_code == 401
    assert response.json() == {"error": "Missing authorization header"}
    assert response.headers[CORS_ORIGIN] == "*"


@pytest.mark.asyncio
async def test_configured_token_must_match(functions_app, monkeypatch):
    monkeypatch.setattr(
        "helpdesk.presentation.functions.llm_command.get_settings",
        lambda: Settings(_env_file=None, command_api_token="expected-token"),
    )
    functions_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider()

    async with _client(functions_app) as client:
        response = await client.post("/llm-command", json={"text": "anyone"}, headers=AUTH)

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid authorization token"}


@pytest.mark.asyncio
async def test_non_ascii_token_is_rejected_not_crashed(functions_app, monkeypatch):
    monkeypatch.setattr(
        "helpdesk.presentation.functions.llm_command.get_settings",
        lambda: Settings(_env_file=None, command_api_token="expected-token"),
    )
    functions_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider()

    async with _client(functions_app) as client:
        response = await client.post(
            "/llm-command",
            json={"text": "anyone"},
            headers={"Authorization": "Bearer caf\u00e9".encode("latin-1")},
        )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid authorization token"}
    assert response.headers[CORS_ORIGIN] == "*"


@pytest.mark.asyncio
async def test_text_is_required(functions_app):
    functions_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider()

    async with _client(functions_app) as client:
        missing = await client.post("/llm-command", json={"prompt": "hi"}, headers=AUTH)
        not_a_string = await client.post("/llm-command", json={"text": 42}, headers=AUTH)
        not_json = await client.post("/llm-command", content=b"hello", headers=AUTH)

    for response in (missing, not_a_string, not_json):
        assert response.status_code == 400
        assert response.json() == {"error": "Please provide a text string in the request body"}


@pytest.mark.asyncio
async def test_command_returns_output_metadata_and_trace(functions_app, session):
    people = await _seed_operators(session)
    functions_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider(
        {"description": "Team leads of Second Line", "teamName": "Second Line", "isTeamLead": True}
    )

    async with _client(functions_app) as client:
        response = await client.post("/llm-command", json={"text": "who leads second line?"}, headers=AUTH)

    assert response.status_code == 200
    body = response.json()
    assert body["input"] == "who leads second line?"
    assert body["description"] == "Team leads of Second Line"
    assert [row["id"] for row in json.loads(body["output"])] == [people["ann"].id]
    assert [entry["type"] for entry in body["trace"]] == [
        "vocabulary",
        "model_call",
        "function_call",
        "function_result",
    ]
    assert body["trace"][0]["result"]["teams"] == ["First Line", "Second Line"]
    assert body["metadata"]["processedAt"].endswith("Z")
    assert isinstance(body["metadata"]["processingTimeMs"], int)
    assert response.headers[CORS_ORIGIN] == "*"


@pytest.mark.asyncio
async def test_provider_errors_keep_their_status(functions_app):
    functions_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider(
        error=ChatProviderError("scripted", 429, "Rate limit exceeded")
    )

    async with _client(functions_app) as client:
        response = await client.post("/llm-command", json={"text": "anyone"}, headers=AUTH)

    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded"}
    assert response.headers[CORS_ORIGIN] == "*"


# ── Power tools ──


@pytest.mark.asyncio
async def test_power_tools_delete_command_reports_consequences(api_app, api_client, session):
    people = await _seed_operators(session)
    api_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider(
        {"description": "Non-leads to remove", "isTeamLead": False, "action": "delete"}
    )

    response = await api_client.post("/v1/power-tools/command", json={"text": "remove all non-leads"})

    assert response.status_code == 200
    body = response.json()
    assert body["result"]["kind"] == "delete-pending"
    assert [p["id"] for p in body["result"]["subjects"]] == [people["bob"].id]
    assert body["consequences"].startswith("1 user will be permanently deleted")
    # Nothing is deleted until the bulk endpoint confirms it.
    assert (await api_client.get(f"/v1/users/{people['bob'].id}")).status_code == 200


@pytest.mark.asyncio
async def test_power_tools_listing_has_no_consequences(api_app, api_client, session):
    await _seed_operators(session)
    api_app.dependency_overrides[get_chat_provider] = lambda: ScriptedChatProvider(
        {"description": "Everyone", "outputFields": ["name", "team"]}
    )

    response = await api_client.post("/v1/power-tools/command", json={"text": "list everyone"})

    body = response.json()
    assert body["result"]["kind"] == "listing"
    assert body["consequences"] is None
    assert {p["team"] for p in body["result"]["subjects"]} == {"Second Line"}
