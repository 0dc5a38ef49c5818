"""Command dispatcher: turns an admin's natural-language request into a
structured operator listing.

Flow for one command:
  1. Vocabulary: team, skill and proficiency names, read concurrently.
  2. Model call: one completion offering the single ``listOperators`` tool,
     whose enums are built from the vocabulary.
  3. Function call: the tool arguments become an OperatorQuery run against
     the user repository.
  4. Result: rows are serialized to JSON text and classified.

Every step appends to an ExecutionTrace which is returned with the result,
or attached to the CommandDispatchError when a step fails.
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from typing import Any

from helpdesk.application.interfaces import ChatProvider, UserRepository, VocabularyRepository
from helpdesk.application.services.llm_usage_logger import LLMUsageLogger
from helpdesk.application.services.result_disambiguator import parse_command_output
from helpdesk.domain.entities import (
    ChatMessage,
    CommandAction,
    CommandKind,
    CommandOutcome,
    CommandResult,
    ExecutionTrace,
    OperatorQuery,
    OperatorRecord,
    OUTPUT_FIELDS,
)
from helpdesk.domain.exceptions import ChatProviderError, CommandDispatchError
from helpdesk.infrastructure.logging.colored_logger import CommandLogger, CommandStage

logger = logging.getLogger(__name__)
clog = CommandLogger("CommandDispatcher")

TOOL_NAME = "listOperators"
FEATURE = "llm_command"

_SYSTEM_PROMPT = """\
You are the assistant of a helpdesk administration tool. Administrators ask
you about the operators (users) of the helpdesk: who is in which team, who
leads a team, and who has which skill at which proficiency.

When the request is about finding, listing, deleting or moving operators,
call the `listOperators` function. Use only the filter values offered by the
function schema and leave out filters the request does not mention.

- Set `action` to "delete" when the administrator wants the matching
  operators removed.
- Set `action` to "reassign" and `targetTeam` when they want the matching
  operators moved to another team.
- Otherwise set `action` to "list".

Always fill `description` with one short sentence describing what you are
returning. Answer other questions briefly in plain text without calling the
function.
"""


@dataclass
class Vocabulary:
    teams: list[str]
    skills: list[str]
    proficiencies: list[str]

    def as_dict(self) -> dict[str, list[str]]:
        return {"teams": self.teams, "skills": self.skills, "proficiencies": self.proficiencies}


def _enum_property(description: str, values: list[str]) -> dict[str, Any]:
    return {"type": "string", "description": description, "enum": values}


def build_list_operators_tool(vocabulary: Vocabulary) -> dict[str, Any]:
    """OpenAI-format function definition for ``listOperators``.

    Filters whose vocabulary is empty are left out, since an empty enum
    admits no value.
    """
    properties: dict[str, Any] = {
        "description": {
            "type": "string",
            "description": "Human-readable description of the result being returned.",
        },
    }
    if vocabulary.teams:
        properties["teamName"] = _enum_property("Only operators in this team.", vocabulary.teams)
    if vocabulary.skills:
        properties["skill"] = _enum_property("Only operators having this skill.", vocabulary.skills)
    if vocabulary.proficiencies:
        properties["proficiency"] = _enum_property(
            "Only operators with a skill at this proficiency level.", vocabulary.proficiencies
        )
    properties["isTeamLead"] = {
        "type": "boolean",
        "description": "true for team leads only, false for non-leads only.",
    }
    properties["outputFields"] = {
        "type": "array",
        "description": "Fields to include per operator; all fields when omitted.",
        "items": {"type": "string", "enum": list(OUTPUT_FIELDS)},
    }
    properties["action"] = {
        "type": "string",
        "description": "What the administrator wants done with the matching operators.",
        "enum": [action.value for action in CommandAction],
    }
    if vocabulary.teams:
        properties["targetTeam"] = _enum_property(
            "Team to move the operators to, when action is reassign.", vocabulary.teams
        )

    return {
        "type": "function",
        "function": {
            "name": TOOL_NAME,
            "description": "List helpdesk operators filtered by team, skill, proficiency and team-lead status.",
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": ["description"],
            },
        },
    }


class CommandDispatcher:
    """Runs one natural-language command end to end. No retries."""

    def __init__(
        self,
        chat_provider: ChatProvider,
        vocabulary_repo: VocabularyRepository,
        user_repo: UserRepository,
        usage_logger: LLMUsageLogger,
        *,
        model: str,
        temperature: float | None = 0.0,
        max_tokens: int | None = 1024,
    ):
        self._chat_provider = chat_provider
        self._vocabulary_repo = vocabulary_repo
        self._user_repo = user_repo
        self._usage_logger = usage_logger
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def dispatch(self, text: str) -> CommandOutcome:
        if not isinstance(text, str) or not text.strip():
            raise ValueError("Command text must be a non-empty string")

        started = time.perf_counter()
        trace = ExecutionTrace()
        clog.separator(f"Command: {self._clip(text, 40)}")

        vocabulary = await self._load_vocabulary(trace)
        completion = await self._call_model(text, vocabulary, trace)

        tool_call = completion.tool_call(TOOL_NAME)
        if tool_call is None:
            clog.step_complete(CommandStage.RESULT, "Model answered in plain text")
            return CommandOutcome(
                input=text,
                output=completion.content,
                description="",
                result=CommandResult(kind=CommandKind.LISTING, raw_text=completion.content),
                trace=trace,
                processing_time_ms=self._elapsed_ms(started),
            )

        arguments = self._parse_arguments(tool_call.function.arguments)
        trace.add("function_call", TOOL_NAME, arguments=arguments)
        query = self._to_query(arguments, vocabulary)
        clog.detail("Operator query", **self._query_summary(query))

        rows = await self._run_query(query, trace)
        output = json.dumps(rows, ensure_ascii=False)
        result = parse_command_output(output)
        clog.step_complete(
            CommandStage.RESULT,
            f"{result.kind.value} with {len(result.subjects)} operator(s)",
        )
        return CommandOutcome(
            input=text,
            output=output,
            description=query.description,
            result=result,
            trace=trace,
            processing_time_ms=self._elapsed_ms(started),
        )

    # ── Stages ───────────────────────────────────────────────────────

    async def _load_vocabulary(self, trace: ExecutionTrace) -> Vocabulary:
        try:
            with clog.timed_step(CommandStage.VOCABULARY, "Loading teams, skills and proficiencies"):
                teams, skills, proficiencies = await asyncio.gather(
                    self._vocabulary_repo.team_names(),
                    self._vocabulary_repo.skill_names(),
                    self._vocabulary_repo.proficiency_names(),
                )
        except Exception as exc:
            trace.add("vocabulary", "vocabulary", result={"error": str(exc)})
            raise CommandDispatchError(str(exc), stage="vocabulary", trace=trace) from exc

        vocabulary = Vocabulary(list(teams), list(skills), list(proficiencies))
        trace.add("vocabulary", "vocabulary", result=vocabulary.as_dict())
        clog.detail(
            "Vocabulary loaded",
            teams=len(vocabulary.teams),
            skills=len(vocabulary.skills),
            proficiencies=len(vocabulary.proficiencies),
        )
        return vocabulary

    async def _call_model(self, text: str, vocabulary: Vocabulary, trace: ExecutionTrace):
        messages = [
            ChatMessage(role="system", content=_SYSTEM_PROMPT),
            ChatMessage(role="user", content=text),
        ]
        tool = build_list_operators_tool(vocabulary)
        start = time.monotonic()
        try:
            with clog.timed_step(CommandStage.MODEL, f"Calling {self._model}"):
                completion = await self._chat_provider.complete(
                    messages,
                    self._model,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                    tools=[tool],
                    tool_choice="auto",
                )
        except ChatProviderError as exc:
            await self._usage_logger.log_error(
                model=self._model,
                provider=self._chat_provider.provider_name,
                feature=FEATURE,
                duration_ms=int((time.monotonic() - start) * 1000),
                error=exc,
                request_context=self._clip(text, 200),
            )
            trace.add("model_call", self._model, result={"error": exc.message})
            status = exc.status_code if 400 <= exc.status_code <= 599 else 502
            raise CommandDispatchError(exc.message, stage="model_call", trace=trace, status_code=status) from exc

        tools_called = [tc.function.name for tc in completion.tool_calls]
        await self._usage_logger.log_request(
            model=completion.model or self._model,
            provider=completion.provider or self._chat_provider.provider_name,
            feature=FEATURE,
            usage=completion.usage,
            duration_ms=int((time.monotonic() - start) * 1000),
            tools_called=tools_called or None,
            tool_call_count=len(tools_called),
            request_context=self._clip(text, 200),
        )
        trace.add(
            "model_call",
            completion.model or self._model,
            result={
                "finish_reason": completion.finish_reason,
                "content": completion.content or None,
                "tool_calls": tools_called,
            },
        )
        return completion

    async def _run_query(self, query: OperatorQuery, trace: ExecutionTrace) -> list[dict[str, Any]]:
        try:
            with clog.timed_step(CommandStage.FUNCTION, f"Running {TOOL_NAME}"):
                records = await self._user_repo.search_operators(query)
        except Exception as exc:
            trace.add("function_result", TOOL_NAME, result={"error": str(exc)})
            raise CommandDispatchError(str(exc), stage="function_call", trace=trace) from exc

        rows = [self._project(record, query) for record in records]
        trace.add("function_result", TOOL_NAME, result=rows)
        return rows

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _parse_arguments(raw: str) -> dict[str, Any]:
        """Tool arguments as a dict; anything that is not a JSON object counts as no arguments."""
        try:
            arguments = json.loads(raw or "{}")
        except json.JSONDecodeError:
            logger.warning("Tool arguments are not valid JSON: %s", CommandDispatcher._clip(raw, 200))
            return {}
        return arguments if isinstance(arguments, dict) else {}

    @staticmethod
    def _canonical(value: Any, allowed: list[str]) -> str | None:
        """Match a model-supplied name to the vocabulary, ignoring case."""
        if not isinstance(value, str) or not value.strip():
            return None
        lookup = {name.casefold(): name for name in allowed}
        return lookup.get(value.strip().casefold(), value.strip())

    @classmethod
    def _to_query(cls, arguments: dict[str, Any], vocabulary: Vocabulary) -> OperatorQuery:
        fields = arguments.get("outputFields")
        output_fields = [f for f in fields if f in OUTPUT_FIELDS] if isinstance(fields, list) else []
        is_team_lead = arguments.get("isTeamLead")

        try:
            action = CommandAction(arguments.get("action") or CommandAction.LIST.value)
        except ValueError:
            logger.warning("Unknown command action %r; listing instead", arguments.get("action"))
            action = CommandAction.LIST
        target_team = cls._canonical(arguments.get("targetTeam"), vocabulary.teams)
        if action is CommandAction.REASSIGN and target_team is None:
            logger.warning("Reassign requested without a target team; listing instead")
            action = CommandAction.LIST

        description = arguments.get("description")
        return OperatorQuery(
            description=description if isinstance(description, str) else "",
            team_name=cls._canonical(arguments.get("teamName"), vocabulary.teams),
            skill=cls._canonical(arguments.get("skill"), vocabulary.skills),
            proficiency=cls._canonical(arguments.get("proficiency"), vocabulary.proficiencies),
            is_team_lead=is_team_lead if isinstance(is_team_lead, bool) else None,
            output_fields=output_fields or list(OUTPUT_FIELDS),
            action=action,
            target_team=target_team if action is CommandAction.REASSIGN else None,
        )

    @staticmethod
    def _project(record: OperatorRecord, query: OperatorQuery) -> dict[str, Any]:
        """One result row: ``id`` plus the requested fields, plus the action flags."""
        values = {
            "name": record.name,
            "role": record.role.value,
            "is_team_lead": record.is_team_lead,
            "team": record.team,
            "skills": [assignment.label() for assignment in record.skills],
        }
        row: dict[str, Any] = {"id": record.id}
        for name in query.output_fields:
            row[name] = values[name]
        if query.action is CommandAction.DELETE:
            row["delete"] = True
        elif query.action is CommandAction.REASSIGN:
            row["reassign"] = True
            row["targetTeam"] = query.target_team
        return row

    @staticmethod
    def _query_summary(query: OperatorQuery) -> dict[str, Any]:
        summary = {
            "team": query.team_name,
            "skill": query.skill,
            "proficiency": query.proficiency,
            "lead": query.is_team_lead,
            "action": query.action.value,
        }
        return {k: v for k, v in summary.items() if v is not None}

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int(round((time.perf_counter() - started) * 1000))

    @staticmethod
    def _clip(text: str, limit: int = 300) -> str:
        """Clip long text for concise logs."""
        raw = (text or "").strip()
        if len(raw) <= limit:
            return raw
        return f"{raw[:limit]}... (truncated {len(raw) - limit} chars)"
