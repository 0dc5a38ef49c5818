"""Domain-specific exceptions: framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class FieldExistsError(DuplicateEntityError):
    """Raised when a metadata field definition name is already taken."""

    def __init__(self, name: str):
        super().__init__("FieldDefinition", "name", name)


class InvalidMetadataValueError(ValueError):
    """Raised when a raw value does not fit the value kind of its field."""

    def __init__(self, value_kind: str, raw_value: object, reason: str = ""):
        self.value_kind = value_kind
        self.raw_value = raw_value
        detail = f": {reason}" if reason else ""
        super().__init__(f"Value {raw_value!r} is not a valid {value_kind}{detail}")


class ChatProviderError(Exception):
    """Raised when a chat provider returns an error or cannot be reached."""

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class CommandDispatchError(Exception):
    """Raised when a natural-language command cannot be completed.

    Carries the stage that failed, the execution trace collected so far and
    the HTTP status the failure should surface as.
    """

    def __init__(self, message: str, stage: str, trace=None, status_code: int = 500):
        self.message = message
        self.stage = stage
        self.trace = trace
        self.status_code = status_code
        super().__init__(message)


class NoSelectionError(Exception):
    """Raised when a bulk action is requested with nothing selected."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Cannot request '{action}' with an empty selection")



class TeamLeadExistsError(Exception):
    """Raised when a team already has a lead and another one is promoted."""

    def __init__(self, team_id: str, lead_name: str | None = None):
        self.team_id = team_id
        self.lead_name = lead_name
        who = f" ({lead_name})" if lead_name else ""
        super().__init__(f"Team '{team_id}' already has a team lead{who}")


class TeamLeadMoveError(Exception):
    """Raised when a bulk team operation would move or detach a team lead."""

    def __init__(self, user_ids: list[str]):
        self.user_ids = user_ids
        super().__init__(
            "Team leads cannot be removed or reassigned in bulk: "
            + ", ".join(user_ids)
        )
