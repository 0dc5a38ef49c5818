"""Port for the mutations a bulk selection controller can perform."""

from abc import ABC, abstractmethod


class BulkMutationExecutor(ABC):
    """Executes one bulk mutation over a whole selection of ids."""

    entity_name: str = "record"

    @abstractmethod
    async def delete_many(self, ids: list[str]) -> int: ...

    @abstractmethod
    async def reassign_many(self, ids: list[str], target_team_id: str) -> int: ...

    def delete_consequences(self, count: int) -> str:
        noun = self.entity_name if count == 1 else f"{self.entity_name}s"
        return f"{count} {noun} will be permanently deleted."
