"""Abstract repository interface for tags and tag types."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import Tag, TagType


class TagRepository(ABC):
    @abstractmethod
    async def list_types(self) -> list[TagType]: ...

    @abstractmethod
    async def get_type(self, type_id: str) -> TagType | None: ...

    @abstractmethod
    async def get_type_by_name(self, name: str) -> TagType | None: ...

    @abstractmethod
    async def create_type(self, tag_type: TagType) -> TagType: ...

    @abstractmethod
    async def delete_type(self, type_id: str) -> bool:
        """Delete a tag type together with its tags."""
        ...

    @abstractmethod
    async def list_tags(self, type_id: str | None = None) -> list[Tag]: ...

    @abstractmethod
    async def get_tag(self, tag_id: str) -> Tag | None: ...

    @abstractmethod
    async def create_tag(self, tag: Tag) -> Tag: ...

    @abstractmethod
    async def delete_tag(self, tag_id: str) -> bool: ...
