"""List and delete envelopes shared by the REST APIs."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    """A ``{"object": "list", "data": [...]}`` response."""

    object: str = "list"
    data: List[ItemT] = Field(default_factory=list)
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False

    def __iter__(self):
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)


class DeletedObject(BaseModel):
    id: str
    object: Optional[str] = None
    deleted: bool = False
