"""Pydantic models for events and partial event updates."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Colours an event can be tagged with. Order is the order offered to users.
BROWSER_SAFE_COLORS: Tuple[str, ...] = (
    "red",
    "green",
    "blue",
    "yellow",
    "orange",
    "purple",
    "pink",
    "brown",
    "black",
    "white",
    "gray",
    "cyan",
    "magenta",
    "lime",
    "teal",
    "navy",
    "olive",
    "maroon",
)


class Event(BaseModel):
    """An event as held by the store and by the controllers.

    ``id`` is ``None`` while the event is still a draft. Fields the store
    omits load as empty values so records written by other clients of the
    collection still parse.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str = ""
    description: str = ""
    company: str = ""
    color: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    image: str = ""
    date: str = ""
    time: str = ""
    is_active: bool = Field(default=False, alias="isActive")
    created_on: str = Field(default="", alias="createdOn")

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def to_wire(self) -> Dict[str, Any]:
        """Serialize for a create or replace body. The id is never sent."""
        return self.model_dump(by_alias=True, exclude={"id"})


class EventPatch(BaseModel):
    """Subset of event fields for a replace call.

    Only fields that were explicitly set are sent, so the remote store's
    merge or overwrite policy decides what happens to the rest.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    color: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    image: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    created_on: Optional[str] = Field(default=None, alias="createdOn")

    @classmethod
    def from_event(cls, event: Event) -> "EventPatch":
        return cls.model_validate(event.to_wire())

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


def field_name(name: str) -> str:
    """Map a wire name (``isActive``) or attribute name to the attribute name."""
    for attr, info in Event.model_fields.items():
        if name == attr or name == info.alias:
            return attr
    raise KeyError(name)
