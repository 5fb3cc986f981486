"""
Event document, the upstream record bookings point at.

Only what the booking check needs plus a few descriptive fields.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from eventbook.db.registry import ModelDefinition, registry


class Event(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[ObjectId] = Field(default=None, alias="_id")
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[datetime] = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Event":
        return cls.model_validate(dict(document))

    def to_document(self) -> dict:
        document = self.model_dump(by_alias=True)
        if document.get("_id") is None:
            document.pop("_id", None)
        return document

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title})>"


EVENT_MODEL = registry.get_or_register(
    "Event",
    lambda: ModelDefinition(name="Event", collection="events", document=Event),
)
