"""
Payload models for the content admin.

Records are stored as camelCase mappings, so models are dumped with
``by_alias=True``. Every field is optional: the same model serves creates
(defaults are filled by the collection service) and partial updates, where
only the fields actually sent are applied.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_record(self) -> dict:
        """Only the fields the client sent, keyed the way they are stored."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class NewsArticleIn(RecordIn):
    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    read_time: Optional[int] = Field(None, ge=1)
    author: Optional[str] = None
    published: Optional[bool] = None


class EventIn(RecordIn):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    max_attendees: Optional[int] = Field(None, ge=1)
    registration_required: Optional[bool] = None
    published: Optional[bool] = None


class ParishGroupIn(RecordIn):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    meeting_time: Optional[str] = None
    location: Optional[str] = None
    contact: Optional[str] = None
    contact_phone: Optional[str] = None
    email: Optional[str] = None
    active: Optional[bool] = None
    new_members_welcome: Optional[bool] = None
    age_range: Optional[str] = None
    note: Optional[str] = None


class GalleryImage(RecordIn):
    id: str
    url: str
    caption: str = ""
    alt: str = ""


class GalleryAlbumIn(RecordIn):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    images: Optional[list[GalleryImage]] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None


class MassServiceIn(RecordIn):
    time: str = ""
    type: str = ""
    description: str = ""
    language: Optional[str] = None
    celebrant: Optional[str] = None


class MassTimeDayIn(RecordIn):
    day: str
    services: list[MassServiceIn] = []
