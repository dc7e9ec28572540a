"""Domain models for qrdeck."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class UrlFormData(BaseModel):
    """Raw url/title pair as entered by the user, before validation."""

    url: Optional[str] = ""
    title: Optional[str] = ""


class UrlRecord(BaseModel):
    """A single saved URL."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    url: str
    title: str
    created_at: datetime = Field(default_factory=_utcnow)
    is_active: bool = False


class UrlList(BaseModel):
    """Persisted form of the ordered URL collection."""

    version: str = "1"
    urls: list[UrlRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_active_and_ids(self) -> UrlList:
        ids = [u.id for u in self.urls]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate record ids")
        active = sum(1 for u in self.urls if u.is_active)
        if self.urls and active != 1:
            raise ValueError(f"expected exactly one active record, found {active}")
        return self
