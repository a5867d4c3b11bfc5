"""Shared base for stored records."""

from datetime import datetime, timezone

from pydantic import BaseModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """A row in one of the document's collections.

    `id` is None until the store assigns the next integer id on insert.
    """
    id: int | None = None

    model_config = {"from_attributes": True}
