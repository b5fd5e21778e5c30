from datetime import datetime
from typing import Optional

from ableconnect.schemas.base import CamelModel


class ContentAuthor(CamelModel):
    id: int
    email: str
    username: str


class ContentRead(CamelModel):
    id: int
    title: str
    body: str
    category: str
    is_published: bool
    created_by: int
    author: Optional[ContentAuthor] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def content_payload(content) -> dict:
    return ContentRead.model_validate(content).dump()
