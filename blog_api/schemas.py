"""
Pydantic schemas for the blog posts API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from blog_api.db import BlogPostRecord


class AuthorName(BaseModel):
    firstName: str
    lastName: str


class AuthorUpdate(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None


class BlogPostCreate(BaseModel):
    title: str
    content: str
    author: AuthorName


class BlogPostUpdate(BaseModel):
    id: str
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[AuthorUpdate] = None

    def changes(self) -> dict:
        """Fields the caller actually sent, minus the id."""
        return self.model_dump(exclude={"id"}, exclude_none=True)


class BlogPostResponse(BaseModel):
    id: str
    author: str
    title: str
    content: str
    created: datetime

    @classmethod
    def from_record(cls, record: BlogPostRecord) -> "BlogPostResponse":
        return cls(
            id=record.id,
            author=record.author_name,
            title=record.title,
            content=record.content,
            created=record.created_at,
        )
