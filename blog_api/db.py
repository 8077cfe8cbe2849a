"""
Blog post storage: a SQLAlchemy document store and an in-memory test implementation.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, Optional, Protocol

from sqlalchemy import JSON, Column, Float, String, Text, create_engine, delete, func, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from blog_api.errors import StoreError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "content", "author")
AUTHOR_FIELDS = ("firstName", "lastName")


class DbClient(Protocol):
    """Interface for blog post storage."""

    def insert_post(self, author: dict, title: str, content: str) -> "BlogPostRecord":
        ...

    def insert_many(self, posts: Iterable[dict]) -> list["BlogPostRecord"]:
        ...

    def list_posts(self) -> list["BlogPostRecord"]:
        ...

    def get_post(self, post_id: str) -> Optional["BlogPostRecord"]:
        ...

    def update_post(self, post_id: str, fields: dict) -> Optional["BlogPostRecord"]:
        ...

    def delete_post(self, post_id: str) -> bool:
        ...

    def count_posts(self) -> int:
        ...

    def drop_database(self) -> None:
        ...

    def close(self) -> None:
        ...


@dataclass
class BlogPostRecord:
    id: str
    author: dict
    title: str
    content: str
    created: float = field(default_factory=lambda: time.time())

    @property
    def author_name(self) -> str:
        first = self.author.get("firstName", "")
        last = self.author.get("lastName", "")
        return f"{first} {last}".strip()

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.created, tz=timezone.utc)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "author": dict(self.author),
            "title": self.title,
            "content": self.content,
            "created": self.created,
        }


def _new_post_id() -> str:
    return uuid.uuid4().hex


def _author_doc(author: dict) -> dict:
    return {name: author[name] for name in AUTHOR_FIELDS}


def _merged_fields(current: BlogPostRecord, fields: dict) -> dict:
    """
    Resolve a partial update against the current record.

    Only title, content and author are writable; author parts merge
    individually so a caller can change just one name.
    """
    changes: dict = {}
    for name in UPDATABLE_FIELDS:
        if name not in fields or fields[name] is None:
            continue
        if name == "author":
            author = dict(current.author)
            for part in AUTHOR_FIELDS:
                if fields["author"].get(part) is not None:
                    author[part] = fields["author"][part]
            changes["author"] = author
        else:
            changes[name] = fields[name]
    return changes


class InMemoryDbClient:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        self.posts: Dict[str, BlogPostRecord] = {}

    def insert_post(self, author: dict, title: str, content: str) -> BlogPostRecord:
        record = BlogPostRecord(
            id=_new_post_id(),
            author=_author_doc(author),
            title=title,
            content=content,
        )
        self.posts[record.id] = record
        return record

    def insert_many(self, posts: Iterable[dict]) -> list[BlogPostRecord]:
        return [
            self.insert_post(post["author"], post["title"], post["content"])
            for post in posts
        ]

    def list_posts(self) -> list[BlogPostRecord]:
        return list(self.posts.values())

    def get_post(self, post_id: str) -> Optional[BlogPostRecord]:
        return self.posts.get(post_id)

    def update_post(self, post_id: str, fields: dict) -> Optional[BlogPostRecord]:
        record = self.posts.get(post_id)
        if not record:
            return None
        for name, value in _merged_fields(record, fields).items():
            setattr(record, name, value)
        return record

    def delete_post(self, post_id: str) -> bool:
        return self.posts.pop(post_id, None) is not None

    def count_posts(self) -> int:
        return len(self.posts)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.posts.clear()

    def drop_database(self) -> None:
        self.reset()

    def close(self) -> None:
        pass


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    The author is kept as an embedded JSON document on the post row.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        try:
            url = make_url(database_url)
            if url.get_backend_name() == "sqlite":
                engine_options: dict = {"connect_args": {"check_same_thread": False}}
                if url.database in (None, "", ":memory:"):
                    # A single shared connection keeps one in-memory database across threads.
                    engine_options["poolclass"] = StaticPool
            else:
                engine_options = {"pool_pre_ping": True, "pool_recycle": 1800}
            self.engine = create_engine(url, future=True, **engine_options)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not connect to database: {exc}") from exc
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        logger.info("Connected to %s", url.render_as_string(hide_password=True))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.Session() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError("Database operation failed") from exc

    def _to_record(self, row: "BlogPostRow") -> BlogPostRecord:
        return BlogPostRecord(
            id=row.id,
            author=dict(row.author or {}),
            title=row.title,
            content=row.content,
            created=row.created,
        )

    def _new_row(self, author: dict, title: str, content: str) -> "BlogPostRow":
        return BlogPostRow(
            id=_new_post_id(),
            author=_author_doc(author),
            title=title,
            content=content,
            created=time.time(),
        )

    def insert_post(self, author: dict, title: str, content: str) -> BlogPostRecord:
        with self._session() as session:
            row = self._new_row(author, title, content)
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def insert_many(self, posts: Iterable[dict]) -> list[BlogPostRecord]:
        with self._session() as session:
            rows = [
                self._new_row(post["author"], post["title"], post["content"])
                for post in posts
            ]
            session.add_all(rows)
            session.commit()
            return [self._to_record(row) for row in rows]

    def list_posts(self) -> list[BlogPostRecord]:
        with self._session() as session:
            rows = session.execute(
                select(BlogPostRow).order_by(
                    BlogPostRow.created.asc(), BlogPostRow.id.asc()
                )
            ).scalars()
            return [self._to_record(row) for row in rows]

    def get_post(self, post_id: str) -> Optional[BlogPostRecord]:
        with self._session() as session:
            row = session.get(BlogPostRow, post_id)
            if not row:
                return None
            return self._to_record(row)

    def update_post(self, post_id: str, fields: dict) -> Optional[BlogPostRecord]:
        with self._session() as session:
            row = session.get(BlogPostRow, post_id)
            if not row:
                return None
            for name, value in _merged_fields(self._to_record(row), fields).items():
                setattr(row, name, value)
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def delete_post(self, post_id: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(BlogPostRow).where(BlogPostRow.id == post_id))
            session.commit()
            return bool(result.rowcount)

    def count_posts(self) -> int:
        with self._session() as session:
            return session.scalar(select(func.count()).select_from(BlogPostRow)) or 0

    def drop_database(self) -> None:
        with self._session() as session:
            session.execute(delete(BlogPostRow))
            session.commit()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Closed database connection")


Base = declarative_base()


class BlogPostRow(Base):
    __tablename__ = "blog_posts"

    id = Column(String, primary_key=True)
    author = Column(JSON, nullable=False)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created = Column(Float, nullable=False, index=True)
