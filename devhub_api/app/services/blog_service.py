"""
Business logic for blog posts.

Posts live in the ``posts`` SQLite table.  List queries never read the
``content`` column; the detail lookups return the full record.  Text
filters are case-insensitive substring matches: ``search`` is OR'ed
across title, content and excerpt, and the distinct filters
(``search``, ``published``, ``author``) are AND'ed together.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from devhub_api.app.core.db import fold_text, get_connection
from devhub_api.app.schemas.blog import BlogCreate, BlogListItem, BlogListResponse, BlogQuery, BlogRead

logger = logging.getLogger(__name__)

LIST_COLUMNS = "id, title, slug, excerpt, published, author, tags, created_at, updated_at"


def _like_pattern(value: str) -> str:
    """Case-fold ``value`` and wrap it for a LIKE query, escaping wildcards."""
    escaped = fold_text(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BlogService:
    """Service class for querying blog posts."""

    @staticmethod
    def _build_where(query: BlogQuery) -> Tuple[str, List[Any]]:
        clauses: List[str] = []
        params: List[Any] = []
        if query.search:
            pattern = _like_pattern(query.search)
            clauses.append(
                "(fold(title) LIKE ? ESCAPE '\\' "
                "OR fold(content) LIKE ? ESCAPE '\\' "
                "OR fold(COALESCE(excerpt, '')) LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])
        if query.published is not None:
            clauses.append("published = ?")
            params.append(1 if query.published else 0)
        if query.author:
            clauses.append("fold(COALESCE(author, '')) LIKE ? ESCAPE '\\'")
            params.append(_like_pattern(query.author))
        where = " WHERE " + " AND ".join(clauses) if clauses else ""
        return where, params

    @classmethod
    def _fetch_page(cls, where: str, params: List[Any], limit: int, offset: int) -> List[BlogListItem]:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {LIST_COLUMNS} FROM posts{where} ORDER BY created_at DESC, id LIMIT ? OFFSET ?",
                (*params, limit, offset),
            ).fetchall()
            return [BlogListItem(**cls._row_to_fields(row)) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _count(where: str, params: List[Any]) -> int:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT COUNT(*) AS total FROM posts{where}", tuple(params)).fetchone()
            return row["total"]
        finally:
            conn.close()

    @classmethod
    async def list_blogs(cls, query: BlogQuery) -> BlogListResponse:
        """Return a page of post summaries plus pagination metadata.

        The page and the count are independent reads, so they run
        concurrently on separate connections.
        """
        where, params = cls._build_where(query)
        offset = (query.page - 1) * query.limit
        items, total = await asyncio.gather(
            asyncio.to_thread(cls._fetch_page, where, params, query.limit, offset),
            asyncio.to_thread(cls._count, where, params),
        )
        return BlogListResponse(
            data=items,
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit),
        )

    @classmethod
    async def get_blog(cls, blog_id: str) -> Optional[BlogRead]:
        """Retrieve a single post by its ID, or ``None`` if absent."""
        return cls._get_one("id", blog_id)

    @classmethod
    async def get_blog_by_slug(cls, slug: str) -> Optional[BlogRead]:
        """Retrieve a single post by its slug, or ``None`` if absent."""
        return cls._get_one("slug", slug)

    @classmethod
    async def create_blog(cls, data: BlogCreate) -> BlogRead:
        """Insert a new post and return it.

        Raises ``ValueError`` if the slug is already taken.
        """
        blog_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc).isoformat()
        conn = get_connection()
        try:
            try:
                conn.execute(
                    """
                    INSERT INTO posts (id, title, slug, content, excerpt, published, author, tags, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        blog_id,
                        data.title,
                        data.slug,
                        data.content,
                        data.excerpt,
                        int(data.published),
                        data.author,
                        json.dumps(data.tags),
                        now,
                        now,
                    ),
                )
                conn.commit()
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"Slug '{data.slug}' already exists") from exc
        finally:
            conn.close()
        logger.info("Created blog post %s (%s)", blog_id, data.slug)
        return BlogRead(id=blog_id, created_at=now, updated_at=now, **data.model_dump())

    @classmethod
    def _get_one(cls, column: str, value: str) -> Optional[BlogRead]:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {LIST_COLUMNS}, content FROM posts WHERE {column} = ?",
                (value,),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            return None
        return BlogRead(content=row["content"], **cls._row_to_fields(row))

    @staticmethod
    def _row_to_fields(row: sqlite3.Row) -> dict:
        """Convert the list columns of a row into model keyword arguments."""
        try:
            tags = json.loads(row["tags"]) if row["tags"] else []
        except (TypeError, json.JSONDecodeError):
            tags = []
        return {
            "id": row["id"],
            "title": row["title"],
            "slug": row["slug"],
            "excerpt": row["excerpt"],
            "published": bool(row["published"]),
            "author": row["author"],
            "tags": tags,
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }
