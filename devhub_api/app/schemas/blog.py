"""
Pydantic models for blog posts.

``BlogListItem`` is the list projection and deliberately has no
``content`` field; ``BlogRead`` is the full record returned by the
detail endpoints.  Field names are snake_case in Python and camelCase
on the wire.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class BlogQuery(BaseModel):
    """Filters and pagination for the blog list."""

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    search: Optional[str] = Field(None, description="Substring matched against title, content and excerpt")
    published: Optional[bool] = None
    author: Optional[str] = Field(None, description="Substring matched against the author name")


class BlogBase(BaseModel):
    title: str = Field(..., examples=["Getting started with FastAPI"])
    slug: str = Field(..., examples=["getting-started-with-fastapi"])
    excerpt: Optional[str] = None
    published: bool = False
    author: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
    }


class BlogCreate(BlogBase):
    """Schema for inserting a post."""

    content: str = ""

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Slug must not be empty")
        return v


class BlogListItem(BlogBase):
    """Post summary used in list responses (no ``content``)."""

    id: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class BlogRead(BlogListItem):
    """Full post including its content."""

    content: str


class BlogListResponse(BaseModel):
    data: List[BlogListItem]
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")

    model_config = {
        "populate_by_name": True,
    }
