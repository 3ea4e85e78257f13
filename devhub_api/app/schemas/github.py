"""
Pydantic models for the GitHub repository lookup.

``RepoQuery`` holds the fully resolved query (defaults applied) and is
what the cache key is computed from.  ``RepoItem`` is the internal
shape of a repository, serialized with camelCase names on the wire;
``RepoListResponse`` is one page of them.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class RepoQuery(BaseModel):
    """Query parameters for listing a user's repositories."""

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    type: Literal["all", "public", "private"] = "public"
    sort: Literal["created", "updated", "pushed", "full_name"] = "updated"
    direction: Literal["asc", "desc"] = "desc"
    language: Optional[str] = Field(None, description="Case-insensitive language filter applied to the fetched page")


class RepoItem(BaseModel):
    """Normalized repository summary."""

    id: int
    name: str
    full_name: str = Field(..., alias="fullName")
    description: Optional[str] = None
    language: Optional[str] = None
    star_count: int = Field(..., alias="starCount")
    fork_count: int = Field(..., alias="forkCount")
    watcher_count: int = Field(..., alias="watcherCount")
    is_private: bool = Field(..., alias="isPrivate")
    is_archived: bool = Field(..., alias="isArchived")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
    pushed_at: Optional[str] = Field(None, alias="pushedAt")
    html_url: str = Field(..., alias="htmlUrl")
    clone_url: str = Field(..., alias="cloneUrl")
    default_branch: str = Field(..., alias="defaultBranch")
    size: int
    topics: List[str] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
    }


class RepoListResponse(BaseModel):
    """A page of repositories for one user.

    ``total`` counts the items on this page after language filtering,
    not the user's total number of repositories.
    """

    data: List[RepoItem]
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")
    username: str

    model_config = {
        "populate_by_name": True,
    }


class CacheClearResponse(BaseModel):
    message: str
