"""
Blog endpoints for API v1.

Read-only routes over the blog store: a paginated, filterable list of
post summaries and detail lookups by ID or slug.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from devhub_api.app.schemas.blog import BlogListResponse, BlogQuery, BlogRead
from devhub_api.app.services.blog_service import BlogService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=BlogListResponse)
async def list_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    published: Optional[bool] = Query(None),
    author: Optional[str] = Query(None),
) -> BlogListResponse:
    """Return a page of blog post summaries.

    - **search**: case-insensitive match in title, content or excerpt.
    - **published**: only published (`true`) or draft (`false`) posts.
    - **author**: case-insensitive match in the author name.

    Summaries never include the post content.
    """
    query = BlogQuery(page=page, limit=limit, search=search, published=published, author=author)
    try:
        return await BlogService.list_blogs(query)
    except Exception as e:
        logger.exception("Failed to list blog posts")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch blog list",
        ) from e


@router.get("/slug/{slug}", response_model=BlogRead)
async def get_blog_by_slug(slug: str) -> BlogRead:
    """Retrieve a single post by its slug."""
    blog = await BlogService.get_blog_by_slug(slug)
    if blog is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return blog


@router.get("/{blog_id}", response_model=BlogRead)
async def get_blog(blog_id: str) -> BlogRead:
    """Retrieve a single post, including its content, by ID.

    Returns HTTP 404 if the post does not exist.
    """
    if not blog_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Blog ID must not be empty")
    blog = await BlogService.get_blog(blog_id)
    if blog is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
    return blog
