"""
GitHub endpoints for API v1.

These routes proxy the public GitHub REST API through
``GitHubService``.  They are plain ``def`` handlers: the service uses
the blocking ``requests`` client, so FastAPI runs them in its
threadpool rather than on the event loop.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from devhub_api.app.core.exceptions import GitHubAPIError
from devhub_api.app.core.validators import ValidationError, validate_username
from devhub_api.app.schemas.github import CacheClearResponse, RepoListResponse, RepoQuery
from devhub_api.app.services.github_service import GitHubService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_github_service(request: Request) -> GitHubService:
    """Return the service instance owned by the running application."""
    return request.app.state.github_service


@router.get("/repos/{username}", response_model=RepoListResponse)
def get_user_repos(
    username: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    type: str = Query("public", pattern="^(all|public|private)$"),
    language: Optional[str] = Query(None),
    sort: str = Query("updated", pattern="^(created|updated|pushed|full_name)$"),
    direction: str = Query("desc", pattern="^(asc|desc)$"),
    service: GitHubService = Depends(get_github_service),
) -> RepoListResponse:
    """List a user's repositories, one page at a time.

    Results are cached for a few minutes per (username, query).  The
    ``language`` filter applies to the fetched page only, so ``total``
    counts the matching items on that page.
    """
    try:
        validate_username(username)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    query = RepoQuery(
        page=page,
        limit=limit,
        type=type,
        language=language or None,
        sort=sort,
        direction=direction,
    )
    try:
        return service.get_user_repos(username, query)
    except GitHubAPIError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.exception("Unexpected error fetching repositories of %s", username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch repository information",
        ) from e


@router.get("/cache/clear", response_model=CacheClearResponse)
def clear_cache(service: GitHubService = Depends(get_github_service)) -> CacheClearResponse:
    """Drop every cached GitHub response."""
    service.clear_cache()
    return CacheClearResponse(message="GitHub API cache cleared")
