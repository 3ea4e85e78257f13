"""
Errors raised by the GitHub lookup service.

Each exception carries the HTTP status the edge layer should answer
with, so endpoints can translate them into ``HTTPException`` without
knowing about individual upstream conditions.
"""

from fastapi import status


class GitHubAPIError(Exception):
    """Base class for failures talking to the GitHub REST API."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class OwnerNotFoundError(GitHubAPIError):
    """The user does not exist or has no public repositories (upstream 404)."""

    status_code = status.HTTP_404_NOT_FOUND


class RateLimitedError(GitHubAPIError):
    """GitHub refused the request, usually because of rate limiting (upstream 403)."""

    status_code = status.HTTP_403_FORBIDDEN


class UpstreamTimeoutError(GitHubAPIError):
    """The request to GitHub did not complete within the configured timeout."""

    status_code = status.HTTP_408_REQUEST_TIMEOUT


class UpstreamError(GitHubAPIError):
    """Any other upstream failure: connection errors, 5xx, unparsable bodies."""
