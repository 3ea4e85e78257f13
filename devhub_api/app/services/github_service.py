"""
Business logic for the GitHub repository lookup.

``GitHubService`` fetches one page of a user's repositories from the
public GitHub REST API, normalizes the records, optionally filters
them by language and caches the assembled page in a ``TTLCache``.

The language filter runs on the single page GitHub returned, because
the ``/users/{user}/repos`` endpoint cannot filter by language.  A
filtered page may therefore hold fewer than ``limit`` items even when
later pages contain matches, and ``total`` only counts what is on the
page.  Callers rely on this behaviour; do not "fix" it here without
changing the response contract.  A page is never longer than ``limit``.
"""

import logging
import math
from typing import Any, Dict, List, Optional

import requests

from ..core.cache import TTLCache
from ..core.exceptions import (
    GitHubAPIError,
    OwnerNotFoundError,
    RateLimitedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from ..schemas.github import RepoItem, RepoListResponse, RepoQuery

logger = logging.getLogger(__name__)


class GitHubService:
    """Cached client for listing a GitHub user's repositories.

    The service owns its ``requests.Session`` unless one is passed in,
    and never owns the cache: whoever creates the cache decides its
    lifetime.  One upstream attempt is made per cache miss, without
    retries, and concurrent misses for the same key are not merged.
    """

    def __init__(
        self,
        cache: TTLCache,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 10,
        user_agent: str = "DevHub-GitHub-Client",
    ) -> None:
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_session = session is None
        self.session = session or requests.Session()

    @staticmethod
    def cache_key(username: str, query: RepoQuery) -> str:
        return TTLCache.make_key(username, query.model_dump())

    def get_user_repos(self, username: str, query: RepoQuery) -> RepoListResponse:
        """Return one normalized page of ``username``'s repositories.

        A fresh cached page is returned as is.  Otherwise the page is
        fetched, filtered, assembled and stored in the cache.

        Raises:
            OwnerNotFoundError: GitHub answered 404.
            RateLimitedError: GitHub answered 403.
            UpstreamTimeoutError: the request timed out.
            UpstreamError: any other failure.
        """
        key = self.cache_key(username, query)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Serving repositories of %s from cache", username)
            return cached

        # GitHub honours per_page, but a page must never exceed ``limit``.
        records = self._fetch_repos(username, query)[:query.limit]

        if query.language:
            wanted = query.language.lower()
            records = [
                r for r in records
                if isinstance(r, dict) and isinstance(r.get("language"), str) and r["language"].lower() == wanted
            ]

        try:
            data = [self._to_repo_item(record) for record in records]
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Malformed repository record for %s: %s", username, exc)
            raise UpstreamError("Failed to fetch GitHub repositories, please try again later") from exc
        total = len(data)
        result = RepoListResponse(
            data=data,
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit),
            username=username,
        )

        self.cache.set(key, result)
        logger.info("Fetched %s repositories for %s", total, username)
        return result

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("GitHub API cache cleared")

    def close(self) -> None:
        """Close the HTTP session if this service created it."""
        if self._owns_session:
            self.session.close()

    def _fetch_repos(self, username: str, query: RepoQuery) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/users/{username}/repos"
        params = {
            "type": query.type,
            "sort": query.sort,
            "direction": query.direction,
            "per_page": query.limit,
            "page": query.page,
        }
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.user_agent,
        }
        logger.info("Fetching repositories of %s from GitHub", username)
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as exc:
            raise self._translate_http_error(username, exc.response) from exc
        except requests.Timeout as exc:
            logger.error("GitHub request for %s timed out: %s", username, exc)
            raise UpstreamTimeoutError("GitHub API request timed out, please try again later") from exc
        except (requests.RequestException, ValueError) as exc:
            logger.error("Failed to fetch repositories of %s: %s", username, exc)
            raise UpstreamError("Failed to fetch GitHub repositories, please try again later") from exc

        if not isinstance(payload, list):
            logger.error("Unexpected GitHub payload for %s: %r", username, type(payload))
            raise UpstreamError("Failed to fetch GitHub repositories, please try again later")
        return payload

    @staticmethod
    def _translate_http_error(username: str, response: Optional[requests.Response]) -> GitHubAPIError:
        status_code = response.status_code if response is not None else None
        logger.error("GitHub answered %s for user %s", status_code, username)
        if status_code == 404:
            return OwnerNotFoundError(f"User '{username}' does not exist or has no public repositories")
        if status_code == 403:
            message = ""
            try:
                body = response.json()
                if isinstance(body, dict):
                    message = body.get("message") or ""
            except ValueError:
                pass
            return RateLimitedError(f"GitHub API access restricted: {message or 'API rate limit exceeded'}")
        return UpstreamError("Failed to fetch GitHub repositories, please try again later")

    @staticmethod
    def _to_repo_item(repo: Dict[str, Any]) -> RepoItem:
        return RepoItem(
            id=repo["id"],
            name=repo["name"],
            full_name=repo["full_name"],
            description=repo.get("description"),
            language=repo.get("language"),
            star_count=repo["stargazers_count"],
            fork_count=repo["forks_count"],
            watcher_count=repo["watchers_count"],
            is_private=repo["private"],
            is_archived=repo["archived"],
            created_at=repo["created_at"],
            updated_at=repo["updated_at"],
            pushed_at=repo.get("pushed_at"),
            html_url=repo["html_url"],
            clone_url=repo["clone_url"],
            default_branch=repo["default_branch"],
            size=repo["size"],
            topics=repo.get("topics") or [],
        )
