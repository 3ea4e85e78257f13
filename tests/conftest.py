"""
Pytest configuration and fixtures.
"""
import json
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from devhub_api.app.core.cache import TTLCache
from devhub_api.app.core.config import settings
from devhub_api.app.core.db import init_db
from devhub_api.app.main import create_app
from devhub_api.app.services.github_service import GitHubService


class FakeClock:
    """Manually advanced replacement for ``time.monotonic``."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_repo(repo_id=1, name="test-repo", language="Python", owner="testuser", **overrides):
    """Build a repository record shaped like the GitHub REST API's."""
    repo = {
        "id": repo_id,
        "name": name,
        "full_name": f"{owner}/{name}",
        "description": f"{name} description",
        "language": language,
        "stargazers_count": 10,
        "forks_count": 5,
        "watchers_count": 8,
        "private": False,
        "archived": False,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-15T00:00:00Z",
        "pushed_at": "2024-01-15T00:00:00Z",
        "html_url": f"https://github.com/{owner}/{name}",
        "clone_url": f"https://github.com/{owner}/{name}.git",
        "default_branch": "main",
        "size": 1024,
        "topics": ["python", "api"],
    }
    repo.update(overrides)
    return repo


def make_response(status_code=200, payload=None, url="https://api.github.com/users/testuser/repos"):
    """Build a real ``requests.Response`` so ``raise_for_status`` behaves normally."""
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload if payload is not None else []).encode("utf-8")
    response.url = url
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    """Mocked ``requests.Session`` returning one repository by default."""
    fake = MagicMock(spec=requests.Session)
    fake.get.return_value = make_response(200, [make_repo()])
    return fake


@pytest.fixture
def github_service(session, clock):
    return GitHubService(TTLCache(ttl=300, clock=clock), session=session)


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file."""
    db_file = tmp_path / "test.db"
    monkeypatch.setattr(settings, "database_url", str(db_file))
    init_db()
    return db_file


@pytest.fixture
def client(database, github_service):
    app = create_app()
    app.state.github_service = github_service
    with TestClient(app) as test_client:
        yield test_client
