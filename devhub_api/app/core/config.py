"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; override them via
environment variables in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "DevHub API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional log file path.  Empty string disables the file handler.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database.  Relative paths are resolved against
    # the package directory by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "devhub.db")

    # Prefix under which the v1 routes are mounted.  Empty by default so
    # that the public paths are ``/blogs`` and ``/github/...``.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Comma-separated list of allowed CORS origins; ``*`` allows any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Upstream GitHub REST API.  Requests are unauthenticated.
    github_api_base: str = os.getenv("GITHUB_API_BASE", "https://api.github.com")
    github_timeout_seconds: float = float(os.getenv("GITHUB_TIMEOUT_SECONDS", "10"))
    github_cache_ttl_seconds: float = float(os.getenv("GITHUB_CACHE_TTL_SECONDS", str(5 * 60)))
    github_user_agent: str = os.getenv("GITHUB_USER_AGENT", "DevHub-GitHub-Client")

    # Bind address used by ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
