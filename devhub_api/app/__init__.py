"""
Application package.

Contains the FastAPI entrypoint and its submodules: ``core`` for
configuration, logging, storage and caching, ``schemas`` for payload
models, ``services`` for business logic and ``api`` for versioned
routes.
"""

from .main import app, create_app  # noqa: F401
