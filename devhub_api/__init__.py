"""
Top-level package for the DevHub API.

All functionality lives in submodules under ``app``; run the service
with ``uvicorn devhub_api.app.main:app``.
"""

__all__ = []
