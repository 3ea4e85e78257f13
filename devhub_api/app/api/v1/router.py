"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (blogs, GitHub, health)
under a unified prefix.  When new domains are introduced, update this
file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import blogs, github, health

router = APIRouter()

router.include_router(blogs.router, prefix="/blogs", tags=["blogs"])
router.include_router(github.router, prefix="/github", tags=["github"])
router.include_router(health.router, prefix="/health", tags=["health"])
