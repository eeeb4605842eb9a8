"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from reaper.api.v1.endpoints import health, reaper

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(reaper.router, prefix="/reaper", tags=["reaper"])
