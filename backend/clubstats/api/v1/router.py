"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from clubstats.api.v1.routes import analytics

api_router = APIRouter()

api_router.include_router(analytics.router)
