"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from ableconnect.api.v1 import admin, applications, auth, content, jobs, profiles, settings

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
api_router.include_router(applications.router, prefix="/applications", tags=["Applications"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(content.router, prefix="/content", tags=["Content"])
api_router.include_router(settings.router, prefix="/settings", tags=["Settings"])
