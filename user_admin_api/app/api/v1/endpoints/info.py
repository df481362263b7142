"""
Health endpoint for API v1.

Returns a static status together with the configured API version so
load balancers and deploy scripts can check that the service is up.
"""

from typing import Dict

from fastapi import APIRouter

from user_admin_api.app.core.config import settings

router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, str]:
    """Report that the API is running."""
    return {"status": "ok", "version": settings.api_version}
