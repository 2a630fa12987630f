"""
Health Check Endpoint
"""
from fastapi import APIRouter, status
from typing import Dict

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """Liveness probe for the hosting platform."""
    return {"status": "ok"}


@router.get("/", status_code=status.HTTP_200_OK)
async def root() -> Dict[str, str]:
    return {
        "message": "Lead Caller API",
        "status": "running"
    }
