"""
API Router
Combines all endpoint routers
"""
from fastapi import APIRouter
from leadcaller.api.endpoints import (
    calls,
    contacts,
    health,
    sms,
    webhooks,
)

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(calls.router)
api_router.include_router(webhooks.router)
api_router.include_router(sms.router)
api_router.include_router(contacts.router)
