from fastapi import APIRouter

from .endpoints import accounts
from .endpoints import chat
from .endpoints import health

# Root-level routes (liveness)
root_router = APIRouter()
root_router.include_router(health.router, prefix="", tags=["health"])

# Routes mounted under /api
api_router = APIRouter()
api_router.include_router(chat.router, prefix="", tags=["chat"])
api_router.include_router(accounts.router, prefix="", tags=["accounts"])
