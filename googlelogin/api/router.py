"""Main API router."""

from fastapi import APIRouter

from googlelogin.api.auth import router as auth_router
from googlelogin.api.user import router as user_router

api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(user_router, prefix="/user", tags=["user"])
