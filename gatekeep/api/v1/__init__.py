"""API v1 routes."""

from fastapi import APIRouter

from gatekeep.api.v1 import auth, health, profile

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
