"""API v1 routes."""

from fastapi import APIRouter

from rolegate.api.v1 import auth, demo, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(demo.router, prefix="/demo-users", tags=["demo"])
