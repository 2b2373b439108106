"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from app.api import admin_properties, auth, health, properties

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(properties.router, prefix="/properties", tags=["properties"])
router.include_router(admin_properties.router, prefix="/admin", tags=["admin"])
