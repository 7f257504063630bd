"""API v1 router aggregation."""

from fastapi import APIRouter

from tramites.api.v1.endpoints import auth, dashboard, documents, health, offices

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(offices.router, prefix="/offices", tags=["offices"])
