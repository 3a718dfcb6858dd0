"""API routes for the FastAPI application."""

from fastapi.routing import APIRouter

from presida.api.v1.endpoints import admin, billing, health

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(billing.router, prefix="/billing", tags=["billing"])
