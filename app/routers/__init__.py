from fastapi import APIRouter

from . import admin, auth, metered, plans

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(plans.router)
api_router.include_router(metered.router)
api_router.include_router(admin.router)
api_router.include_router(admin.editor_router)

__all__ = ["api_router"]
