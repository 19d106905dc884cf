"""Version 1 API routes for the mail relay service."""

from fastapi import APIRouter

from .email_routes import router as email_router

router = APIRouter()
router.include_router(email_router)

__all__ = ["router", "email_router"]
