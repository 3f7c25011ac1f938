"""API v1: aggregates all routers under a single prefix."""

from fastapi import APIRouter

from app.api.v1.routers import assistants, documents, recent, users

router = APIRouter()
router.include_router(documents.router)
router.include_router(recent.router)
router.include_router(assistants.router)
router.include_router(users.router)
