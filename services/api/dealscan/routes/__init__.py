"""API routes."""

from fastapi import APIRouter

from dealscan.routes import junk

api_router = APIRouter()

# Junk reports + learned junk scorer
api_router.include_router(junk.router, prefix="/v1", tags=["junk"])
