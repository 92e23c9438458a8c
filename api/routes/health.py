"""Health and info routes."""
from fastapi import APIRouter, Request
from models import HealthResponse
from routes.deps import get_app_state

router = APIRouter()


@router.get("/", include_in_schema=False)
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Dynamic Content Query API",
        "docs": "/docs",
        "health": "/health"
    }


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """
    Health check endpoint

    Returns channel context, content and cache statistics
    """
    app_state = get_app_state(request)
    channel = app_state.get_channel()

    return HealthResponse(
        status="healthy",
        channel=channel.name if channel else "",
        preview=channel.is_preview if channel else False,
        content_items=app_state.content_item_count(),
        cache_enabled=app_state.get_query_cache() is not None,
        cached_entries=app_state.cached_entry_count()
    )
