"""Cache management routes."""
from fastapi import APIRouter, HTTPException, Request
from models import CacheInvalidationRequest, CacheInvalidationResponse
from routes.deps import get_app_state

router = APIRouter(prefix="/cache")


@router.post("/invalidate", response_model=CacheInvalidationResponse)
async def invalidate(request_data: CacheInvalidationRequest, request: Request):
    """
    Invalidate cached query results

    Content-change notifications post the channel tag (node|<channel>|all)
    to drop every cached query of that channel. A single key can be
    dropped instead.
    """
    if not request_data.tag and not request_data.key:
        raise HTTPException(status_code=400, detail="Either tag or key is required")

    cache = get_app_state(request).get_query_cache()
    if cache is None:
        return CacheInvalidationResponse(invalidated=0)

    invalidated = 0
    if request_data.tag:
        invalidated += cache.invalidate_by_tag(request_data.tag)
    if request_data.key and cache.invalidate(request_data.key):
        invalidated += 1
    return CacheInvalidationResponse(invalidated=invalidated)


@router.delete("", response_model=CacheInvalidationResponse)
async def clear(request: Request):
    """Clear all cached query results"""
    app_state = get_app_state(request)
    cleared = app_state.cached_entry_count()
    app_state.clear_cache()
    return CacheInvalidationResponse(invalidated=cleared)
