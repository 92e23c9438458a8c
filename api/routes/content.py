"""Dynamic content query routes."""
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from models import DynamicContentItem, DynamicContentRequest, DynamicContentResponse
from routes.deps import get_app_state

router = APIRouter(prefix="/content")


@router.post("/query", response_model=DynamicContentResponse)
async def query_content(request_data: DynamicContentRequest, request: Request):
    """
    Query dynamic content under a path

    Failures never surface as errors: the response carries an empty item
    list with status and diagnostics explaining why.
    """
    executor = get_app_state(request).get_executor()
    outcome = await executor.execute(request_data)
    return DynamicContentResponse(
        items=outcome.items,
        total_results=outcome.total,
        status=outcome.status.value,
        cache=outcome.cache.value,
        cache_key=outcome.cache_key,
        diagnostics=list(outcome.diagnostics)
    )


@router.post("/items", response_model=List[DynamicContentItem])
async def query_content_items(request_data: DynamicContentRequest, request: Request):
    """Query dynamic content projected onto the typed item shape"""
    executor = get_app_state(request).get_executor()
    items = await executor.query_dynamic_content(request_data)
    return [DynamicContentItem.from_fields(item) for item in items]


@router.get("/pages")
def dynamic_pages(
    request: Request,
    content_type: str,
    path: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    order_by: str = "DocumentPublishFrom",
    order_direction: str = "desc"
):
    """
    Legacy page listing

    Runs in the threadpool since the legacy adapter blocks until done.
    """
    try:
        executor = get_app_state(request).get_executor()
        return executor.get_dynamic_pages(content_type, path, limit, offset, order_by, order_direction)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
