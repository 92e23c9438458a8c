"""Route dependencies and helpers

Gives route handlers access to the shared AppState without reaching
through request.app.state themselves.
"""
from fastapi import Request

from app_state import AppState


def get_app_state(request: Request) -> AppState:
    """Get AppState from request

    Usage:
        @router.post("/content/query")
        async def query_content(request_data: DynamicContentRequest, request: Request):
            executor = get_app_state(request).get_executor()
    """
    return request.app.state.app_state
