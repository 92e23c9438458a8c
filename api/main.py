from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import logging_config  # noqa: F401
from config import default_config
from app_state import AppState
from api_key_auth import ApiKeyAuthMiddleware

# Global state
state = AppState()
from startup.manager import StartupManager
from routes.health import router as health_router
from routes.content import router as content_router
from routes.articles import router as articles_router
from routes.cache import router as cache_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan"""
    manager = StartupManager(state)
    await manager.initialize()
    yield
    state.clear_cache()

app = FastAPI(
    title="Dynamic Content Query API",
    description="Path-scoped, cached dynamic content queries for a website channel",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ApiKeyAuthMiddleware, auth_config=default_config.auth)

# Store state in app for route access
app.state.app_state = state

# Include route modules
app.include_router(health_router)
app.include_router(content_router)
app.include_router(articles_router)
app.include_router(cache_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
