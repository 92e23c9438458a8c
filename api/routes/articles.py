"""Article routes."""
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from models import ArticlePageModel
from routes.deps import get_app_state

router = APIRouter(prefix="/articles")


@router.get("", response_model=List[ArticlePageModel])
async def list_articles(request: Request, path: str = "/", language: Optional[str] = None):
    """
    List articles under a path, newest first

    Falls back to the channel root when the path has no articles.
    """
    try:
        app_state = get_app_state(request)
        language = language or app_state.get_executor().default_language
        return await app_state.get_article_repository().get_articles(path, language)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{article_id}", response_model=ArticlePageModel)
async def get_article(article_id: str, request: Request, language: Optional[str] = None):
    """Get a single article; unknown or malformed ids give an empty article"""
    try:
        app_state = get_app_state(request)
        language = language or app_state.get_executor().default_language
        return await app_state.get_article_repository().get_article_by_id(article_id, language)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
