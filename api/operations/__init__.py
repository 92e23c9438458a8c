"""Operations layer for the dynamic content service.

This package handles API-facing operations:
- Dynamic content execution (DynamicContentExecutor)
- Article lookup (ArticleRepository)

Principles:
- Single Responsibility Principle
- Dependency Injection
"""

from .article_repository import ArticleRepository
from .query_executor import DynamicContentExecutor, run_blocking

__all__ = [
    'ArticleRepository',
    'DynamicContentExecutor',
    'run_blocking',
]
