"""Route handlers following Single Responsibility Principle

Each router module handles a single resource/concept:
- content: dynamic content queries
- articles: article listing and lookup
- cache: cache invalidation
- health: health/monitoring endpoints
"""
