"""
Centralized logging configuration for the API.

Quiets third-party loggers whose debug and info output would drown the
per-query log lines. Import triggers configuration - no function call needed.
"""
import logging

_QUIETED_LOGGERS = [
    'asyncio',
    'httpx',
    'httpcore',
    'multipart',
]

for _logger_name in _QUIETED_LOGGERS:
    logging.getLogger(_logger_name).setLevel(logging.WARNING)
