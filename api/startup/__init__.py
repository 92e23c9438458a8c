"""Startup modules for component initialization.

- ConfigValidator: config validation
- ComponentFactory: channel, registry, content store, cache, executor
- StartupManager: runs the phases in order
"""

from .component_factory import ComponentFactory
from .config_validator import ConfigValidationError, ConfigValidator
from .manager import StartupManager

__all__ = [
    'ComponentFactory',
    'ConfigValidationError',
    'ConfigValidator',
    'StartupManager',
]
