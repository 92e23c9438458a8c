"""Path scope resolution.

Maps (path, only-this-page flag, nesting-level hint) to a ScopeFilter.
The nesting level is a binary switch between direct children and the whole
section; it does not bound depth numerically.
"""

import logging

from config import ROOT_PATH, SCOPE_ONLY_THIS_PAGE
from value_objects import ScopeFilter

logger = logging.getLogger(__name__)


class PathScopeResolver:
    """Resolves the tree scope of a query"""

    def resolve(self, path: str, only_this_page: bool = False, nesting_level: int = -1) -> ScopeFilter:
        path = normalize_path(path)

        if only_this_page and path != ROOT_PATH:
            return ScopeFilter.single(path)
        if path == ROOT_PATH:
            if only_this_page:
                logger.debug("'Only this page' at the channel root has no page; using whole channel")
            return ScopeFilter.none()
        if nesting_level > 0:
            return ScopeFilter.children(path)
        return ScopeFilter.subtree(path)

    def resolve_mode(self, path: str, scope_mode: str, nesting_level: int = -1) -> ScopeFilter:
        """Resolve from the caller-facing scope mode string"""
        return self.resolve(path, is_only_this_page(scope_mode), nesting_level)


def is_only_this_page(scope_mode) -> bool:
    return scope_mode == SCOPE_ONLY_THIS_PAGE


def normalize_path(path) -> str:
    """Empty paths mean the root; trailing slashes are dropped"""
    if not path or not path.strip():
        return ROOT_PATH
    path = path.strip()
    if path != ROOT_PATH:
        path = path.rstrip('/') or ROOT_PATH
    return path
