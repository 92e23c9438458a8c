"""Domain models for content records and the channel context"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

EMPTY_GUID = uuid.UUID(int=0)

@dataclass
class PageIdentity:
    """System fields carried by hierarchical (web page) records"""
    id: int
    guid: uuid.UUID
    name: str
    tree_path: str
    order: Optional[int] = None
    parent_id: Optional[int] = None
    level: Optional[int] = None

    @property
    def parent_path(self) -> str:
        """Tree path of the direct parent ("/" for top-level pages)"""
        head, _, _ = self.tree_path.rstrip('/').rpartition('/')
        return head or '/'

@dataclass
class ContentRecord:
    """Raw content item as produced by an execution engine.

    fields is an opaque, heterogeneous bag; page is set only for
    hierarchical web page items.
    """
    content_type: str
    language: str
    fields: Dict[str, Any] = field(default_factory=dict)
    channel: Optional[str] = None
    page: Optional[PageIdentity] = None
    published: bool = True
    secured: bool = False

    @property
    def is_web_page(self) -> bool:
        return self.page is not None

    def get(self, name: str, default: Any = None) -> Any:
        """Read a field by name, falling back to the page identity fields"""
        if name in self.fields:
            return self.fields[name]
        if self.page is not None:
            return _PAGE_FIELD_READERS.get(name, lambda page: default)(self.page)
        return default

_PAGE_FIELD_READERS = {
    'WebPageItemID': lambda page: page.id,
    'WebPageItemGUID': lambda page: str(page.guid),
    'WebPageItemName': lambda page: page.name,
    'WebPageItemTreePath': lambda page: page.tree_path,
    'WebPageItemOrder': lambda page: page.order,
    'WebPageItemParentID': lambda page: page.parent_id,
    'WebPageItemLevel': lambda page: page.level,
}

@dataclass(frozen=True)
class ExecutionOptions:
    """Options handed to the execution engine with every query"""
    for_preview: bool = False
    include_secured_items: bool = False

@dataclass(frozen=True)
class ChannelContext:
    """Website channel a query executes against"""
    name: str
    is_preview: bool = False

    @classmethod
    def from_config(cls, channel_config) -> 'ChannelContext':
        return cls(name=channel_config.name, is_preview=channel_config.preview)

    def execution_options(self) -> ExecutionOptions:
        """Preview mode shows drafts and secured items alike"""
        return ExecutionOptions(
            for_preview=self.is_preview,
            include_secured_items=self.is_preview
        )

    @property
    def invalidation_tag(self) -> str:
        """Channel-wide dependency tag attached to cached query results"""
        return f"node|{self.name}|all"
