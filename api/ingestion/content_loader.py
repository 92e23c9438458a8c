"""
Content seed loading.

Reads content items from a YAML seed file into ContentRecords:

    channel: website
    items:
      - content_type: DancingGoat.ArticlePage
        language: en
        page:
          id: 3
          name: coffee-beverages-explained
          tree_path: /Articles/coffee-beverages-explained
          order: 1
        fields:
          ArticleTitle: Coffee Beverages Explained

Page GUIDs default to a stable UUID derived from channel and tree path;
parent IDs and levels are derived from the tree when omitted.
"""

import uuid
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from config import DEFAULT_LANGUAGE
from domain_models import ContentRecord, PageIdentity


class ContentSeedError(Exception):
    """Content seed file is invalid"""
    pass


class ContentSeedLoader:
    """Builds ContentRecords from seed data"""

    def __init__(self, default_channel: str = "website", default_language: str = DEFAULT_LANGUAGE):
        self.default_channel = default_channel
        self.default_language = default_language

    def load(self, path: Path) -> List[ContentRecord]:
        """Load records from YAML seed file.

        Raises:
            FileNotFoundError: If seed file doesn't exist
            ContentSeedError: If an item is malformed
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        return self.from_dict(data or {})

    def from_dict(self, data: dict) -> List[ContentRecord]:
        channel = data.get("channel", self.default_channel)
        records = [self._record(index, item, channel) for index, item in enumerate(data.get("items") or [])]
        self._link_parents(records)
        return records

    def _record(self, index: int, item: dict, channel: str) -> ContentRecord:
        if not isinstance(item, dict) or not item.get("content_type"):
            raise ContentSeedError(f"Item #{index} has no content_type")

        item_channel = item.get("channel", channel)
        return ContentRecord(
            content_type=item["content_type"],
            language=item.get("language", self.default_language),
            fields=dict(item.get("fields") or {}),
            channel=item_channel,
            page=self._page(index, item.get("page"), item_channel),
            published=bool(item.get("published", True)),
            secured=bool(item.get("secured", False))
        )

    @staticmethod
    def _page(index: int, page: Optional[dict], channel: str) -> Optional[PageIdentity]:
        if page is None:
            return None
        try:
            tree_path = page["tree_path"]
            guid = page.get("guid")
            return PageIdentity(
                id=int(page["id"]),
                guid=uuid.UUID(str(guid)) if guid else uuid.uuid5(uuid.NAMESPACE_URL, f"{channel}:{tree_path}"),
                name=page.get("name") or tree_path.rstrip("/").rpartition("/")[2],
                tree_path=tree_path,
                order=page.get("order"),
                parent_id=page.get("parent_id"),
                level=page.get("level", _level(tree_path))
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ContentSeedError(f"Item #{index} has an invalid page block: {e}") from e

    @staticmethod
    def _link_parents(records: List[ContentRecord]):
        """Fill parent IDs from pages sharing channel and language"""
        ids: Dict[tuple, int] = {
            (record.channel, record.language, record.page.tree_path): record.page.id
            for record in records if record.page is not None
        }
        for record in records:
            page = record.page
            if page is None or page.parent_id is not None:
                continue
            page.parent_id = ids.get((record.channel, record.language, page.parent_path), 0)


def _level(tree_path: str) -> int:
    """Depth below the channel root, top-level pages are level 1"""
    return len([segment for segment in tree_path.split("/") if segment])
