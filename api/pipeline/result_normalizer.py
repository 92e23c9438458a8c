# Copyright (c) 2024 Dynamic Content API Contributors
# SPDX-License-Identifier: MIT

"""Result normalization.

Flattens heterogeneous content records into uniform field maps. Every item
exposes the web page identity fields; page records supply real values which
win over any same-named content field, other records get zero/empty defaults.
"""

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from domain_models import EMPTY_GUID, ContentRecord
from pipeline.content_types import ContentTypeRegistry

logger = logging.getLogger(__name__)

# Back-references to the wrapped system objects, never copied into results
EXCLUDED_FIELDS = frozenset({"WebPageItem", "Item"})

_READABLE_TYPES = (str, int, float, bool, Decimal, datetime, date)


class ResultNormalizer:
    """Converts ContentRecords into ordered field dictionaries"""

    def __init__(self, registry: Optional[ContentTypeRegistry] = None):
        self.registry = registry or ContentTypeRegistry()

    def normalize_all(self, records: List[ContentRecord]) -> List[Dict[str, Any]]:
        return [self.normalize(record) for record in records]

    def normalize(self, record: ContentRecord) -> Dict[str, Any]:
        schema = self.registry.get(record.content_type)
        if schema is not None:
            result = self._schema_fields(record, schema)
        else:
            result = self._bag_fields(record)
        result.update(self._identity_fields(record))
        return result

    def _schema_fields(self, record: ContentRecord, schema) -> Dict[str, Any]:
        """Read declared fields in schema order, dropping ones that fail to convert"""
        result = {}
        for spec in schema:
            value = record.fields.get(spec.name)
            if value is None or spec.name in EXCLUDED_FIELDS:
                continue
            try:
                result[spec.name] = spec.coerce(value)
            except (ValueError, TypeError, ArithmeticError) as e:
                logger.debug(f"Dropping {record.content_type}.{spec.name}: {e}")
        return result

    def _bag_fields(self, record: ContentRecord) -> Dict[str, Any]:
        """Copy every readable field of an unregistered content type"""
        result = {}
        for name, value in record.fields.items():
            if value is None or name in EXCLUDED_FIELDS:
                continue
            readable = _read(value)
            if readable is _UNREADABLE:
                logger.debug(f"Dropping unreadable field {record.content_type}.{name}")
                continue
            result[name] = readable
        return result

    @staticmethod
    def _identity_fields(record: ContentRecord) -> Dict[str, Any]:
        page = record.page
        if page is None:
            return {
                "WebPageItemID": 0,
                "WebPageItemGUID": str(EMPTY_GUID),
                "WebPageItemName": "",
                "WebPageItemTreePath": "",
            }

        identity = {
            "WebPageItemID": page.id,
            "WebPageItemGUID": str(page.guid),
            "WebPageItemName": page.name,
            "WebPageItemTreePath": page.tree_path,
        }
        optional = {
            "WebPageItemOrder": page.order,
            "WebPageItemParentID": page.parent_id,
            "WebPageItemLevel": page.level,
        }
        identity.update({name: value for name, value in optional.items() if value is not None})
        return identity


_UNREADABLE = object()


def _read(value: Any) -> Any:
    if isinstance(value, _READABLE_TYPES):
        return value
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        items = [_read(item) for item in value]
        return _UNREADABLE if any(item is _UNREADABLE for item in items) else items
    if isinstance(value, dict):
        items = {str(key): _read(item) for key, item in value.items()}
        return _UNREADABLE if any(item is _UNREADABLE for item in items.values()) else items
    return _UNREADABLE
