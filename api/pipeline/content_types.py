"""Content type field schemas.

Each content type declares its fields and their value types up front, so the
result normalizer reads a known field set instead of introspecting records.
Schemas are loaded from YAML at startup:

    content_types:
      DancingGoat.ArticlePage:
        fields:
          ArticleTitle: text
          ArticlePagePublishDate: datetime
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

import yaml


class ContentSchemaError(Exception):
    """Content type schema file is invalid"""
    pass


class FieldType(Enum):
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    GUID = "guid"
    ANY = "any"


def _to_text(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise TypeError(f"cannot read {type(value).__name__} as text")
    return str(value)


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{value} is not integral")
    return int(value)


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"{value!r} is not a boolean")


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise TypeError(f"cannot read {type(value).__name__} as datetime")


def _to_guid(value: Any) -> str:
    if isinstance(value, uuid.UUID):
        return str(value)
    return str(uuid.UUID(str(value)))


_COERCERS = {
    FieldType.TEXT: _to_text,
    FieldType.INTEGER: _to_integer,
    FieldType.DECIMAL: lambda value: Decimal(str(value)),
    FieldType.BOOLEAN: _to_boolean,
    FieldType.DATETIME: _to_datetime,
    FieldType.GUID: _to_guid,
    FieldType.ANY: lambda value: value,
}


@dataclass(frozen=True)
class FieldSpec:
    """Declared field of a content type"""
    name: str
    type: FieldType = FieldType.ANY

    def coerce(self, value: Any) -> Any:
        """Convert a raw value to the declared type.

        Raises:
            ValueError, TypeError: value cannot be read as the declared type
        """
        return _COERCERS[self.type](value)


@dataclass(frozen=True)
class ContentTypeSchema:
    """Ordered field set of one content type"""
    name: str
    fields: Tuple[FieldSpec, ...] = ()

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)


@dataclass
class ContentTypeRegistry:
    """Registry of content type schemas keyed by content type name"""
    schemas: Dict[str, ContentTypeSchema] = field(default_factory=dict)

    def register(self, schema: ContentTypeSchema):
        self.schemas[schema.name] = schema

    def get(self, content_type: str) -> Optional[ContentTypeSchema]:
        return self.schemas.get(content_type)

    def __contains__(self, content_type: str) -> bool:
        return content_type in self.schemas

    def __len__(self) -> int:
        return len(self.schemas)

    @classmethod
    def from_yaml(cls, path: Path) -> 'ContentTypeRegistry':
        """Load registry from YAML file.

        Raises:
            FileNotFoundError: If schema file doesn't exist
            ContentSchemaError: If a field type is unknown
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        return cls._from_dict(data or {})

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'ContentTypeRegistry':
        """Load from YAML if available, else an empty registry"""
        if path and path.exists():
            return cls.from_yaml(path)
        return cls()

    @classmethod
    def _from_dict(cls, data: dict) -> 'ContentTypeRegistry':
        registry = cls()
        for name, definition in (data.get("content_types") or {}).items():
            fields = (definition or {}).get("fields") or {}
            registry.register(ContentTypeSchema(
                name=name,
                fields=tuple(_field_spec(name, field_name, type_name)
                             for field_name, type_name in fields.items())
            ))
        return registry


def _field_spec(content_type: str, field_name: str, type_name) -> FieldSpec:
    try:
        return FieldSpec(name=field_name, type=FieldType(type_name or "any"))
    except ValueError:
        raise ContentSchemaError(
            f"Unknown field type '{type_name}' for {content_type}.{field_name}"
        ) from None
