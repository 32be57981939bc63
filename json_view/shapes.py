"""Runtime shape classification for relationship values and record access."""

import dataclasses
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel

from json_view.sentinels import NotLoaded

MISSING = object()


class RelationshipShape(str, Enum):
    """How a relationship value is rendered."""

    ABSENT = "absent"
    NOT_LOADED = "not_loaded"
    ONE = "one"
    MANY = "many"
    OTHER = "other"


def is_record(value: Any) -> bool:
    """Return True for values rendered as a single nested record."""
    if isinstance(value, (Mapping, BaseModel)):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def classify(value: Any) -> RelationshipShape:
    """Classify a relationship value.

    Order matters: NotLoaded is checked before the record check so a marker
    is never rendered as a record.
    """
    if value is None:
        return RelationshipShape.ABSENT
    if isinstance(value, NotLoaded):
        return RelationshipShape.NOT_LOADED
    if is_record(value):
        return RelationshipShape.ONE
    if isinstance(value, (list, tuple)):
        return RelationshipShape.MANY
    return RelationshipShape.OTHER


def field_names(record: Any) -> frozenset[str] | None:
    """Declared field names of dataclass and pydantic records, None for other objects."""
    if isinstance(record, BaseModel):
        model = type(record)
        return frozenset(model.model_fields) | frozenset(model.model_computed_fields)
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return frozenset(field.name for field in dataclasses.fields(record))
    return None


def get_value(record: Any, key: str, default: Any = MISSING) -> Any:
    """Read a field from a record.

    Mappings are read by key. Dataclass and pydantic records only expose their
    declared fields; other objects expose non-callable attributes. Methods are
    never fields.
    """
    if isinstance(record, Mapping):
        return record.get(key, default)

    names = field_names(record)
    if names is not None and key not in names:
        return default

    value = getattr(record, key, MISSING)
    if value is MISSING or (names is None and callable(value)):
        return default
    return value
