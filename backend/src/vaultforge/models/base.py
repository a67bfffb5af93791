"""Shared helpers for VaultForge object types."""

from dataclasses import fields
from datetime import UTC, datetime
from typing import Any

# Fields that identify a stored row and are never copied between objects.
IDENTITY_FIELDS = ("id", "uuid")


def field_names(model: Any) -> list[str]:
    """Return the declared field names of a model class or instance."""
    return [f.name for f in fields(model)]


def object_type(model: Any) -> str:
    """Return the object type name used to key hooks and event bindings.

    Accepts a model class or an instance of one.
    """
    cls = model if isinstance(model, type) else type(model)
    return cls.__name__


def utc_now() -> datetime:
    return datetime.now(UTC)


def timestamp(value: datetime) -> str:
    """Serialize a datetime the way every timestamp column stores it."""
    return value.isoformat()
