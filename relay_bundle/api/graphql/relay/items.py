"""Uniform field access for collection items.

Items handed to the relay layer are either mappings (rows, dicts) or plain
objects such as ORM instances.
"""
from collections.abc import Mapping
from typing import Any


def get_field(item: Any, name: str, default: Any = None) -> Any:
    if item is None:
        return default
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def with_field(item: Any, name: str, value: Any) -> Any:
    """Return ``item`` with ``name`` set to ``value``.

    Mappings are copied so the caller's collection is left untouched; objects
    get the attribute set in place.
    """
    if isinstance(item, Mapping):
        updated = dict(item)
        updated[name] = value
        return updated
    setattr(item, name, value)
    return item
