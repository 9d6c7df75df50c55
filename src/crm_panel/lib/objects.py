"""
Object utilities for cache keys and JSON serialization.

Query keys must be identical for equal parameter sets no matter in which
order the parameters were assembled, so keys are built from sorted JSON.
"""

import json
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping


def query_key(namespace: str, params: Mapping[str, Any] | None = None) -> str:
    """
    Build a stable cache key from a namespace and its parameters.

    Args:
        namespace: Resource path, e.g. ``representatives`` or
                   ``representatives/statistics``.
        params: Filter/sort/page parameters. None values are dropped.

    Returns:
        Key string such as ``representatives:{"page":1,...}``.
    """
    cleaned = {k: v for k, v in (params or {}).items() if v is not None}
    return f"{namespace}:{to_json(cleaned, sort_keys=True)}"


def to_json(obj: Any, indent: int | None = None, sort_keys: bool = False) -> str:
    """
    Serialize an object to JSON string.

    Handles dataclasses, enums and Decimals. Falls back to str() for
    anything else that isn't JSON serializable.

    Args:
        obj: Object to serialize.
        indent: Optional indentation for pretty printing.
        sort_keys: Emit keys in sorted order.

    Returns:
        JSON string representation.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    separators = (",", ":") if indent is None else None
    return json.dumps(
        obj,
        default=_default_serializer,
        indent=indent,
        sort_keys=sort_keys,
        separators=separators,
        ensure_ascii=False,
    )


def to_jsonable(obj: Any) -> Any:
    """Return a structure made only of JSON primitives."""
    return json.loads(to_json(obj))


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Decimal):
        return str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return str(obj)
