"""Serialization of entities to and from JSON-compatible dicts."""

import types
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

T = TypeVar("T")


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return to_dict_fast(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def to_dict_fast(obj: Any) -> dict:
    """Convert a flat dataclass without the deep copy ``asdict()`` makes.

    Parameters
    ----------
    obj : Any
        A dataclass instance.

    Returns
    -------
    dict
        Serialized dictionary.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    Decimals become strings so amounts survive a round trip exactly.
    """
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def deserialize_value(value: Any, hint: Any) -> Any:
    """Convert a JSON value back to the type named by ``hint``."""
    if value is None:
        return None

    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        # Optional[X]: decode as the first non-None member
        members = [a for a in get_args(hint) if a is not type(None)]
        return deserialize_value(value, members[0]) if members else value

    if hint is Decimal:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    if hint is datetime:
        return value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if hint is date:
        return value if isinstance(value, date) else date.fromisoformat(value)
    if isinstance(hint, type) and issubclass(hint, Enum):
        return hint(value)
    if hint is int and not isinstance(value, bool):
        return int(value)
    return value


def from_dict(cls: type[T], data: dict[str, Any]) -> T:
    """Build a dataclass instance of ``cls`` from a serialized dict.

    Keys that are not fields of ``cls`` are ignored; missing optional fields
    fall back to their defaults.
    """
    hints = get_type_hints(cls)
    kwargs = {
        f.name: deserialize_value(data[f.name], hints[f.name])
        for f in fields(cls)
        if f.name in data
    }
    return cls(**kwargs)
