"""Primitive type classification.

Maps a primitive kind to its schema: integers with format and unsigned
lower bound, floats with float/double format, strings and booleans.
"""

from typing import Any

from api_schema_synth.core.errors import UnsupportedTypeError
from api_schema_synth.kinds import Kind
from api_schema_synth.schema.base import Schema

_BUILTIN_KINDS: dict[type, Kind] = {
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT64,
    str: Kind.STRING,
}

_UNSIGNED = {Kind.UINT, Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64}


def kind_of(tp: Any) -> Kind | None:
    """Primitive kind of ``tp``, or None when it is not a primitive type."""
    if not isinstance(tp, type):
        return None
    kind = getattr(tp, "kind", None)
    if isinstance(kind, Kind):
        return kind
    for base in tp.__mro__:
        if base in _BUILTIN_KINDS:
            return _BUILTIN_KINDS[base]
    return None


def schema_for_kind(kind: Kind | None) -> Schema:
    """Build a fresh primitive schema for ``kind``.

    Raises UnsupportedTypeError for anything that is not a primitive kind.
    """
    if kind in (Kind.INT, Kind.INT8, Kind.INT16, Kind.UINT, Kind.UINT8, Kind.UINT16):
        schema = Schema(type="integer")
    elif kind in (Kind.INT32, Kind.UINT32):
        schema = Schema(type="integer", format="int32")
    elif kind in (Kind.INT64, Kind.UINT64):
        schema = Schema(type="integer", format="int64")
    elif kind is Kind.FLOAT32:
        schema = Schema(type="number", format="float")
    elif kind is Kind.FLOAT64:
        schema = Schema(type="number", format="double")
    elif kind is Kind.STRING:
        schema = Schema(type="string")
    elif kind is Kind.BOOL:
        schema = Schema(type="boolean")
    else:
        raise UnsupportedTypeError(kind, "not a primitive kind")

    if kind in _UNSIGNED:
        schema.minimum = 0
    return schema


def convert(kind: Kind, raw: Any) -> Any:
    """Convert a raw inbound value (often a string) to ``kind``'s Python type."""
    if kind is Kind.BOOL:
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered in ("true", "1"):
                return True
            if lowered in ("false", "0"):
                return False
            raise ValueError(f"invalid boolean {raw!r}")
        return bool(raw)
    if kind is Kind.STRING:
        return str(raw)
    if kind in (Kind.FLOAT32, Kind.FLOAT64):
        return float(raw)

    if isinstance(raw, str):
        return int(raw.strip())
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"invalid integer {raw!r}")
    return int(raw)
