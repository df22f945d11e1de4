"""Enum schema derivation.

The schema and the request-time coercion rule are derived together from
the same name -> value table, so documented and accepted values always
match.
"""

import enum
import inspect
import logging
from collections.abc import Mapping
from typing import Any

from api_schema_synth.binding.coercion import CoercionRegistry
from api_schema_synth.core.errors import ConfigurationError, EnumValueError
from api_schema_synth.kinds import EnumProvider, Kind
from api_schema_synth.schema.base import Schema
from api_schema_synth.schema.classifier import convert, kind_of, schema_for_kind
from api_schema_synth.schema.naming import canonical_title, ref_name
from api_schema_synth.schema.registry import ComponentRegistry

logger = logging.getLogger(__name__)


def is_enumerable(tp: Any) -> bool:
    if not inspect.isclass(tp):
        return False
    return issubclass(tp, enum.Enum) or isinstance(tp, EnumProvider)


def enum_members(tp: type) -> dict[str, Any]:
    """Name -> underlying value table of an enumerable type."""
    if issubclass(tp, enum.Enum):
        return {member.name: member.value for member in tp}
    table = tp.enums()
    if not isinstance(table, Mapping):
        raise ConfigurationError(f"{tp.__name__}.enums() must return a mapping")
    return dict(table)


def enum_kind(tp: type, members: dict[str, Any]) -> Kind:
    if not members:
        raise ConfigurationError(f"'{tp.__name__}' declares no enum values")
    representative = next(iter(members.values()))
    kind = kind_of(type(representative))
    if kind is None:
        raise ConfigurationError(f"'{tp.__name__}' invalid Enum type: {type(representative).__name__}")
    return kind


def derive_enum_schema(
    tp: type,
    registry: ComponentRegistry,
    coercions: CoercionRegistry,
) -> tuple[str, Schema]:
    """Register ``tp`` as an enum component and install its coercion rule.

    Returns the reference pointer and the inline schema.
    """
    members = enum_members(tp)
    kind = enum_kind(tp, members)
    title = canonical_title(tp)

    schema = schema_for_kind(kind)
    schema.title = title
    schema.enum = list(members.values())
    schema.enum_varnames = list(members.keys())
    registry.add(title, schema)

    coercions.register(tp, _coercer(tp, kind, members))
    return ref_name(title), schema


def check_member(value: Any) -> None:
    """Fail when an enumerable instance holds a value outside its own table."""
    tp = type(value)
    if issubclass(tp, enum.Enum):
        return
    members = enum_members(tp)
    if value not in members.values():
        raise ConfigurationError(f"enum '{tp.__name__}' presents undeclared value {value!r}")


def _coercer(tp: type, kind: Kind, members: dict[str, Any]):
    allowed = list(members.values())

    def coerce(raw: Any) -> Any:
        if isinstance(raw, tp):
            raw = raw.value if isinstance(raw, enum.Enum) else raw
        try:
            value = convert(kind, raw)
        except (TypeError, ValueError) as exc:
            raise EnumValueError(tp.__name__, raw) from exc
        if value not in allowed:
            raise EnumValueError(tp.__name__, raw)
        return tp(value)

    return coerce
