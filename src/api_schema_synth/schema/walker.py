"""Recursive type walker that turns model annotations into schemas.

Inbound (request) traversal names and selects fields by their ``form``
tag. Outbound (response) traversal keeps every exported field that has a
``json`` tag and names it by that tag.

Nested models are never inlined: each one is registered once under its
canonical title and referenced by pointer. The shell of a component is
registered before its fields are walked, which is what stops recursion
on self-referencing and mutually referencing models.
"""

import collections.abc
import datetime
import inspect
import logging
import types
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin

from api_schema_synth.binding.coercion import CoercionRegistry
from api_schema_synth.core.errors import ConfigurationError, UnsupportedTypeError
from api_schema_synth.kinds import Kind, TemporalMarker, UploadFile
from api_schema_synth.parser.fields import FORM, JSON, FieldMetadata, is_model, iter_fields
from api_schema_synth.schema.base import Schema, SchemaRef
from api_schema_synth.schema.classifier import convert, kind_of, schema_for_kind
from api_schema_synth.schema.enums import check_member, derive_enum_schema, is_enumerable
from api_schema_synth.schema.naming import canonical_title, ref_name, unwrap_model
from api_schema_synth.schema.registry import ComponentRegistry

logger = logging.getLogger(__name__)

_SEQUENCES = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)
_MAPPINGS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_DEFAULT_KINDS = {"integer": Kind.INT, "number": Kind.FLOAT64, "boolean": Kind.BOOL}


def resolve_type(value: Any) -> Any:
    """The annotation for ``value``: types pass through, instances give their class."""
    if value is Any or isinstance(value, (type, TypeVar)) or get_origin(value) is not None:
        return value
    return type(value)


def resolve_model(value: Any) -> Any:
    """Like ``resolve_type``, with top-level ``Annotated`` and ``Optional`` stripped."""
    return unwrap_model(resolve_type(value))


def open_object() -> Schema:
    return Schema(type="object", additional_properties=True)


class SchemaWalker:
    """Derives schemas for annotations, registering components as it goes."""

    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        coercions: CoercionRegistry | None = None,
    ):
        self.registry = registry if registry is not None else ComponentRegistry()
        self.coercions = coercions if coercions is not None else CoercionRegistry()

    def synthesize_component(self, model: Any, inbound: bool) -> None:
        """Register ``model`` (and everything it references) as components.

        A model type is always re-derived, replacing any earlier entry under
        the same title. Non-model types only register what they reference.
        """
        if model is None:
            return
        tp = resolve_model(model)
        if is_model(tp) and not self._is_special(tp):
            self._register_model(tp, inbound)
        else:
            self.schema_for_type(tp, inbound)

    def schema_for_value(self, value: Any, inbound: bool) -> tuple[str, Schema]:
        """Reference pointer (empty when inline) and schema for a value or type."""
        if value is None:
            return "", Schema(type="object")
        if not inspect.isclass(value) and is_enumerable(type(value)):
            check_member(value)
        return self.schema_for_type(resolve_type(value), inbound)

    def schema_for_type(self, tp: Any, inbound: bool) -> tuple[str, Schema]:
        """Dispatch on the shape of ``tp``.

        Returns ``(ref, schema)``: ``ref`` is non-empty for registered
        components and ``schema`` is always the full schema.
        """
        origin = get_origin(tp)

        if origin is Annotated:
            return self.schema_for_type(get_args(tp)[0], inbound)
        if origin is Union or origin is types.UnionType:
            return self.schema_for_type(_unwrap_optional(tp), inbound)
        if origin is not None:
            if origin in _SEQUENCES:
                return "", self._array_schema(tp, inbound)
            if origin in _MAPPINGS:
                return "", self._map_schema(tp, inbound)
            if is_model(tp):
                return self._model_ref(tp, inbound)
            raise UnsupportedTypeError(tp)

        if tp is Any or tp is object or isinstance(tp, TypeVar):
            return "", open_object()
        if tp is UploadFile:
            return "", Schema(type="string", format="binary")
        if tp in (bytes, bytearray):
            return "", Schema(type="string", format="byte")
        if is_enumerable(tp):
            return derive_enum_schema(tp, self.registry, self.coercions)
        if inspect.isclass(tp) and issubclass(tp, TemporalMarker):
            return "", _temporal_schema(tp)

        kind = kind_of(tp)
        if kind is not None:
            return "", schema_for_kind(kind)

        if tp in _SEQUENCES:
            return "", self._array_schema(tp, inbound)
        if tp in _MAPPINGS:
            return "", self._map_schema(tp, inbound)
        if is_model(tp):
            return self._model_ref(tp, inbound)

        raise UnsupportedTypeError(tp)

    def _array_schema(self, tp: Any, inbound: bool) -> Schema:
        args = [a for a in get_args(tp) if a is not Ellipsis]
        if len(set(args)) > 1:
            raise UnsupportedTypeError(tp, "heterogeneous tuple")
        item = args[0] if args else Any
        ref, schema = self.schema_for_type(item, inbound)
        return Schema(type="array", items=SchemaRef.of(ref, schema))

    def _map_schema(self, tp: Any, inbound: bool) -> Schema:
        # dictionary: keys are always strings, additionalProperties types the values
        args = get_args(tp)
        value_type = args[1] if len(args) > 1 else Any
        if value_type is Any or value_type is object:
            return open_object()
        ref, schema = self.schema_for_type(value_type, inbound)
        return Schema(type="object", additional_properties=SchemaRef.of(ref, schema))

    def _model_ref(self, tp: Any, inbound: bool) -> tuple[str, Schema]:
        title = canonical_title(tp)
        if title not in self.registry:
            self._register_model(tp, inbound)
        return ref_name(title), self.registry.get(title)

    def _register_model(self, tp: Any, inbound: bool) -> str:
        title = canonical_title(tp)
        schema = Schema(type="object", title=title, properties={})
        self.registry.add(title, schema)
        self._populate(tp, schema, inbound)
        return title

    def _populate(self, tp: Any, schema: Schema, inbound: bool) -> None:
        for field in iter_fields(tp):
            if not field.exported:
                continue
            meta = field.metadata
            name = field.binding_name(FORM if inbound else JSON)
            if name is None or name == "-":
                continue

            ref, field_schema = self.schema_for_type(field.annotation, inbound)
            if not ref:
                apply_overrides(field_schema, meta)
            schema.properties[name] = SchemaRef.of(ref, field_schema)
            if meta.required:
                schema.add_required(name)

    @staticmethod
    def _is_special(tp: Any) -> bool:
        if get_origin(tp) is not None:
            return False
        return (
            tp is UploadFile
            or is_enumerable(tp)
            or kind_of(tp) is not None
            or (inspect.isclass(tp) and issubclass(tp, TemporalMarker))
        )


def apply_overrides(schema: Schema, meta: FieldMetadata) -> None:
    """Copy a field's description and default onto its inline schema."""
    if meta.description is not None:
        schema.description = meta.description
    if meta.default is not None:
        schema.default = coerce_default(schema, meta.default)


def coerce_default(schema: Schema, literal: str) -> Any:
    kind = _DEFAULT_KINDS.get(schema.type or "")
    if kind is None:
        return literal
    try:
        return convert(kind, literal)
    except ValueError as exc:
        raise ConfigurationError(f"default {literal!r} is not a valid {schema.type}") from exc


def _unwrap_optional(tp: Any) -> Any:
    origin = get_origin(tp)
    if origin is not Union and origin is not types.UnionType:
        return tp
    members = [a for a in get_args(tp) if a is not type(None)]
    if len(members) != 1:
        raise UnsupportedTypeError(tp, "only Optional[X] unions are supported")
    return members[0]


def _temporal_schema(tp: type) -> Schema:
    if issubclass(tp, datetime.date) and not issubclass(tp, datetime.datetime):
        return Schema(type="string", format="date")
    return Schema(type="string", format="date-time")
