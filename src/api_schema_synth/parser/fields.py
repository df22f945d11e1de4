"""Model field introspection.

Turns a model class (dataclass, pydantic model, or plain annotated class)
into an ordered list of ``ModelField`` carrying the resolved annotation and
the parsed tag metadata.
"""

import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel, ConfigDict

from api_schema_synth.parser.tags import Tag, Tags, parse_tag

JSON = "json"
FORM = "form"
QUERY = "query"
PATH = "path"
HEADER = "header"
COOKIE = "cookie"
DESCRIPTION = "description"
DEFAULT = "default"
VALIDATE = "validate"

BINDING_KEYS = (JSON, FORM, QUERY, PATH, HEADER, COOKIE)


class FieldMetadata(BaseModel):
    """Per-field annotations, parsed once per field visit."""

    model_config = ConfigDict(frozen=True)

    names: dict[str, str] = {}  # binding key -> name
    description: str | None = None
    default: str | None = None
    rules: tuple[str, ...] = ()

    @property
    def required(self) -> bool:
        return "required" in self.rules

    def name_for(self, key: str) -> str | None:
        """Binding name for ``key``, or None when the field has no such tag."""
        return self.names.get(key)

    @classmethod
    def from_tags(cls, tags: Tags) -> "FieldMetadata":
        names = {key: tags[key].name for key in BINDING_KEYS if key in tags}
        description = tags[DESCRIPTION].value if DESCRIPTION in tags else None
        default = tags[DEFAULT].value if DEFAULT in tags else None
        rules: tuple[str, ...] = ()
        if VALIDATE in tags:
            rules = tuple(r.strip() for r in tags[VALIDATE].value.split(",") if r.strip())
        return cls(names=names, description=description, default=default, rules=rules)


@dataclass(frozen=True)
class ModelField:
    name: str
    annotation: Any
    metadata: FieldMetadata

    @property
    def exported(self) -> bool:
        return not self.name.startswith("_")

    def binding_name(self, key: str) -> str | None:
        """Name under ``key``; an empty tag name such as ``json:",omitempty"`` falls back to the field name."""
        name = self.metadata.name_for(key)
        if name == "":
            return self.name
        return name


def is_model(tp: Any) -> bool:
    """True for classes whose fields become object properties."""
    origin = get_origin(tp) or tp
    if not inspect.isclass(origin):
        return False
    if dataclasses.is_dataclass(origin) or issubclass(origin, BaseModel):
        return True
    if origin.__module__ == "builtins":
        return False
    # fields may all be inherited
    return any(getattr(base, "__annotations__", None) for base in origin.__mro__ if base is not object)


def iter_fields(tp: Any) -> list[ModelField]:
    """Return the fields of a model type in declaration order."""
    origin = get_origin(tp) or tp
    typevars = _typevar_map(tp, origin)

    if issubclass(origin, BaseModel):
        result = []
        for name, info in origin.model_fields.items():
            tags = _collect_tags(info.metadata)
            annotation = _substitute(info.annotation, typevars)
            result.append(ModelField(name, annotation, FieldMetadata.from_tags(tags)))
        return result

    hints = get_type_hints(origin, include_extras=True)
    if dataclasses.is_dataclass(origin):
        declared = [(f.name, f.metadata.get("tag")) for f in dataclasses.fields(origin)]
    else:
        declared = [(name, None) for name, hint in hints.items() if get_origin(hint) is not ClassVar]

    result = []
    for name, raw in declared:
        annotation, extras = _split_annotated(hints[name])
        tags = _collect_tags(extras)
        if raw:
            tags = tags.merge(parse_tag(raw))
        result.append(ModelField(name, _substitute(annotation, typevars), FieldMetadata.from_tags(tags)))
    return result


def _split_annotated(hint: Any) -> tuple[Any, tuple]:
    if get_origin(hint) is Annotated:
        annotation, *extras = get_args(hint)
        return annotation, tuple(extras)
    return hint, ()


def _collect_tags(extras) -> Tags:
    tags = Tags()
    for extra in extras:
        if isinstance(extra, Tag):
            tags = tags.merge(extra.parse())
    return tags


def _typevar_map(tp: Any, origin: Any) -> dict[TypeVar, Any]:
    params = getattr(origin, "__parameters__", ())
    args = get_args(tp) if tp is not origin else ()
    return dict(zip(params, args))


def _substitute(hint: Any, typevars: dict[TypeVar, Any]) -> Any:
    """Replace type variables of a generic model with its concrete arguments."""
    if not typevars:
        return hint
    if isinstance(hint, TypeVar):
        return typevars.get(hint, Any)

    origin = get_origin(hint)
    args = get_args(hint)
    if origin is None or not args:
        return hint

    new_args = tuple(_substitute(arg, typevars) for arg in args)
    if origin is Annotated:
        return Annotated[new_args]
    if origin is Union or origin is types.UnionType:
        return Union[new_args]
    if origin is typing.Literal:
        return hint
    return origin[new_args]
