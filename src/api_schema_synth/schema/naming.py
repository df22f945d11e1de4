"""Canonical component titles and reference pointers."""

import re
import types
from typing import Annotated, Any, Union, get_args, get_origin

from api_schema_synth.schema.base import REF_PREFIX

_QUALIFIED_NAME = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*")


def unwrap_model(tp: Any) -> Any:
    """Strip ``Annotated`` and ``Optional`` wrappers from a top-level model type.

    Unions with more than one non-None member are returned unchanged.
    """
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
            continue
        if origin is Union or origin is types.UnionType:
            members = [a for a in get_args(tp) if a is not type(None)]
            if len(members) == 1:
                tp = members[0]
                continue
        return tp


def type_name(tp: Any) -> str:
    """Fully qualified display name of a type, generics included."""
    origin = get_origin(tp)
    args = get_args(tp)
    if origin is not None and args:
        return f"{type_name(origin)}[{', '.join(type_name(a) for a in args)}]"
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}".replace(".<locals>", "")
    return getattr(tp, "__name__", None) or repr(tp)


def remove_package_name(name: str) -> str:
    """Strip module qualifiers and fold generic arguments into one token.

    ``app.models.Page[app.models.User, int]`` becomes ``PageUserInt``.
    Applying it to its own output returns the same title.
    """
    tokens = [match.group(0).rsplit(".", 1)[-1] for match in _QUALIFIED_NAME.finditer(name)]
    if not tokens:
        return name
    head, *rest = tokens
    return head + "".join(token[:1].upper() + token[1:] for token in rest)


def canonical_title(tp: Any) -> str:
    """Registry key for ``tp``; strings are treated as type names."""
    if isinstance(tp, str):
        return remove_package_name(tp)
    return remove_package_name(type_name(unwrap_model(tp)))


def ref_name(title: str) -> str:
    return REF_PREFIX + title
