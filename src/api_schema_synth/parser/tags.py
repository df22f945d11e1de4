"""Field tag parser.

A tag is a space-separated list of ``key:"value"`` pairs attached to a
model field, for example::

    name: Annotated[str, Tag('json:"name" validate:"required,max=64"')]

Parsing follows the conventional struct-tag grammar: keys are runs of
printable characters other than space, colon and double quote; values are
double-quoted and may escape quotes with a backslash.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from api_schema_synth.core.errors import TagSyntaxError

_ESCAPE = re.compile(r"\\(.)")


@dataclass(frozen=True)
class TagValue:
    """One ``key:"value"`` pair. ``name`` is the value up to the first comma."""

    key: str
    value: str
    name: str
    options: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, key: str, value: str) -> "TagValue":
        name, *options = value.split(",")
        return cls(key=key, value=value, name=name, options=tuple(options))


class Tags(Mapping[str, TagValue]):
    """Parsed tag keys in declaration order. Missing keys read as ``None``."""

    def __init__(self, values: dict[str, TagValue] | None = None):
        self._values = dict(values or {})

    def __getitem__(self, key: str) -> TagValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Tags({self._values!r})"

    def merge(self, other: "Tags") -> "Tags":
        for key in other:
            if key in self._values:
                raise TagSyntaxError(key, "duplicate tag key")
        return Tags({**self._values, **other._values})


@dataclass(frozen=True)
class Tag:
    """Raw tag text attached to a field through ``Annotated``."""

    text: str
    _parsed: Tags | None = field(default=None, init=False, repr=False, compare=False)

    def parse(self) -> Tags:
        if self._parsed is None:
            object.__setattr__(self, "_parsed", parse_tag(self.text))
        return self._parsed


def parse_tag(text: str) -> Tags:
    """Parse raw tag text into ``Tags``.

    Raises TagSyntaxError on anything that is not a well formed sequence of
    quoted key/value pairs.
    """
    values: dict[str, TagValue] = {}
    i, n = 0, len(text)
    while True:
        while i < n and text[i] == " ":
            i += 1
        if i >= n:
            break

        start = i
        while i < n and text[i] > " " and text[i] not in ':"' and text[i] != "\x7f":
            i += 1
        key = text[start:i]
        if not key:
            raise TagSyntaxError(text, f"empty key at offset {start}")
        if i >= n or text[i] != ":":
            raise TagSyntaxError(text, f"key {key!r} has no value")
        i += 1
        if i >= n or text[i] != '"':
            raise TagSyntaxError(text, f"value of {key!r} is not quoted")

        i += 1
        start = i
        while i < n and text[i] != '"':
            if text[i] == "\\":
                i += 1
            i += 1
        if i >= n:
            raise TagSyntaxError(text, f"unterminated value for {key!r}")
        raw = text[start:i]
        i += 1

        if key in values:
            raise TagSyntaxError(text, f"duplicate key {key!r}")
        values[key] = TagValue.from_text(key, _ESCAPE.sub(r"\1", raw))

        if i < n and text[i] != " ":
            raise TagSyntaxError(text, f"missing space after value of {key!r}")
    return Tags(values)
