"""Model types shared by the test modules."""

import datetime
import enum
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from api_schema_synth.kinds import Float32, Int64, Uint8, Uint32, UploadFile
from api_schema_synth.parser.tags import Tag

T = TypeVar("T")


class Level(enum.IntEnum):
    A = 1
    B = 2


class Color(str, enum.Enum):
    RED = "red"
    GREEN = "green"


class Weekday(int):
    """Enumerable through ``enums()`` rather than ``enum.Enum``."""

    @classmethod
    def enums(cls):
        return {"MONDAY": 1, "TUESDAY": 2}


@dataclass
class Node:
    value: Annotated[int, Tag('json:"value" form:"value"')] = 0
    next: Annotated[Optional["Node"], Tag('json:"next" form:"next"')] = None


@dataclass
class Book:
    title: Annotated[str, Tag('json:"title" validate:"required"')] = ""
    author: Annotated[Optional["Author"], Tag('json:"author"')] = None


@dataclass
class Author:
    name: Annotated[str, Tag('json:"name"')] = ""
    books: Annotated[list[Book], Tag('json:"books"')] = field(default_factory=list)


@dataclass
class Address:
    city: Annotated[str, Tag('json:"city" form:"city" validate:"required"')] = ""


@dataclass
class Primitives:
    small: Annotated[Uint8, Tag('json:"small"')] = Uint8(0)
    big: Annotated[Int64, Tag('json:"big"')] = Int64(0)
    ratio: Annotated[Float32, Tag('json:"ratio"')] = Float32(0)
    count: Annotated[Uint32, Tag('json:"count"')] = Uint32(0)
    plain: Annotated[int, Tag('json:"plain"')] = 0
    score: Annotated[float, Tag('json:"score"')] = 0.0
    flag: Annotated[bool, Tag('json:"flag"')] = False
    raw: Annotated[bytes, Tag('json:"raw"')] = b""


@dataclass
class Profile:
    name: Annotated[str, Tag('json:"name" description:"Display name" validate:"required,max=64"')] = ""
    age: Annotated[int, Tag('json:"age" default:"18"')] = 18
    created: Annotated[datetime.datetime, Tag('json:"created"')] = None
    birthday: Annotated[datetime.date, Tag('json:"birthday"')] = None
    level: Annotated[Level, Tag('json:"level" description:"ignored on refs"')] = Level.A
    address: Annotated[Address, Tag('json:"address"')] = None
    tags: Annotated[list[str], Tag('json:"tags" description:"Free tags"')] = field(default_factory=list)
    addresses: Annotated[list[Address], Tag('json:"addresses"')] = field(default_factory=list)
    extra: Annotated[dict[str, Any], Tag('json:"extra"')] = field(default_factory=dict)
    counters: Annotated[dict[str, int], Tag('json:"counters"')] = field(default_factory=dict)
    places: Annotated[dict[str, Address], Tag('json:"places"')] = field(default_factory=dict)
    anything: Annotated[Any, Tag('json:"anything"')] = None
    internal: str = ""
    _secret: Annotated[str, Tag('json:"secret"')] = ""
    hidden: Annotated[str, Tag('json:"-"')] = ""


@dataclass
class UploadForm:
    title: Annotated[str, Tag('form:"title" validate:"required"')] = ""
    file: Annotated[UploadFile, Tag('form:"file"')] = None
    files: Annotated[list[UploadFile], Tag('form:"files"')] = field(default_factory=list)
    note: Annotated[str, Tag('json:"note"')] = ""


@dataclass
class SearchQuery:
    q: Annotated[str, Tag('query:"q" validate:"required" description:"Search text"')] = ""
    page: Annotated[int, Tag('query:"page" default:"1"')] = 1
    user_id: Annotated[int, Tag('path:"id"')] = 0
    token: Annotated[str, Tag('header:"X-Token"')] = ""
    session: Annotated[str, Tag('cookie:"session"')] = ""
    both: Annotated[str, Tag('query:"both" header:"X-Both"')] = ""
    color: Annotated[Color, Tag('query:"color"')] = Color.RED
    body_only: Annotated[str, Tag('form:"body_only"')] = ""


@dataclass
class TaggedByMetadata:
    name: str = field(default="", metadata={"tag": 'json:"name" validate:"required"'})


@dataclass
class Page(Generic[T]):
    items: Annotated[list[T], Tag('json:"items"')] = field(default_factory=list)
    total: Annotated[int, Tag('json:"total"')] = 0


@dataclass
class Schedule:
    day: Annotated[Weekday, Tag('json:"day"')] = Weekday(1)


class UserOut(BaseModel):
    id: Annotated[int, Tag('json:"id" validate:"required"')]
    email: Annotated[str, Tag('json:"email" description:"Primary email"')] = ""
    friends: Annotated[List["UserOut"], Tag('json:"friends"')] = []


class PlainBase:
    label: Annotated[str, Tag('json:"label" validate:"required"')]


class PlainChild(PlainBase):
    pass


@dataclass
class Holder:
    child: Annotated[PlainChild, Tag('json:"child"')] = None


@dataclass
class OmitEmpty:
    nickname: Annotated[str, Tag('json:",omitempty"')] = ""
    page: Annotated[int, Tag('query:",omitempty"')] = 0


class BadTag:
    name: Annotated[str, Tag('json:name')]


class Unsupported:
    handler: Annotated[Any, Tag('json:"handler"')]
    callback: Annotated[type(len), Tag('json:"callback"')]
