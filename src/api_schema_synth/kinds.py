"""Primitive kinds, width markers and capability interfaces for model types.

Model authors annotate fields with the markers below when they need an
explicit bit width, e.g. ``count: Uint32`` or ``ratio: Float32``. Plain
``int`` and ``float`` map to the platform integer and a 64-bit float.
"""

import datetime
import enum
from abc import ABC
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic_core import core_schema


class Kind(enum.Enum):
    """Primitive runtime kinds the type classifier understands."""

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"


class _IntMarker(int):
    kind: Kind

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        return core_schema.no_info_after_validator_function(cls, core_schema.int_schema())


class _FloatMarker(float):
    kind: Kind

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        return core_schema.no_info_after_validator_function(cls, core_schema.float_schema())


class Int8(_IntMarker):
    kind = Kind.INT8


class Int16(_IntMarker):
    kind = Kind.INT16


class Int32(_IntMarker):
    kind = Kind.INT32


class Int64(_IntMarker):
    kind = Kind.INT64


class Uint(_IntMarker):
    kind = Kind.UINT


class Uint8(_IntMarker):
    kind = Kind.UINT8


class Uint16(_IntMarker):
    kind = Kind.UINT16


class Uint32(_IntMarker):
    kind = Kind.UINT32


class Uint64(_IntMarker):
    kind = Kind.UINT64


class Float32(_FloatMarker):
    kind = Kind.FLOAT32


class Float64(_FloatMarker):
    kind = Kind.FLOAT64


@dataclass
class UploadFile:
    """A raw file part received through a multipart form."""

    filename: str = ""
    content_type: str = ""
    content: bytes = b""


@runtime_checkable
class EnumProvider(Protocol):
    """Types exposing their own name -> value table.

    The values must all share one primitive type, and the class must be
    constructible from a single value so coerced input can be converted.
    """

    @classmethod
    def enums(cls) -> Mapping[str, Any]: ...


class TemporalMarker(ABC):
    """Structures that serialize as a timestamp string instead of an object."""


TemporalMarker.register(datetime.date)
TemporalMarker.register(datetime.datetime)
