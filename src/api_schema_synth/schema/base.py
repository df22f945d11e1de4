"""OpenAPI document fragments produced by the synthesis engine.

All builders emit these models; ``to_dict`` gives the JSON-ready form with
OpenAPI key names and unset attributes omitted.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer

REF_PREFIX = "#/components/schemas/"


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Schema(_Node):
    """A single schema object: primitive, object, array or enum."""

    type: str | None = None
    format: str | None = None
    title: str | None = None
    description: str | None = None
    default: Any = None
    minimum: int | float | None = None
    enum: list[Any] | None = None
    enum_varnames: list[str] | None = Field(default=None, alias="x-enum-varnames")
    items: "SchemaRef | None" = None
    properties: "dict[str, SchemaRef] | None" = None
    required: list[str] | None = None
    additional_properties: "SchemaRef | bool | None" = Field(default=None, alias="additionalProperties")

    def add_required(self, name: str) -> None:
        if self.required is None:
            self.required = []
        if name not in self.required:
            self.required.append(name)


class SchemaRef(_Node):
    """Either a ``$ref`` pointer or an inline schema, never both."""

    ref: str = ""
    value: Schema | None = None

    @classmethod
    def of(cls, ref: str, schema: Schema | None) -> "SchemaRef":
        if ref:
            return cls(ref=ref)
        return cls(value=schema)

    @model_serializer(mode="wrap")
    def _serialize(self, handler):
        if self.ref:
            return {"$ref": self.ref}
        return handler(self).get("value") or {}


Schema.model_rebuild()
SchemaRef.model_rebuild()


class Header(_Node):
    description: str | None = None
    required: bool | None = None
    schema_: SchemaRef | None = Field(default=None, alias="schema")


class Parameter(_Node):
    """A query, path, header or cookie parameter of an operation."""

    name: str
    in_: str = Field(alias="in")  # query / path / header / cookie
    required: bool = False
    description: str | None = None
    schema_: SchemaRef = Field(alias="schema")


class MediaType(_Node):
    schema_: SchemaRef = Field(alias="schema")


class RequestBody(_Node):
    description: str | None = None
    required: bool = True
    content: dict[str, MediaType] = {}


class Response(_Node):
    description: str = ""
    headers: dict[str, Header] | None = None
    content: dict[str, MediaType] | None = None


class ResponseItem(BaseModel):
    """What a route declares for one status code."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    description: str = ""
    model: Any = None
    headers: dict[str, Header] | None = None


class SecurityScheme(_Node):
    type: str
    scheme: str | None = None
    bearer_format: str | None = Field(default=None, alias="bearerFormat")
    in_: str | None = Field(default=None, alias="in")
    name: str | None = None
    description: str | None = None
