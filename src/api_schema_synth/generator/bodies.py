"""Request body and response descriptors pointing at registered components."""

from collections.abc import Mapping
from typing import Any

from api_schema_synth.schema.base import MediaType, RequestBody, Response, ResponseItem, SchemaRef
from api_schema_synth.schema.naming import canonical_title, ref_name
from api_schema_synth.schema.walker import SchemaWalker, resolve_model, resolve_type


def request_body_reference(type_name: Any, content_type: str) -> RequestBody:
    """A required request body whose schema references ``type_name``'s component."""
    if not isinstance(type_name, str):
        type_name = resolve_model(type_name)
    schema = SchemaRef(ref=ref_name(canonical_title(type_name)))
    return RequestBody(required=True, content={content_type: MediaType(schema_=schema)})


def responses_reference(
    walker: SchemaWalker,
    responses: Mapping[str, ResponseItem],
    content_type: str,
) -> dict[str, Response]:
    """Responses keyed by status; entries without a model are left out.

    Model types are referenced, anything else (lists, primitives) is inlined.
    """
    result = {}
    for status, item in responses.items():
        if item.model is None:
            continue
        ref, schema = walker.schema_for_type(resolve_type(item.model), inbound=False)
        result[str(status)] = Response(
            description=item.description,
            headers=item.headers,
            content={content_type: MediaType(schema_=SchemaRef.of(ref, schema))},
        )
    return result
