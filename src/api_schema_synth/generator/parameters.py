"""Operation parameters from a request model's location tags."""

from typing import Any

from api_schema_synth.core.errors import UnsupportedTypeError
from api_schema_synth.parser.fields import COOKIE, HEADER, PATH, QUERY, is_model, iter_fields
from api_schema_synth.schema.base import Parameter, SchemaRef
from api_schema_synth.schema.walker import SchemaWalker, coerce_default, resolve_model

# first match wins
PARAMETER_LOCATIONS = (QUERY, PATH, HEADER, COOKIE)


def parameters_for_model(walker: SchemaWalker, model: Any) -> list[Parameter]:
    """One parameter per field tagged query/path/header/cookie, in field order."""
    if model is None:
        return []
    tp = resolve_model(model)
    if not is_model(tp):
        raise UnsupportedTypeError(tp, "request model must be a structure")

    parameters = []
    for field in iter_fields(tp):
        meta = field.metadata
        location = next((key for key in PARAMETER_LOCATIONS if meta.name_for(key) is not None), None)
        if location is None:
            continue

        ref, schema = walker.schema_for_type(field.annotation, inbound=True)
        if not ref and meta.default is not None:
            schema.default = coerce_default(schema, meta.default)

        parameters.append(
            Parameter(
                name=field.binding_name(location),
                in_=location,
                required=meta.required or location == PATH,
                description=meta.description,
                schema_=SchemaRef.of(ref, schema),
            )
        )
    return parameters
