"""One document-build pass.

A ``SchemaSession`` owns the component registry and the coercion rules
derived while building one document. Start a new session for every
rebuild; sessions are not meant to be shared between threads.
"""

from collections.abc import Mapping
from typing import Any

from api_schema_synth.binding.coercion import CoercionRegistry
from api_schema_synth.core.config import Settings, get_settings
from api_schema_synth.generator.bodies import request_body_reference, responses_reference
from api_schema_synth.generator.parameters import parameters_for_model
from api_schema_synth.schema.base import Parameter, RequestBody, Response, ResponseItem, Schema
from api_schema_synth.schema.registry import ComponentRegistry
from api_schema_synth.schema.walker import SchemaWalker


class SchemaSession:
    def __init__(self, settings: Settings | None = None, coercions: CoercionRegistry | None = None):
        self.settings = settings or get_settings()
        self.registry = ComponentRegistry()
        self.walker = SchemaWalker(self.registry, coercions)

    @property
    def coercions(self) -> CoercionRegistry:
        return self.walker.coercions

    def synthesize_component(self, model: Any, inbound: bool) -> None:
        self.walker.synthesize_component(model, inbound)

    def schema_for_value(self, value: Any, inbound: bool) -> tuple[str, Schema]:
        return self.walker.schema_for_value(value, inbound)

    def parameters_for_model(self, model: Any) -> list[Parameter]:
        return parameters_for_model(self.walker, model)

    def request_body_reference(self, type_name: Any, content_type: str = "") -> RequestBody:
        return request_body_reference(type_name, content_type or self.settings.DEFAULT_CONTENT_TYPE)

    def responses_reference(self, responses: Mapping[str, ResponseItem], content_type: str = "") -> dict[str, Response]:
        return responses_reference(self.walker, responses, content_type or self.settings.DEFAULT_CONTENT_TYPE)

    def components(self) -> dict[str, Any]:
        return self.registry.to_dict()
