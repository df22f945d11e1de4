"""OpenAPI document assembly.

Routes are declared as plain ``Route`` descriptors; ``OpenAPIDocument``
walks them with a fresh ``SchemaSession`` on every build and produces a
complete OpenAPI 3.0 document.
"""

import json
import logging
import posixpath
import re
import threading
from dataclasses import dataclass, field
from typing import Any

import yaml

from api_schema_synth.core.config import Settings, get_settings
from api_schema_synth.schema.base import ResponseItem
from api_schema_synth.security import Security
from api_schema_synth.session import SchemaSession

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE")
BODY_METHODS = {"POST", "PUT", "PATCH"}

_PATH_PARAM = re.compile(r"/:([0-9a-zA-Z_]+)")


def fix_path(path: str) -> str:
    """Rewrite ``/:id`` segments to the OpenAPI ``/{id}`` form."""
    return _PATH_PARAM.sub(r"/{\1}", path)


def default_summary(path: str, method: str) -> str:
    return path.lstrip("/").replace("_", " ") + " " + method.lower()


def join_path(*parts: str) -> str:
    """Join URL path segments and clean the result; empty segments are ignored."""
    segments = [part for part in parts if part]
    if not segments:
        return ""
    joined = posixpath.normpath("/".join(segments))
    if joined.startswith("//"):
        joined = "/" + joined.lstrip("/")
    return joined


@dataclass
class Route:
    """Everything the document needs to know about one handler."""

    method: str
    path: str
    model: Any = None
    responses: dict[str, ResponseItem] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    summary: str = ""
    description: str = ""
    operation_id: str = ""
    deprecated: bool = False
    exclude: bool = False
    request_content_type: str = ""
    response_content_type: str = ""
    securities: list[Security] = field(default_factory=list)

    def __post_init__(self):
        self.method = self.method.upper()
        if self.method not in HTTP_METHODS:
            raise ValueError(f"unsupported HTTP method {self.method!r}")
        if not self.summary:
            self.summary = default_summary(self.path, self.method)
        if not self.description:
            self.description = self.summary


class OpenAPIDocument:
    """Collects routes and builds the OpenAPI document from them."""

    def __init__(
        self,
        title: str,
        version: str,
        description: str = "",
        servers: list[dict[str, Any]] | None = None,
        terms_of_service: str = "",
        contact: dict[str, str] | None = None,
        license_info: dict[str, str] | None = None,
        settings: Settings | None = None,
    ):
        self.title = title
        self.version = version
        self.description = description
        self.servers = list(servers or [])
        self.terms_of_service = terms_of_service
        self.contact = contact
        self.license_info = license_info
        self.settings = settings or get_settings()
        self.routes: list[Route] = []
        self.session: SchemaSession | None = None
        self._lock = threading.Lock()

    def add_route(self, route: Route) -> Route:
        self.routes.append(route)
        return route

    def route(self, method: str, path: str, **kwargs: Any) -> Route:
        return self.add_route(Route(method=method, path=path, **kwargs))

    def group(self, prefix: str, tags: list[str] | None = None, securities: list[Security] | None = None) -> "RouteGroup":
        return RouteGroup(self, prefix, tags, securities)

    def build(self) -> dict[str, Any]:
        """Build the whole document from scratch.

        Builds are serialized so a rebuild never interleaves with another.
        """
        with self._lock:
            session = SchemaSession(self.settings)
            security_schemes: dict[str, Any] = {}
            paths: dict[str, dict[str, Any]] = {}

            for route in self.routes:
                if route.exclude:
                    continue
                operation = self._operation(session, route, security_schemes)
                paths.setdefault(fix_path(route.path), {})[route.method.lower()] = operation

            components: dict[str, Any] = {"schemas": session.components()}
            if security_schemes:
                components["securitySchemes"] = security_schemes

            document = {
                "openapi": self.settings.OPENAPI_VERSION,
                "info": self._info(),
                "paths": paths,
                "components": components,
            }
            if self.servers:
                document["servers"] = self.servers

            self.session = session
            logger.info(
                "Built OpenAPI document %r: %d paths, %d schemas",
                self.title,
                len(paths),
                len(components["schemas"]),
            )
            return document

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.build(), indent=indent, ensure_ascii=False)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.build(), sort_keys=False, allow_unicode=True)

    def _info(self) -> dict[str, Any]:
        info: dict[str, Any] = {"title": self.title, "version": self.version}
        if self.description:
            info["description"] = self.description
        if self.terms_of_service:
            info["termsOfService"] = self.terms_of_service
        if self.contact:
            info["contact"] = self.contact
        if self.license_info:
            info["license"] = self.license_info
        return info

    def _operation(self, session: SchemaSession, route: Route, security_schemes: dict[str, Any]) -> dict[str, Any]:
        session.synthesize_component(route.model, inbound=True)
        for item in route.responses.values():
            session.synthesize_component(item.model, inbound=False)

        operation: dict[str, Any] = {
            "summary": route.summary,
            "description": route.description,
        }
        if route.tags:
            operation["tags"] = list(route.tags)
        if route.operation_id:
            operation["operationId"] = route.operation_id

        parameters = session.parameters_for_model(route.model)
        if parameters:
            operation["parameters"] = [p.to_dict() for p in parameters]
        if route.model is not None and route.method in BODY_METHODS:
            body = session.request_body_reference(route.model, route.request_content_type)
            operation["requestBody"] = body.to_dict()

        responses = session.responses_reference(route.responses, route.response_content_type)
        operation["responses"] = {status: r.to_dict() for status, r in responses.items()}
        if route.deprecated:
            operation["deprecated"] = True

        if route.securities:
            requirements = []
            for security in route.securities:
                provider = security.provider()
                security_schemes[provider] = security.scheme().to_dict()
                requirements.append({provider: []})
            operation["security"] = requirements
        return operation


class RouteGroup:
    """Routes sharing a path prefix, tags and securities.

    Member routes get the group's tags and securities appended to their own.
    Nested groups join their prefix onto the parent's and inherit its tags
    and securities.
    """

    def __init__(
        self,
        document: OpenAPIDocument,
        prefix: str = "",
        tags: list[str] | None = None,
        securities: list[Security] | None = None,
    ):
        self.document = document
        self.prefix = prefix
        self.tags = list(tags or [])
        self.securities = list(securities or [])

    def group(self, prefix: str, tags: list[str] | None = None, securities: list[Security] | None = None) -> "RouteGroup":
        return RouteGroup(
            self.document,
            join_path(self.prefix, prefix),
            self.tags + list(tags or []),
            self.securities + list(securities or []),
        )

    def route(self, method: str, path: str, **kwargs: Any) -> Route:
        # the default summary names the path relative to the group
        if not kwargs.get("summary"):
            kwargs["summary"] = default_summary(path, method)
        kwargs["tags"] = list(kwargs.get("tags") or []) + self.tags
        kwargs["securities"] = list(kwargs.get("securities") or []) + self.securities
        return self.document.route(method, join_path(self.prefix, path), **kwargs)
