"""Security requirements a route can declare.

Each implementation names the component it is stored under
(``provider``) and the OpenAPI security scheme describing it.
"""

from abc import ABC, abstractmethod

from api_schema_synth.schema.base import SecurityScheme

API_KEY_AUTH = "ApiKeyAuth"
BEARER_AUTH = "BearerAuth"
BASIC_AUTH = "BasicAuth"


class Security(ABC):
    @abstractmethod
    def provider(self) -> str:
        """Key under components.securitySchemes."""

    @abstractmethod
    def scheme(self) -> SecurityScheme:
        """The scheme definition stored under ``provider()``."""


class ApiKey(Security):
    """An API key sent in a header, query parameter or cookie."""

    def __init__(self, name: str = "X-API-Key", in_: str = "header", description: str | None = None):
        self.name = name
        self.in_ = in_
        self.description = description

    def provider(self) -> str:
        return API_KEY_AUTH

    def scheme(self) -> SecurityScheme:
        return SecurityScheme(type="apiKey", in_=self.in_, name=self.name, description=self.description)


class HTTPBearer(Security):
    def __init__(self, bearer_format: str | None = "JWT", description: str | None = None):
        self.bearer_format = bearer_format
        self.description = description

    def provider(self) -> str:
        return BEARER_AUTH

    def scheme(self) -> SecurityScheme:
        return SecurityScheme(
            type="http",
            scheme="bearer",
            bearer_format=self.bearer_format,
            description=self.description,
        )


class HTTPBasic(Security):
    def __init__(self, description: str | None = None):
        self.description = description

    def provider(self) -> str:
        return BASIC_AUTH

    def scheme(self) -> SecurityScheme:
        return SecurityScheme(type="http", scheme="basic", description=self.description)
