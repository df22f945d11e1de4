"""Per-build table of named, reusable component schemas."""

import logging
from collections.abc import Iterator
from typing import Any

from api_schema_synth.core.errors import ConfigurationError
from api_schema_synth.schema.base import Schema

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Maps canonical titles to component schemas for one document build.

    Adding an existing title replaces its schema; titles stay unique.
    """

    def __init__(self):
        self._schemas: dict[str, Schema] = {}

    def __contains__(self, title: str) -> bool:
        return title in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def get(self, title: str) -> Schema | None:
        return self._schemas.get(title)

    def add(self, title: str, schema: Schema) -> None:
        if not title:
            raise ConfigurationError("component title must not be empty")
        if title in self._schemas:
            logger.debug("Replacing component %s", title)
        else:
            logger.debug("Registering component %s", title)
        self._schemas[title] = schema

    def reset(self) -> None:
        self._schemas.clear()

    def to_dict(self) -> dict[str, Any]:
        return {title: schema.to_dict() for title, schema in self._schemas.items()}
