"""Error taxonomy for schema synthesis.

Configuration errors are fatal: they mean a model definition cannot be
represented and the document build must stop. Coercion rejections are
raised at request time by the binding layer, never during synthesis.
"""


class SchemaSynthesisError(Exception):
    """Base class for every error raised while synthesizing schemas."""


class ConfigurationError(SchemaSynthesisError):
    """A model definition is invalid and cannot be turned into a schema."""


class TagSyntaxError(ConfigurationError):
    """A field tag could not be parsed."""

    def __init__(self, tag: str, reason: str):
        self.tag = tag
        self.reason = reason
        super().__init__(f"bad tag syntax {tag!r}: {reason}")


class UnsupportedTypeError(ConfigurationError):
    """A field annotation has no schema representation."""

    def __init__(self, annotation: object, context: str = ""):
        self.annotation = annotation
        where = f" ({context})" if context else ""
        super().__init__(f"cannot derive a schema for {annotation!r}{where}")


class EnumValueError(ValueError):
    """An inbound value is not a member of its enum's declared values."""

    def __init__(self, enum_name: str, value: object):
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"enum '{enum_name}' invalid value '{value}'")
