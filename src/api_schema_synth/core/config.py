from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Synthesis settings loaded from environment variables.

    Every variable is prefixed with ``API_SCHEMA_SYNTH_``, e.g.
    ``API_SCHEMA_SYNTH_DEFAULT_CONTENT_TYPE=application/xml``.
    """

    OPENAPI_VERSION: str = Field(default="3.0.0", description="Value of the document's 'openapi' field")
    DEFAULT_CONTENT_TYPE: str = Field(
        default="application/json",
        description="Media type used when a route does not name one",
    )
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="API_SCHEMA_SYNTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
