"""Process-wide logging setup.

Modules log through ``logging.getLogger(__name__)``; applications call
``configure_logging`` once to attach a stdout handler.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(level: str | None = None) -> None:
    """Configure process-wide logging for document builds.

    Falls back to the configured ``LOG_LEVEL`` when no level is given.
    """
    if level is None:
        from api_schema_synth.core.config import get_settings

        level = get_settings().LOG_LEVEL

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())
