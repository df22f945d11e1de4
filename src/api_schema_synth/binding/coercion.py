"""Request-time coercion rules consumed by the binding layer.

The binding layer looks up the rule for a field's declared type and runs
the raw inbound value through it before validation. A rule raises
``EnumValueError`` to reject the request.
"""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

CoercionFunc = Callable[[Any], Any]


class CoercionRegistry:
    """Type -> coercion function table."""

    def __init__(self):
        self._funcs: dict[type, CoercionFunc] = {}

    def __contains__(self, tp: type) -> bool:
        return tp in self._funcs

    def register(self, tp: type, func: CoercionFunc) -> None:
        logger.debug("Registering coercion for %s", getattr(tp, "__name__", tp))
        self._funcs[tp] = func

    def coerce(self, tp: type, raw: Any) -> Any:
        """Run ``raw`` through the rule for ``tp``; unknown types pass through."""
        func = self._funcs.get(tp)
        if func is None:
            return raw
        return func(raw)
