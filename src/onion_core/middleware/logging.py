"""LoggingMiddleware — logs each pass through the onion."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..ports.middleware import MiddlewareHandler, NextHandler

logger = logging.getLogger("onion_core.middleware")


class LoggingMiddleware:
    """Middleware factory logging entry, duration and failures.

    Register the instance itself; calling it builds the handler::

        onion.use(LoggingMiddleware("checkout"))
    """

    def __init__(
        self, name: str = "pipeline", log: logging.Logger | None = None
    ) -> None:
        self.name = name
        self._log = log or logger

    def __call__(self) -> MiddlewareHandler:
        name = self.name
        log = self._log

        async def handler(context: Any, next_handler: NextHandler) -> Any:
            log.info("Entering %s (context=%s)", name, type(context).__name__)
            start = time.perf_counter()
            try:
                result = await next_handler()
            except Exception:
                elapsed = (time.perf_counter() - start) * 1000
                log.exception("%s failed after %.2fms", name, elapsed)
                raise
            elapsed = (time.perf_counter() - start) * 1000
            log.info("%s completed in %.2fms", name, elapsed)
            return result

        return handler
