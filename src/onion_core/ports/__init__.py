"""Ports — protocol definitions for middleware."""

from onion_core.ports.middleware import (
    MiddlewareFactory,
    MiddlewareHandler,
    NextHandler,
)

__all__ = [
    "MiddlewareFactory",
    "MiddlewareHandler",
    "NextHandler",
]
