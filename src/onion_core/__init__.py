"""onion-core — onion-model middleware composition and dispatch.

Zero infrastructure dependencies. Pydantic models are supported as
contexts.
"""

from __future__ import annotations

from .context import clone_context
from .middleware import (
    LoggingMiddleware,
    Pipeline,
    check_middleware,
    check_middlewares,
    compose,
)
from .onion import Onion
from .ports import MiddlewareFactory, MiddlewareHandler, NextHandler
from .primitives import (
    MiddlewareTypeError,
    NextCalledMultipleTimesError,
    OnionError,
)

__all__: list[str] = [
    "LoggingMiddleware",
    "MiddlewareFactory",
    "MiddlewareHandler",
    "MiddlewareTypeError",
    "NextCalledMultipleTimesError",
    "NextHandler",
    "Onion",
    "OnionError",
    "Pipeline",
    "check_middleware",
    "check_middlewares",
    "clone_context",
    "compose",
]
