"""Errors raised by the onion dispatch engine."""

from __future__ import annotations

MIDDLEWARE_STACK_NOT_ARRAY = "Middlewares stack must be an array!"
MIDDLEWARE_NOT_CALLABLE = "Middleware must be composed of functions!"
NEXT_CALLED_MULTIPLE_TIMES = "next() called multiple times"


class OnionError(Exception):
    """Root exception for the onion-core package."""


class MiddlewareTypeError(OnionError, TypeError):
    """Raised when a middleware stack or a single middleware is malformed."""


class NextCalledMultipleTimesError(OnionError, RuntimeError):
    """Raised when a handler invokes its ``next`` callback more than once."""

    def __init__(self, message: str = NEXT_CALLED_MULTIPLE_TIMES) -> None:
        super().__init__(message)
