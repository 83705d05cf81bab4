"""Primitives — exception hierarchy."""

from .exceptions import (
    MIDDLEWARE_NOT_CALLABLE,
    MIDDLEWARE_STACK_NOT_ARRAY,
    NEXT_CALLED_MULTIPLE_TIMES,
    MiddlewareTypeError,
    NextCalledMultipleTimesError,
    OnionError,
)

__all__ = [
    "MIDDLEWARE_NOT_CALLABLE",
    "MIDDLEWARE_STACK_NOT_ARRAY",
    "NEXT_CALLED_MULTIPLE_TIMES",
    "MiddlewareTypeError",
    "NextCalledMultipleTimesError",
    "OnionError",
]
