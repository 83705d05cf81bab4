"""Middleware stack validation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..primitives.exceptions import (
    MIDDLEWARE_NOT_CALLABLE,
    MIDDLEWARE_STACK_NOT_ARRAY,
    MiddlewareTypeError,
)

# Sequences that are never a middleware stack.
_TEXT_TYPES = (str, bytes, bytearray)


def check_middleware(middleware: Any) -> None:
    """Raise :class:`MiddlewareTypeError` unless *middleware* is callable."""
    if not callable(middleware):
        raise MiddlewareTypeError(MIDDLEWARE_NOT_CALLABLE)


def check_middlewares(middlewares: Any) -> None:
    """Validate a candidate middleware stack.

    The stack must be an ordered sequence (``list``, ``tuple``, ...) whose
    elements are all callable factories. Pure and synchronous.

    Raises
    ------
    MiddlewareTypeError
        If *middlewares* is not a sequence, or any element is not callable.
    """
    if not isinstance(middlewares, Sequence) or isinstance(middlewares, _TEXT_TYPES):
        raise MiddlewareTypeError(MIDDLEWARE_STACK_NOT_ARRAY)
    for middleware in middlewares:
        check_middleware(middleware)
