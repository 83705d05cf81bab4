"""Middleware protocols — factory and handler shapes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

#: Zero-argument callable handed to every handler; awaiting it runs the
#: rest of the pipeline and yields the inner layer's result.
NextHandler = Callable[[], Awaitable[Any]]


@runtime_checkable
class MiddlewareHandler(Protocol):
    """Handler invoked for one layer of the onion.

    Code before ``await next_handler()`` runs on the way in, code after it
    runs on the way out. Handlers may be plain functions or coroutine
    functions.
    """

    def __call__(self, context: Any, next_handler: NextHandler) -> Any:
        """Process *context* and optionally delegate to the next layer.

        Returns
        -------
        A value, or an awaitable resolving to a value. The value returned
        by the outermost handler becomes the result of the pipeline.
        """
        ...


@runtime_checkable
class MiddlewareFactory(Protocol):
    """Zero-argument callable producing a :class:`MiddlewareHandler`.

    The factory is invoked each time its layer is dispatched, so a fresh
    handler closure may be built per execution.
    """

    def __call__(self) -> MiddlewareHandler: ...
