"""Onion — holds a middleware stack and runs contexts through it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .context import clone_context as default_cloner
from .middleware.pipeline import Pipeline, compose
from .middleware.validation import check_middleware, check_middlewares

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .ports.middleware import MiddlewareFactory, MiddlewareHandler

logger = logging.getLogger("onion_core.pipeline")


class Onion:
    """Middleware orchestrator implementing the onion model.

    Factories run in registration order on the way in and unwind in
    reverse order on the way out. The pipeline composed from the default
    stack is cached until the stack changes.

    Parameters
    ----------
    middlewares:
        Optional initial stack of middleware factories. Defaults to empty.
    clone_context:
        Run every execution against a deep copy of the caller's context.
        ``False`` runs against the caller's object directly.
    cloner:
        Optional replacement for :func:`~onion_core.context.clone_context`.
    terminal:
        Optional default terminal continuation, invoked once dispatch
        moves past the last middleware.

    Raises
    ------
    MiddlewareTypeError
        If *middlewares* is not a sequence of callables.
    """

    def __init__(
        self,
        middlewares: Sequence[MiddlewareFactory] | None = None,
        *,
        clone_context: bool = True,
        cloner: Callable[[Any], Any] | None = None,
        terminal: MiddlewareHandler | None = None,
    ) -> None:
        if middlewares is None:
            middlewares = []
        check_middlewares(middlewares)
        self._middlewares: list[MiddlewareFactory] = list(middlewares)
        self._pipeline: Pipeline | None = None  # cache
        self._clone_context = clone_context
        self._cloner = cloner or default_cloner
        self._terminal = terminal

    def __len__(self) -> int:
        return len(self._middlewares)

    @property
    def middlewares(self) -> tuple[MiddlewareFactory, ...]:
        """Snapshot of the registered factories, outermost first."""
        return tuple(self._middlewares)

    # ── Registration ─────────────────────────────────────────────

    def use(self, middleware: MiddlewareFactory) -> MiddlewareFactory:
        """Append *middleware* to the stack.

        Returns the factory unchanged, so this also works as a decorator::

            @onion.use
            def timing():
                async def handler(context, next_handler): ...
                return handler
        """
        check_middleware(middleware)
        self._middlewares.append(middleware)
        self._pipeline = None  # invalidate cache
        logger.debug(
            "Registered middleware %s (stack size=%d)",
            getattr(middleware, "__name__", type(middleware).__name__),
            len(self._middlewares),
        )
        return middleware

    def clear(self) -> None:
        """Remove all middleware (testing utility)."""
        self._middlewares.clear()
        self._pipeline = None

    # ── Composition ──────────────────────────────────────────────

    def compose(self, middlewares: Sequence[MiddlewareFactory]) -> Pipeline:
        """Validate *middlewares* and compose an uncached pipeline."""
        return compose(middlewares)

    def _default_pipeline(self) -> Pipeline:
        if self._pipeline is None:
            self._pipeline = compose(self._middlewares)
            logger.debug("Composed pipeline of %d middleware", len(self._pipeline))
        return self._pipeline

    # ── Execution ────────────────────────────────────────────────

    async def execute(
        self,
        context: Any,
        middlewares: Sequence[MiddlewareFactory] | None = None,
    ) -> Any:
        """Run *context* through the pipeline.

        If *middlewares* is given it is validated and composed for this
        call only; otherwise the cached default pipeline is used.

        Returns the outermost handler's result, or the execution-local
        context when that result is ``None``.

        Raises
        ------
        MiddlewareTypeError
            If the override stack is malformed.
        NextCalledMultipleTimesError
            If a handler calls ``next`` more than once.
        Exception
            Any error raised by a factory or handler, unwrapped.
        """
        if middlewares is not None:
            pipeline = compose(middlewares)
        else:
            pipeline = self._default_pipeline()

        local_context = self._cloner(context) if self._clone_context else context
        result = await pipeline(local_context, self._terminal)
        if result is None:
            return local_context
        return result
