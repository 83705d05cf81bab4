"""Pipeline composition — onion-style dispatch over middleware factories."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import NextCalledMultipleTimesError
from .validation import check_middlewares

if TYPE_CHECKING:
    from collections.abc import Awaitable, Generator, Sequence

    from ..ports.middleware import MiddlewareFactory, MiddlewareHandler


class _Outcome:
    """Settled or pending outcome of dispatching one layer.

    Awaiting it yields the layer's value or raises its error. It can be
    awaited more than once; the underlying awaitable is consumed once.
    """

    __slots__ = ("_awaitable", "_error", "_value", "consumed")

    def __init__(
        self,
        value: Any = None,
        *,
        error: BaseException | None = None,
    ) -> None:
        self._awaitable: Awaitable[Any] | None = None
        self._value: Any = None
        self._error = error
        self.consumed = False
        if inspect.isawaitable(value):
            self._awaitable = value
        else:
            self._value = value

    def __await__(self) -> Generator[Any, None, Any]:
        self.consumed = True
        return self._settle().__await__()

    async def _settle(self) -> Any:
        if self._awaitable is not None:
            awaitable, self._awaitable = self._awaitable, None
            try:
                self._value = await awaitable
            except BaseException as exc:
                self._error = exc
                raise
        if self._error is not None:
            raise self._error
        return self._value

    def close(self) -> None:
        """Close an awaitable nobody will await."""
        if self._awaitable is not None and inspect.iscoroutine(self._awaitable):
            self._awaitable.close()
        self._awaitable = None


class Pipeline:
    """A composed middleware chain.

    The first factory in the list is the **outermost** layer. Each call
    gets its own dispatch cursor, so one ``Pipeline`` can be awaited any
    number of times, concurrently or not.
    """

    def __init__(self, middlewares: Sequence[MiddlewareFactory]) -> None:
        self._middlewares: tuple[MiddlewareFactory, ...] = tuple(middlewares)

    def __len__(self) -> int:
        return len(self._middlewares)

    async def __call__(
        self,
        context: Any,
        terminal: MiddlewareHandler | None = None,
    ) -> Any:
        """Run *context* through every layer and return the outermost result.

        *terminal* is invoked once dispatch moves past the last factory.
        Without one, reaching the end of the chain resolves to ``None``.

        Calling ``next`` checks the cursor and invokes the inner layer
        immediately. Outcomes a handler never awaited are awaited before
        the call returns, so their errors still reach the caller.
        """
        middlewares = self._middlewares
        size = len(middlewares)
        cursor = -1
        outcomes: list[_Outcome] = []

        def dispatch(index: int) -> _Outcome:
            nonlocal cursor
            if index <= cursor:
                outcome = _Outcome(error=NextCalledMultipleTimesError())
            else:
                cursor = index
                try:
                    outcome = _Outcome(_invoke(index))
                except Exception as exc:
                    outcome = _Outcome(error=exc)
            outcomes.append(outcome)
            return outcome

        def _invoke(index: int) -> Any:
            handler: MiddlewareHandler | None
            if index < size:
                handler = middlewares[index]()
            elif index == size:
                handler = terminal
            else:
                handler = None
            if handler is None:
                return None
            return handler(context, lambda: dispatch(index + 1))

        try:
            result = await dispatch(0)
            pending = [o for o in outcomes if not o.consumed]
            while pending:
                for outcome in pending:
                    await outcome
                pending = [o for o in outcomes if not o.consumed]
            return result
        finally:
            for outcome in outcomes:
                outcome.close()


def compose(middlewares: Sequence[MiddlewareFactory]) -> Pipeline:
    """Validate *middlewares* and build a :class:`Pipeline` from them.

    Raises
    ------
    MiddlewareTypeError
        If the stack is malformed (see :func:`check_middlewares`).
    """
    check_middlewares(middlewares)
    return Pipeline(middlewares)
