"""Context cloning — isolates one execution from the caller's object."""

from __future__ import annotations

import copy
import io
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger("onion_core.context")

_SETS = (tuple, set, frozenset)

# Marks a member left out of the copy.
_SKIP = object()


def _is_data(value: Any) -> bool:
    return not callable(value) and not isinstance(value, io.IOBase)


def _empty_like(value: Any, plain: type) -> Any:
    # Subclasses keep their type and instance state (e.g. defaultdict's
    # default_factory); only the items are rebuilt.
    if type(value) is plain:
        return plain()
    cloned = copy.copy(value)
    cloned.clear()
    return cloned


def _clone_member(value: Any, memo: dict[int, Any]) -> Any:
    if not _is_data(value):
        return _SKIP
    try:
        return _clone(value, memo)
    except (TypeError, copy.Error) as exc:
        logger.debug("Dropping uncopyable %s from context: %s", type(value).__name__, exc)
        return _SKIP


def _clone(value: Any, memo: dict[int, Any]) -> Any:
    key = id(value)
    if key in memo:
        return memo[key]

    if isinstance(value, BaseModel):
        cloned: Any = value.model_copy(deep=True)
    elif isinstance(value, Mapping):
        cloned = _empty_like(value, dict) if isinstance(value, dict) else {}
        memo[key] = cloned
        for k, v in value.items():
            item = _clone_member(v, memo)
            if item is not _SKIP:
                cloned[k] = item
        return cloned
    elif isinstance(value, list):
        cloned = _empty_like(value, list)
        memo[key] = cloned
        for v in value:
            item = _clone_member(v, memo)
            if item is not _SKIP:
                cloned.append(item)
        return cloned
    elif isinstance(value, _SETS) and (
        type(value) in _SETS or hasattr(value, "_make")
    ):
        items = [_clone_member(v, memo) for v in value]
        if isinstance(value, tuple) and hasattr(value, "_make"):
            # namedtuple fields are positional; skipped members become None
            cloned = type(value)._make(None if v is _SKIP else v for v in items)
        else:
            cloned = type(value)(v for v in items if v is not _SKIP)
    else:
        cloned = copy.deepcopy(value, memo)
    memo[key] = cloned
    return cloned


def clone_context(context: Any) -> Any:
    """Return a structural deep copy of *context*.

    Mappings, lists, tuples and sets keep their type; ``dict`` and ``list``
    subclasses keep their instance state, so a ``defaultdict`` keeps its
    ``default_factory``. Non-dict mappings come back as plain ``dict``.
    Pydantic models are copied with ``model_copy(deep=True)``. Other
    tuple and set subclasses go through ``copy.deepcopy``.

    Members that are not data are dropped from the copy: callables, open
    I/O handles, and anything ``copy.deepcopy`` refuses (locks, sockets,
    database connections). A dropped namedtuple field becomes ``None``.
    Shared and cyclic references inside mappings and lists are preserved.

    Raises
    ------
    TypeError
        If *context* itself cannot be copied.
    """
    return _clone(context, {})
