from __future__ import annotations

import io
import threading
from collections import OrderedDict, defaultdict, namedtuple
from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel

from onion_core.context import clone_context


class Address(BaseModel):
    city: str
    tags: list[str] = []


@dataclass
class Session:
    user: str
    roles: list[str] = field(default_factory=list)


def test_clone_dict_is_deep() -> None:
    original = {"a": {"b": [1, 2, {"c": 3}]}, "t": (1, [2])}

    cloned = clone_context(original)

    assert cloned == original
    assert cloned is not original
    assert cloned["a"]["b"] is not original["a"]["b"]
    assert cloned["t"][1] is not original["t"][1]


def test_clone_drops_callables_and_io_handles() -> None:
    handle = io.StringIO("data")
    original = {"value": 1, "callback": lambda: None, "stream": handle, "items": [print, 2]}

    cloned = clone_context(original)

    assert cloned == {"value": 1, "items": [2]}
    assert "callback" in original
    assert not handle.closed


def test_clone_preserves_shared_and_cyclic_references() -> None:
    shared: list[int] = [1]
    original: dict[str, object] = {"x": shared, "y": shared}
    original["self"] = original

    cloned = clone_context(original)

    assert cloned["x"] is cloned["y"]
    assert cloned["x"] is not shared
    assert cloned["self"] is cloned


def test_clone_pydantic_model() -> None:
    original = Address(city="Athens", tags=["home"])

    cloned = clone_context(original)

    cloned.tags.append("work")
    assert isinstance(cloned, Address)
    assert original.tags == ["home"]


def test_clone_nested_pydantic_and_dataclass() -> None:
    original = {"address": Address(city="Oslo"), "session": Session("ana", ["admin"])}

    cloned = clone_context(original)

    assert cloned["address"] == original["address"]
    assert cloned["address"] is not original["address"]
    assert cloned["session"] == original["session"]
    assert cloned["session"].roles is not original["session"].roles


def test_clone_sets_keep_type() -> None:
    original = {"s": {1, 2}, "f": frozenset({3})}

    cloned = clone_context(original)

    assert cloned == original
    assert isinstance(cloned["f"], frozenset)


Point = namedtuple("Point", ["x", "y"])


def test_clone_namedtuple() -> None:
    original = {"p": Point(1, [2])}

    cloned = clone_context(original)

    assert isinstance(cloned["p"], Point)
    assert cloned["p"] == original["p"]
    assert cloned["p"].y is not original["p"].y


def test_clone_drops_uncopyable_resource_handles() -> None:
    lock = threading.Lock()
    original = {"lock": lock, "v": 1, "locks": [lock, 2]}

    cloned = clone_context(original)

    assert cloned == {"v": 1, "locks": [2]}
    assert original["lock"] is lock


def test_clone_uncopyable_context_raises() -> None:
    with pytest.raises(TypeError):
        clone_context(threading.Lock())


def test_clone_keeps_mapping_subclasses() -> None:
    counts: defaultdict[str, int] = defaultdict(int, {"a": 1})
    original = {"counts": counts, "ordered": OrderedDict([("b", 2), ("a", 1)])}

    cloned = clone_context(original)

    assert isinstance(cloned["counts"], defaultdict)
    cloned["counts"]["missing"] += 1
    assert cloned["counts"] == {"a": 1, "missing": 1}
    assert "missing" not in counts
    assert isinstance(cloned["ordered"], OrderedDict)
    assert list(cloned["ordered"]) == ["b", "a"]
