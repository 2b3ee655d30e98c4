"""Shared fixtures: every test gets its own heap and a clean error indicator."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from chainlist.errors import clear_error
from chainlist.heap import Heap, use_heap


@pytest.fixture(autouse=True)
def heap() -> Iterator[Heap]:
    clear_error()
    with use_heap(Heap()) as fresh:
        yield fresh
    clear_error()
