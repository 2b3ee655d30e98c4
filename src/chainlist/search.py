"""Traversal and search over a chain.

All lookups are linear walks from the root. A lookup that finds nothing
is not an error: it fails without touching the last-error indicator.
"""

from __future__ import annotations

from collections.abc import Callable

from chainlist.errors import ErrorKind, Outcome, PayloadAccessError, fail, miss, succeed
from chainlist.types import Node, PayloadKind, Slot


def get_by_index(root: Slot | None, index: int) -> Outcome[Node]:
    """Return the node at 0-based `index`."""
    if root is None or index < 0:
        return fail(ErrorKind.INVALID_ARGUMENT)

    for position, node in enumerate(root):
        if position == index:
            return succeed(node)
    return miss()


def _find(root: Slot | None, value: object, kind: PayloadKind) -> Outcome[Node]:
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    try:
        for node in root:
            if node.value_as(kind) == value:
                return succeed(node)
    except PayloadAccessError as e:
        return fail(e.kind)
    return miss()


def get_by_integer_value(root: Slot | None, value: int) -> Outcome[Node]:
    """Return the first node whose integer payload equals `value`."""
    return _find(root, value, PayloadKind.INT)


def get_by_string_value(root: Slot | None, value: str) -> Outcome[Node]:
    """Return the first node whose string payload equals `value`."""
    return _find(root, value, PayloadKind.STRING)


def get_by_value(root: Slot | None, value: object, kind: PayloadKind) -> Outcome[Node]:
    """Dispatch a value lookup on `kind`; only INT and STRING are supported."""
    match kind:
        case PayloadKind.INT:
            return get_by_integer_value(root, value)
        case PayloadKind.STRING:
            return get_by_string_value(root, value)
        case _:
            return fail(ErrorKind.NOT_IMPLEMENTED)


def get_last(root: Slot | None) -> Outcome[Node]:
    if root is None or root.node is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    last = root.node
    while last.next is not None:
        last = last.next
    return succeed(last)


def _extremum(root: Slot | None, better: Callable[[int, int], bool]) -> Outcome[int]:
    if root is None or root.node is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    best: int | None = None
    try:
        for node in root:
            value = node.value_as(PayloadKind.INT)
            if best is None or better(value, best):
                best = value
    except PayloadAccessError as e:
        return fail(e.kind)
    return succeed(best)


def get_max_int(root: Slot | None) -> Outcome[int]:
    """Largest integer payload in the chain."""
    return _extremum(root, lambda value, best: value > best)


def get_min_int(root: Slot | None) -> Outcome[int]:
    """Smallest integer payload in the chain."""
    return _extremum(root, lambda value, best: value < best)


def get_length(root: Slot | None) -> Outcome[int]:
    """Count the nodes of the chain.

    The value is 0 both for an empty chain (success) and for a missing
    slot (failure with INVALID_ARGUMENT); check the outcome, not the count.
    """
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT, 0)
    return succeed(sum(1 for _ in root))
