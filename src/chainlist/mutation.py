"""Positional mutation: push and pop at the front, back, or an index.

Pushes transfer a new node into the chain; pops take a node out and
release it with the caller's `DeallocationMode`. The root slot always
names the first node once a call returns.
"""

from __future__ import annotations

from chainlist.errors import ErrorKind, Outcome, fail, miss, succeed
from chainlist.nodes import allocate_node, deallocate_node
from chainlist.search import get_by_index
from chainlist.types import WEAK, DeallocationMode, Node, Payload, Slot


def push_back(root: Slot | None, payload: Payload | None) -> Outcome[Node]:
    """Append a node after the current last node."""
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    allocated = allocate_node(payload)
    if not allocated:
        return allocated
    new_node = allocated.value

    if root.node is None:
        root.node = new_node
        return allocated

    last = root.node
    while last.next is not None:
        last = last.next
    last.next = new_node
    return allocated


def push_front(root: Slot | None, payload: Payload | None) -> Outcome[Node]:
    """Insert a node before the current root and make it the root."""
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    allocated = allocate_node(payload)
    if not allocated:
        return allocated

    allocated.value.next = root.node
    root.node = allocated.value
    return allocated


def push_by_index(root: Slot | None, payload: Payload | None, index: int) -> Outcome[Node]:
    """Insert a node so that it ends up at position `index`.

    On an empty chain only index 0 is accepted; any other index fails
    before anything is allocated. On a nonempty chain an index past the
    end allocates the node, cannot splice it, and releases it again
    weakly: the payload stays with the caller.
    """
    if root is None or index < 0:
        return fail(ErrorKind.INVALID_ARGUMENT)

    if root.node is None:
        if index != 0:
            return miss()
        return push_front(root, payload)

    if index == 0:
        return push_front(root, payload)

    allocated = allocate_node(payload)
    if not allocated:
        return allocated
    new_node = allocated.value

    previous = get_by_index(root, index - 1)
    if not previous:
        deallocate_node(Slot(new_node), WEAK)
        return miss()

    new_node.next = previous.value.next
    previous.value.next = new_node
    return allocated


def pop_back(root: Slot | None, mode: DeallocationMode) -> Outcome[None]:
    """Remove and release the last node."""
    if root is None or root.node is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    if root.node.next is None:
        return deallocate_node(root, mode)

    previous = root.node
    current = previous.next
    while current.next is not None:
        previous = current
        current = current.next

    released = deallocate_node(Slot(current), mode)
    if released:
        previous.next = None
    return released


def pop_front(root: Slot | None, mode: DeallocationMode) -> Outcome[None]:
    """Remove and release the first node; the second one becomes the root."""
    if root is None or root.node is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    second = root.node.next
    released = deallocate_node(root, mode)
    if released:
        root.node = second
    return released


def pop_by_index(root: Slot | None, mode: DeallocationMode, index: int) -> Outcome[None]:
    """Remove and release the node at `index`.

    An index past the end fails without setting an error; a missing or
    empty chain is INVALID_ARGUMENT.
    """
    if root is None or root.node is None or index < 0:
        return fail(ErrorKind.INVALID_ARGUMENT)

    if index == 0:
        return pop_front(root, mode)

    previous = get_by_index(root, index - 1)
    if not previous or previous.value.next is None:
        return miss()

    victim = previous.value.next
    successor = victim.next
    released = deallocate_node(Slot(victim), mode)
    if released:
        previous.value.next = successor
    return released
