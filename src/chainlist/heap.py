"""Allocator for nodes and owned payloads.

The heap stands in for malloc/free: it hands out node addresses, keeps
count of live blocks so leaks are observable, can be capped to simulate
allocation failure, and refuses to take a block back twice.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from chainlist.errors import DoubleReleaseError, HeapExhaustedError
from chainlist.types import Node, OwnedPayload, Payload, PayloadKind

_logger = logging.getLogger(__name__)

# First address handed out and spacing between nodes
BASE_ADDRESS = 0x1000
ADDRESS_STRIDE = 0x10


class Heap:
    """Tracks live nodes and owned payloads.

    Args:
        limit: Maximum number of live blocks (nodes plus owned payloads).
            None means unlimited.
    """

    def __init__(self, limit: int | None = None) -> None:
        self.limit = limit
        self.live_nodes = 0
        self.live_payloads = 0
        self.allocations = 0
        self._next_address = BASE_ADDRESS

    @property
    def live_blocks(self) -> int:
        return self.live_nodes + self.live_payloads

    def _reserve(self, what: str) -> None:
        if self.limit is not None and self.live_blocks >= self.limit:
            _logger.debug("refusing %s allocation: %d live blocks", what, self.live_blocks)
            msg = f"heap limit of {self.limit} blocks reached"
            raise HeapExhaustedError(msg)
        self.allocations += 1

    def allocate_node(self, payload: Payload | None) -> Node:
        self._reserve("node")
        node = Node(payload, self._next_address)
        self._next_address += ADDRESS_STRIDE
        self.live_nodes += 1
        return node

    def release_node(self, node: Node) -> None:
        if node.released:
            msg = f"node 0x{node.address:x} released twice"
            raise DoubleReleaseError(msg)
        node.released = True
        node.next = None
        self.live_nodes -= 1

    def allocate_payload(self, value: object, kind: PayloadKind) -> OwnedPayload:
        self._reserve("payload")
        self.live_payloads += 1
        return OwnedPayload(kind, value)

    def release_payload(self, payload: OwnedPayload) -> None:
        if payload.released:
            msg = "payload released twice"
            raise DoubleReleaseError(msg)
        payload.released = True
        self.live_payloads -= 1


# Process-wide, like malloc; the error indicator in `errors` is per thread.
_current = Heap()


def current_heap() -> Heap:
    """Return the heap used by list operations."""
    return _current


@contextmanager
def use_heap(heap: Heap) -> Iterator[Heap]:
    """Route list allocations to `heap` for the duration of the block.

    The switch is seen by every thread, so concurrent blocks must not
    overlap.
    """
    global _current
    previous = _current
    _current = heap
    try:
        yield heap
    finally:
        _current = previous
