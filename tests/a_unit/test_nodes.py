"""Unit tests for node allocation and release."""

from __future__ import annotations

import threading

from chainlist.errors import ErrorKind, last_error
from chainlist.heap import Heap, use_heap
from chainlist.nodes import allocate_node, allocate_payload, deallocate_node
from chainlist.types import STRONG, WEAK, PayloadKind, Slot, borrow


class TestAllocateNode:
    """Tests for allocate_node."""

    def test_detached_node(self, heap: Heap) -> None:
        payload = borrow(7, PayloadKind.INT)
        allocated = allocate_node(payload)

        assert allocated
        assert allocated.value.payload is payload
        assert allocated.value.next is None
        assert heap.live_nodes == 1

    def test_distinct_addresses(self) -> None:
        first = allocate_node(None).value
        second = allocate_node(None).value
        assert first.address != second.address

    def test_out_of_memory(self) -> None:
        with use_heap(Heap(limit=0)):
            allocated = allocate_node(None)

        assert not allocated
        assert allocated.value is None
        assert allocated.error is ErrorKind.OUT_OF_MEMORY
        assert last_error() is ErrorKind.OUT_OF_MEMORY

    def test_payload_out_of_memory(self) -> None:
        with use_heap(Heap(limit=1)) as small:
            assert allocate_payload(1, PayloadKind.INT)
            allocated = allocate_payload(2, PayloadKind.INT)

        assert allocated.error is ErrorKind.OUT_OF_MEMORY
        assert small.live_payloads == 1

    def test_payload_value_must_fit_kind(self, heap: Heap) -> None:
        """Values that disagree with their kind are refused before allocation."""
        for value, kind in [
            ("abc", PayloadKind.INT),
            (True, PayloadKind.INT),
            (-1, PayloadKind.UINT),
            (3, PayloadKind.STRING),
            ("ab", PayloadKind.CHAR),
            (1, PayloadKind.DOUBLE),
        ]:
            allocated = allocate_payload(value, kind)
            assert allocated.error is ErrorKind.TYPE_MISMATCH
        assert last_error() is ErrorKind.TYPE_MISMATCH
        assert heap.allocations == 0


class TestDeallocateNode:
    """Tests for deallocate_node."""

    def test_weak_keeps_payload(self, heap: Heap) -> None:
        payload = allocate_payload(3, PayloadKind.INT).value
        slot = Slot(allocate_node(payload).value)

        assert deallocate_node(slot, WEAK)
        assert slot.node is None
        assert heap.live_nodes == 0
        assert heap.live_payloads == 1
        assert not payload.released

    def test_strong_releases_payload(self, heap: Heap) -> None:
        payload = allocate_payload("x", PayloadKind.STRING).value
        slot = Slot(allocate_node(payload).value)

        assert deallocate_node(slot, STRONG)
        assert heap.live_blocks == 0
        assert payload.released

    def test_strong_with_no_payload(self, heap: Heap) -> None:
        slot = Slot(allocate_node(None).value)
        assert deallocate_node(slot, STRONG)
        assert heap.live_nodes == 0

    def test_missing_slot(self) -> None:
        outcome = deallocate_node(None, WEAK)
        assert not outcome
        assert outcome.error is ErrorKind.INVALID_ARGUMENT

    def test_empty_slot_is_not_an_error(self) -> None:
        outcome = deallocate_node(Slot(), STRONG)
        assert not outcome
        assert outcome.error is None
        assert last_error() is None

    def test_double_release_is_refused(self, heap: Heap) -> None:
        node = allocate_node(None).value
        assert deallocate_node(Slot(node), WEAK)

        outcome = deallocate_node(Slot(node), WEAK)
        assert outcome.error is ErrorKind.INVALID_ARGUMENT
        assert heap.live_nodes == 0

    def test_strong_release_of_borrowed_payload(self, heap: Heap) -> None:
        """Borrowed payloads are refused and the node stays allocated."""
        node = allocate_node(borrow(5, PayloadKind.INT)).value
        slot = Slot(node)

        outcome = deallocate_node(slot, STRONG)
        assert outcome.error is ErrorKind.OWNERSHIP_MISMATCH
        assert slot.node is node
        assert not node.released
        assert heap.live_nodes == 1


class TestSharedState:
    def test_heap_is_shared_and_error_is_per_thread(self, heap: Heap) -> None:
        """Other threads allocate from the same heap but keep their own error."""
        seen: list[object] = []

        def worker() -> None:
            seen.append(allocate_node(None).value)
            seen.append(last_error())

        assert allocate_payload("x", PayloadKind.INT).error is ErrorKind.TYPE_MISMATCH
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert heap.live_nodes == 1
        assert seen[1] is None
        assert last_error() is ErrorKind.TYPE_MISMATCH
