"""Node lifecycle: allocation and release."""

from __future__ import annotations

import logging

from chainlist.errors import (
    DoubleReleaseError,
    ErrorKind,
    HeapExhaustedError,
    Outcome,
    fail,
    miss,
    succeed,
)
from chainlist.heap import current_heap
from chainlist.types import (
    DeallocationMode,
    Node,
    OwnedPayload,
    Payload,
    PayloadKind,
    Slot,
    value_matches,
)

_logger = logging.getLogger(__name__)


def allocate_node(payload: Payload | None) -> Outcome[Node]:
    """Allocate a detached node carrying `payload`."""
    try:
        node = current_heap().allocate_node(payload)
    except HeapExhaustedError:
        return fail(ErrorKind.OUT_OF_MEMORY)
    return succeed(node)


def allocate_payload(value: object, kind: PayloadKind) -> Outcome[OwnedPayload]:
    """Allocate a heap payload, to be released by strong deallocation.

    A value that does not fit `kind` is refused with TYPE_MISMATCH.
    """
    if not value_matches(kind, value):
        return fail(ErrorKind.TYPE_MISMATCH)
    try:
        payload = current_heap().allocate_payload(value, kind)
    except HeapExhaustedError:
        return fail(ErrorKind.OUT_OF_MEMORY)
    return succeed(payload)


def release_payload(payload: Payload) -> Outcome[None]:
    """Give an owned payload back to the heap.

    Borrowed payloads are refused before anything is touched.
    """
    if not isinstance(payload, OwnedPayload):
        _logger.debug("refusing strong release of a borrowed %s payload", payload.kind.name)
        return fail(ErrorKind.OWNERSHIP_MISMATCH)
    try:
        current_heap().release_payload(payload)
    except DoubleReleaseError:
        return fail(ErrorKind.INVALID_ARGUMENT)
    return succeed()


def deallocate_node(slot: Slot | None, mode: DeallocationMode) -> Outcome[None]:
    """Release the node held by `slot` and clear the slot.

    An empty slot is "nothing to do": the call fails without an error.
    Under STRONG mode the payload is released too.
    """
    if slot is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    node = slot.node
    if node is None:
        return miss()
    if node.released:
        return fail(ErrorKind.INVALID_ARGUMENT)

    if mode is DeallocationMode.STRONG and node.payload is not None:
        released = release_payload(node.payload)
        if not released:
            return released

    try:
        current_heap().release_node(node)
    except DoubleReleaseError:
        return fail(ErrorKind.INVALID_ARGUMENT)

    slot.node = None
    return succeed()
