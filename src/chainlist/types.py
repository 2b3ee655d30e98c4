"""Core data types: payload kinds, payloads, nodes and slots.

A payload is a tagged value. Whether the list may release it is part of
its type: `OwnedPayload` comes from the heap and is released by strong
deallocation, `BorrowedPayload` belongs to the caller and is never
released by the list.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto

from chainlist.errors import ErrorKind, PayloadAccessError


class PayloadKind(Enum):
    """Closed set of payload kinds understood by kind-aware operations."""

    INT8 = auto()
    INT16 = auto()
    INT32 = auto()
    INT = auto()
    INT64 = auto()
    UINT8 = auto()
    UINT16 = auto()
    UINT32 = auto()
    UINT = auto()
    UINT64 = auto()
    CHAR = auto()
    UCHAR = auto()
    FLOAT = auto()
    DOUBLE = auto()
    STRING = auto()


# Kinds with a working search/print/dedup path
SUPPORTED_KINDS = frozenset({PayloadKind.INT, PayloadKind.STRING})


class DeallocationMode(Enum):
    """How a destructive call treats the payload of the node it releases.

    WEAK releases only the node; the payload is owned elsewhere.
    STRONG releases the payload as well, which must be an `OwnedPayload`.
    """

    WEAK = auto()
    STRONG = auto()


WEAK = DeallocationMode.WEAK
STRONG = DeallocationMode.STRONG

_SIGNED_KINDS = frozenset({
    PayloadKind.INT8,
    PayloadKind.INT16,
    PayloadKind.INT32,
    PayloadKind.INT,
    PayloadKind.INT64,
})
_UNSIGNED_KINDS = frozenset({
    PayloadKind.UINT8,
    PayloadKind.UINT16,
    PayloadKind.UINT32,
    PayloadKind.UINT,
    PayloadKind.UINT64,
})


def value_matches(kind: PayloadKind, value: object) -> bool:
    """Check that `value` is something a payload of `kind` can hold."""
    if kind in _SIGNED_KINDS:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind in _UNSIGNED_KINDS:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    match kind:
        case PayloadKind.CHAR | PayloadKind.UCHAR:
            return isinstance(value, str) and len(value) == 1
        case PayloadKind.FLOAT | PayloadKind.DOUBLE:
            return isinstance(value, float)
        case PayloadKind.STRING:
            return isinstance(value, str)
    return False


def check_value(kind: PayloadKind, value: object) -> None:
    """Raise PayloadAccessError(TYPE_MISMATCH) if `value` does not fit `kind`."""
    if not value_matches(kind, value):
        msg = f"{type(value).__name__} value {value!r} is not a {kind.name} payload"
        raise PayloadAccessError(ErrorKind.TYPE_MISMATCH, msg)


@dataclass(eq=False)
class Payload:
    """Base class for node payloads."""

    kind: PayloadKind
    value: object
    released: bool = field(default=False, init=False)

    def expect(self, kind: PayloadKind) -> object:
        """Return the value if it is of `kind`.

        Raises:
            PayloadAccessError: On a kind mismatch, a value that does not
                fit its kind, or after release.
        """
        if self.released:
            msg = "payload read after release"
            raise PayloadAccessError(ErrorKind.INVALID_ARGUMENT, msg)
        if self.kind is not kind:
            msg = f"expected {kind.name} payload, found {self.kind.name}"
            raise PayloadAccessError(ErrorKind.TYPE_MISMATCH, msg)
        check_value(kind, self.value)
        return self.value


@dataclass(eq=False)
class OwnedPayload(Payload):
    """Heap-allocated payload; only `Heap.allocate_payload` creates these."""


@dataclass(eq=False)
class BorrowedPayload(Payload):
    """Caller-owned payload; the list never releases it."""


def borrow(value: object, kind: PayloadKind) -> BorrowedPayload:
    """Wrap a caller-owned value for use as a node payload.

    Raises:
        PayloadAccessError: If `value` does not fit `kind`.
    """
    check_value(kind, value)
    return BorrowedPayload(kind, value)


@dataclass(eq=False)
class Node:
    """One link of a chain.

    Attributes:
        payload: Data carried by the node (may be None).
        address: Identity assigned by the heap, used when rendering.
        next: Successor node, None for the last node.
        released: Set once the heap has taken the node back.
    """

    payload: Payload | None
    address: int
    next: Node | None = None
    released: bool = False

    def __repr__(self) -> str:
        return f"Node(0x{self.address:x})"

    def value_as(self, kind: PayloadKind) -> object:
        """Checked read of the payload value, see `Payload.expect`."""
        if self.released:
            msg = f"node 0x{self.address:x} used after release"
            raise PayloadAccessError(ErrorKind.INVALID_ARGUMENT, msg)
        if self.payload is None:
            msg = f"node 0x{self.address:x} has no payload"
            raise PayloadAccessError(ErrorKind.TYPE_MISMATCH, msg)
        return self.payload.expect(kind)


@dataclass(eq=False)
class Slot:
    """Mutable reference to a node.

    A chain is designated by the slot holding its first node (the root);
    an empty slot is an empty chain.
    """

    node: Node | None = None

    def __iter__(self) -> Iterator[Node]:
        current = self.node
        while current is not None:
            yield current
            current = current.next
