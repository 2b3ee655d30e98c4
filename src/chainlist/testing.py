"""Testing utilities for chainlist."""

from __future__ import annotations

import io
from collections.abc import Iterable

from chainlist.mutation import push_back
from chainlist.nodes import allocate_payload
from chainlist.types import PayloadKind, Slot, borrow


def build_chain(
    values: Iterable[object],
    kind: PayloadKind = PayloadKind.INT,
    owned: bool = True,
) -> Slot:
    """Build a chain holding `values` in order.

    Args:
        values: Payload values, first to last.
        kind: Kind tag for every payload.
        owned: Allocate payloads on the heap (strong teardown) or borrow them.

    Returns:
        Root slot of the new chain.
    """
    root = Slot()
    for value in values:
        if owned:
            allocated = allocate_payload(value, kind)
            assert allocated, f"payload allocation failed: {allocated.error}"
            payload = allocated.value
        else:
            payload = borrow(value, kind)
        pushed = push_back(root, payload)
        assert pushed, f"push_back failed: {pushed.error}"
    return root


def chain_values(root: Slot) -> list[object]:
    """Payload values of the chain, first to last."""
    return [node.payload.value if node.payload is not None else None for node in root]


def line_stream(*lines: str) -> io.StringIO:
    """In-memory text stream with one newline-terminated entry per line."""
    return io.StringIO("".join(f"{line}\n" for line in lines))
