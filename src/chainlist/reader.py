"""Bounded line input into string nodes.

Lines are read with fgets semantics: at most `max_size - 1` characters
(one is reserved for the terminator), stopping after a newline, which is
kept in the payload. Longer lines are split across successive reads.
"""

from __future__ import annotations

import sys
from typing import TextIO

from chainlist.bulk import deallocate
from chainlist.errors import ErrorKind, Outcome, fail, succeed
from chainlist.nodes import allocate_node, allocate_payload, release_payload
from chainlist.types import STRONG, Node, PayloadKind, Slot


def read_line_as_string(max_size: int, stream: TextIO | None = None) -> Outcome[Node]:
    """Read one line from `stream` (stdin by default) into a new node."""
    if max_size <= 0:
        return fail(ErrorKind.INVALID_ARGUMENT)
    source = stream if stream is not None else sys.stdin

    buffer = allocate_payload("", PayloadKind.STRING)
    if not buffer:
        return buffer
    payload = buffer.value

    # A one-byte buffer only holds the terminator
    if max_size > 1:
        try:
            text = source.readline(max_size - 1)
        except (OSError, ValueError):
            release_payload(payload)
            return fail(ErrorKind.IO_ERROR)
        if not text:
            release_payload(payload)
            return fail(ErrorKind.IO_ERROR)
        payload.value = text

    node = allocate_node(payload)
    if not node:
        release_payload(payload)
    return node


def read_lines_as_string(
    max_size: int, count: int, stream: TextIO | None = None
) -> Outcome[Slot]:
    """Read `count` lines into a new chain, returned as its root slot.

    If any read fails, every node read so far is released strongly and
    no partial chain is handed back.
    """
    if count <= 0:
        return fail(ErrorKind.INVALID_ARGUMENT)

    root = Slot()
    last: Node | None = None
    for _ in range(count):
        line = read_line_as_string(max_size, stream)
        if not line:
            deallocate(root, STRONG)
            return Outcome(False, error=line.error)
        if last is None:
            root.node = line.value
        else:
            last.next = line.value
        last = line.value
    return succeed(root)
