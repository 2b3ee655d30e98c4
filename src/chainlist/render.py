"""Textual rendering of nodes and chains.

Each node renders as `{ value: <payload>, next: <address> }`, where the
successor is shown by heap address or `(nil)` for the last node.
"""

from __future__ import annotations

import sys
from typing import TextIO

from chainlist.errors import ErrorKind, Outcome, PayloadAccessError, fail, succeed
from chainlist.types import SUPPORTED_KINDS, Node, PayloadKind, Slot

_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
})


def format_address(node: Node | None) -> str:
    if node is None:
        return "(nil)"
    return f"0x{node.address:x}"


def quote(text: str) -> str:
    """Double-quote `text` with control characters made visible."""
    return '"' + text.translate(_ESCAPES) + '"'


def format_node(node: Node | None, kind: PayloadKind) -> Outcome[str]:
    """Render one node as text."""
    if node is None:
        return fail(ErrorKind.INVALID_ARGUMENT)
    if kind not in SUPPORTED_KINDS:
        return fail(ErrorKind.NOT_IMPLEMENTED)

    try:
        value = node.value_as(kind)
    except PayloadAccessError as e:
        return fail(e.kind)

    shown = quote(str(value)) if kind is PayloadKind.STRING else str(value)
    return succeed(f"{{ value: {shown}, next: {format_address(node.next)} }}")


def print_node(node: Node | None, kind: PayloadKind, stream: TextIO | None = None) -> Outcome[None]:
    """Write one node to `stream` (stdout by default)."""
    text = format_node(node, kind)
    if not text:
        return Outcome(False, error=text.error)
    print(text.value, file=stream if stream is not None else sys.stdout)
    return succeed()


def print_list(root: Slot | None, kind: PayloadKind, stream: TextIO | None = None) -> Outcome[None]:
    """Write every node of the chain, one per line.

    Nothing is written if any node cannot be rendered.
    """
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT)
    if kind not in SUPPORTED_KINDS:
        return fail(ErrorKind.NOT_IMPLEMENTED)

    lines = []
    for node in root:
        text = format_node(node, kind)
        if not text:
            return Outcome(False, error=text.error)
        lines.append(text.value)

    out = stream if stream is not None else sys.stdout
    for line in lines:
        print(line, file=out)
    return succeed()
