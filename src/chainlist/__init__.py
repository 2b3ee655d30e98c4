"""chainlist: singly-linked lists with explicit payload ownership."""

from __future__ import annotations

from chainlist.bulk import (
    convert_strings_to_int_ptrs,
    deallocate,
    remove_duplicate,
    remove_duplicate_int,
    remove_duplicates,
)
from chainlist.errors import (
    ErrorKind,
    Outcome,
    clear_error,
    last_error,
    print_error,
)
from chainlist.heap import Heap, current_heap, use_heap
from chainlist.mutation import (
    pop_back,
    pop_by_index,
    pop_front,
    push_back,
    push_by_index,
    push_front,
)
from chainlist.nodes import allocate_node, allocate_payload, deallocate_node
from chainlist.reader import read_line_as_string, read_lines_as_string
from chainlist.render import format_node, print_list, print_node
from chainlist.search import (
    get_by_index,
    get_by_integer_value,
    get_by_string_value,
    get_by_value,
    get_last,
    get_length,
    get_max_int,
    get_min_int,
)
from chainlist.types import (
    STRONG,
    WEAK,
    BorrowedPayload,
    DeallocationMode,
    Node,
    OwnedPayload,
    Payload,
    PayloadKind,
    Slot,
    borrow,
)

__all__ = [
    "STRONG",
    "WEAK",
    "BorrowedPayload",
    "DeallocationMode",
    "ErrorKind",
    "Heap",
    "Node",
    "Outcome",
    "OwnedPayload",
    "Payload",
    "PayloadKind",
    "Slot",
    "allocate_node",
    "allocate_payload",
    "borrow",
    "clear_error",
    "convert_strings_to_int_ptrs",
    "current_heap",
    "deallocate",
    "deallocate_node",
    "format_node",
    "get_by_index",
    "get_by_integer_value",
    "get_by_string_value",
    "get_by_value",
    "get_last",
    "get_length",
    "get_max_int",
    "get_min_int",
    "last_error",
    "pop_back",
    "pop_by_index",
    "pop_front",
    "print_error",
    "print_list",
    "print_node",
    "push_back",
    "push_by_index",
    "push_front",
    "read_line_as_string",
    "read_lines_as_string",
    "remove_duplicate",
    "remove_duplicate_int",
    "remove_duplicates",
    "use_heap",
]
