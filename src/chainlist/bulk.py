"""Whole-list operations: teardown, string to integer coercion, dedup."""

from __future__ import annotations

import logging
import re

from chainlist.errors import ErrorKind, Outcome, PayloadAccessError, fail, miss, succeed
from chainlist.mutation import pop_by_index, pop_front
from chainlist.nodes import allocate_payload, release_payload
from chainlist.types import DeallocationMode, OwnedPayload, PayloadKind, Slot

_logger = logging.getLogger(__name__)

# strtol(text, NULL, 10) in the C locale: ASCII whitespace, optional sign,
# ASCII digits
_SPACE = " \t\n\v\f\r"
_DECIMAL_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def deallocate(root: Slot | None, mode: DeallocationMode) -> Outcome[None]:
    """Pop every node from the front until the chain is empty.

    A node that refuses release (strong mode on a borrowed payload) stops
    the teardown and the rest of the chain is left in place.
    """
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    while root.node is not None:
        popped = pop_front(root, mode)
        if not popped:
            return popped
    return succeed()


def parse_decimal(text: str) -> int:
    """Parse the leading base-10 integer of `text`, 0 when there is none."""
    match = _DECIMAL_PREFIX.match(text)
    if match is None:
        return 0
    return int(match.group(1))


def convert_strings_to_int_ptrs(root: Slot | None) -> Outcome[None]:
    """Replace every string payload with a newly allocated integer payload.

    A node whose text does not parse keeps its string payload and the
    call carries on with the next node; the overall result is then a
    failure with INVALID_ARGUMENT. Running out of memory stops at once,
    leaving the chain partly converted.
    """
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    failure: ErrorKind | None = None
    for node in root:
        try:
            text = str(node.value_as(PayloadKind.STRING))
        except PayloadAccessError as e:
            _logger.debug("node %r not converted: %s", node, e)
            failure = fail(e.kind).error
            continue

        number = parse_decimal(text)
        if number == 0 and text.strip(_SPACE) != "0":
            _logger.debug("node %r holds non-numeric text %r", node, text)
            failure = fail(ErrorKind.INVALID_ARGUMENT).error
            continue

        allocated = allocate_payload(number, PayloadKind.INT)
        if not allocated:
            return allocated

        old = node.payload
        node.payload = allocated.value
        if isinstance(old, OwnedPayload):
            release_payload(old)

    if failure is not None:
        return Outcome(False, error=failure)
    return succeed()


def remove_duplicate_int(root: Slot | None, mode: DeallocationMode) -> Outcome[None]:
    """Remove the later node of the first pair with equal integer payloads.

    Only one node is removed per call. No duplicate is not an error.
    """
    if root is None:
        return fail(ErrorKind.INVALID_ARGUMENT)

    try:
        for outer_index, outer in enumerate(root):
            value = outer.value_as(PayloadKind.INT)
            inner = outer.next
            inner_index = outer_index + 1
            while inner is not None:
                if inner.value_as(PayloadKind.INT) == value:
                    return pop_by_index(root, mode, inner_index)
                inner = inner.next
                inner_index += 1
    except PayloadAccessError as e:
        return fail(e.kind)
    return miss()


def remove_duplicate(
    root: Slot | None, mode: DeallocationMode, kind: PayloadKind
) -> Outcome[None]:
    """Remove one duplicate; only INT payloads are supported."""
    if kind is PayloadKind.INT:
        return remove_duplicate_int(root, mode)
    return fail(ErrorKind.NOT_IMPLEMENTED)


def remove_duplicates(
    root: Slot | None, mode: DeallocationMode, kind: PayloadKind
) -> Outcome[int]:
    """Remove duplicates until none are left.

    Succeeds once a pass finds no more duplicates; the value is the number
    of nodes removed. Any failure with a cause is returned as is.
    """
    removed = 0
    while True:
        outcome = remove_duplicate(root, mode, kind)
        if not outcome:
            break
        removed += 1

    if outcome.error is not None:
        return Outcome(False, removed, outcome.error)
    return succeed(removed)
