"""Error kinds, operation outcomes and the last-error indicator.

Every public operation returns an `Outcome`. Failures that have a cause
also record it in a thread-local last-error indicator so that callers
holding only the boolean can still ask *why* (see `last_error`,
`print_error`). "Not found" results carry no error and leave the
indicator untouched.
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TextIO, TypeVar

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Why an operation failed."""

    INVALID_ARGUMENT = "Invalid argument"
    OUT_OF_MEMORY = "Cannot allocate memory"
    IO_ERROR = "Input/output error"
    NOT_IMPLEMENTED = "Function not implemented"
    TYPE_MISMATCH = "Payload kind mismatch"
    OWNERSHIP_MISMATCH = "Borrowed payload cannot be released"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a list operation.

    Attributes:
        ok: Whether the operation succeeded.
        value: Produced value (node, integer, slot, ...), if any.
        error: Failure cause; None for success and for "not found".
    """

    ok: bool
    value: T | None = None
    error: ErrorKind | None = None

    def __bool__(self) -> bool:
        return self.ok


class HeapExhaustedError(MemoryError):
    """The heap refused an allocation."""


class DoubleReleaseError(RuntimeError):
    """A node or payload was released twice."""


class PayloadAccessError(Exception):
    """A payload was read as the wrong kind or after release."""

    def __init__(self, kind: ErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind


_state = threading.local()


def last_error() -> ErrorKind | None:
    """Return the error recorded by the most recent failing call."""
    return getattr(_state, "error", None)


def set_error(kind: ErrorKind) -> None:
    _logger.debug("last error set to %s", kind.name)
    _state.error = kind


def clear_error() -> None:
    _state.error = None


def succeed(value: T | None = None) -> Outcome[T]:
    return Outcome(True, value)


def fail(kind: ErrorKind, value: T | None = None) -> Outcome[T]:
    """Record `kind` as the last error and return a failed outcome."""
    set_error(kind)
    return Outcome(False, value, kind)


def miss(value: T | None = None) -> Outcome[T]:
    """Failed outcome that is not an error (nothing found, nothing to do)."""
    return Outcome(False, value)


def print_error(stream: TextIO | None = None) -> None:
    """Write the current last error's description to the diagnostic stream."""
    out = stream if stream is not None else sys.stderr
    kind = last_error()
    message = kind.message if kind is not None else "Success"
    print(f"chainlist: {message}", file=out)
