"""Failure signal, raise helpers and exit codes."""

from __future__ import annotations

from enum import IntEnum
from typing import NoReturn, TypeVar

from .style import emphasize

T = TypeVar("T")


class ExitCode(IntEnum):
    """Process exit codes (fixed contract).

    - 0: Success
    - 1: Classified failure (expected, user-facing)
    - 101: Unclassified defect (bug / invariant violation)
    """

    SUCCESS = 0
    FAILURE = 1
    DEFECT = 101


class FailureConsumedError(RuntimeError):
    """A failure was reported more than once."""


class BoundaryAlreadyActiveError(RuntimeError):
    """The boundary was installed while another one is still active."""


class Failure(BaseException):
    """An expected failure carrying its final, human-readable message.

    Derives from BaseException so `except Exception:` below the boundary
    cannot swallow it. Only the boundary is meant to catch it.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self._message = message
        self._consumed = False

    @property
    def message(self) -> str:
        return self._message

    @property
    def consumed(self) -> bool:
        return self._consumed

    def consume(self) -> str:
        """Return the message and mark the failure as reported."""

        if self._consumed:
            raise FailureConsumedError("Failure has already been reported")
        self._consumed = True
        return self._message

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return f"Failure({self._message!r})"


def fail(message: object) -> NoReturn:
    """Abort the program with `message` printed verbatim to stderr (exit 1)."""

    raise Failure(str(message))


def fail_color(message: object) -> NoReturn:
    """Like `fail`, but the message is printed in bold red."""

    raise Failure(emphasize(str(message)))


def expect(value: T | None, message: object) -> T:
    """Return `value`, or `fail(message)` when it is None.

    Usage:

        config_path = expect(os.environ.get("APP_CONFIG"), "APP_CONFIG is not set")
    """

    if value is None:
        fail(message)
    return value


def expect_color(value: T | None, message: object) -> T:
    if value is None:
        fail_color(message)
    return value
