"""Process boundary.

`run` wraps the outermost computation of the process. Whatever propagates
out of it is classified exactly once:

- `Failure`: the message is written verbatim to stderr, exit 1.
- anything else except `SystemExit` / `KeyboardInterrupt`: `sys.excepthook`
  renders the usual traceback, exit with the defect code (101 by default).
  A failure that was already reported counts as a defect too.
- nothing: exit 0. Return values are ignored.

`SystemExit` and `KeyboardInterrupt` are left to the interpreter.

Install the boundary only around the real entry point. Nested or
concurrent installation raises `BoundaryAlreadyActiveError`.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import sys
import threading
import traceback
from collections.abc import Awaitable, Callable
from typing import Any, NoReturn

from .config import BoundaryConfig
from .errors import (
    BoundaryAlreadyActiveError,
    ExitCode,
    Failure,
    FailureConsumedError,
)
from .result import converting
from .style import strip_emphasis

logger = logging.getLogger(__name__)


class _InstallGuard:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> None:
        with self._lock:
            if self._active:
                raise BoundaryAlreadyActiveError(
                    "tidyfail boundary is already active; "
                    "install it only around the outermost entry point"
                )
            self._active = True

    def release(self) -> None:
        with self._lock:
            self._active = False


_GUARD = _InstallGuard()


def is_active() -> bool:
    """Return True while a boundary is running its computation."""

    return _GUARD.active


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def _call(computation: Callable[[], Any]) -> None:
    value = computation()
    if inspect.isawaitable(value):
        value = asyncio.run(_await(value))
    if value is not None:
        logger.debug("Ignoring return value of type %s", type(value).__name__)


def _release_frames(exc: BaseException) -> None:
    # Drop the locals of every unwound frame so their finalizers run now.
    seen: set[int] = set()
    cur: BaseException | None = exc
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        traceback.clear_frames(cur.__traceback__)
        cur = cur.__cause__ or cur.__context__


def _report(message: str) -> None:
    stream = sys.stderr
    if stream is None:
        return
    stream.write(f"{message}\n")
    stream.flush()


def _report_defect(exc: BaseException, defect_exit_code: int) -> int:
    logger.debug(
        "Intercepted defect: %s (exit=%d)", type(exc).__name__, defect_exit_code
    )
    sys.excepthook(type(exc), exc, exc.__traceback__)
    _release_frames(exc)
    return defect_exit_code


def _intercept(
    computation: Callable[[], Any], config: BoundaryConfig | None
) -> int:
    defect_exit_code = int(ExitCode.DEFECT)
    try:
        with converting("Invalid tidyfail configuration", ValueError):
            cfg = config if config is not None else BoundaryConfig.from_env()
        defect_exit_code = cfg.defect_exit_code
        _call(computation)
    except Failure as exc:
        try:
            message = exc.consume()
        except FailureConsumedError as consumed:
            return _report_defect(consumed, defect_exit_code)
        _release_frames(exc)
        logger.debug("Intercepted failure: %s", strip_emphasis(message))
        _report(message)
        return int(ExitCode.FAILURE)
    except (SystemExit, KeyboardInterrupt):
        raise
    except BaseException as exc:  # noqa: BLE001
        return _report_defect(exc, defect_exit_code)

    logger.debug("Computation finished (exit=0)")
    return int(ExitCode.SUCCESS)


def run(
    computation: Callable[[], Any], *, config: BoundaryConfig | None = None
) -> NoReturn:
    """Run `computation` under the boundary and exit the process.

    Exits through `SystemExit`, so `atexit` handlers and stream flushing
    still happen. Coroutines returned by `computation` are run with
    `asyncio.run`. When `config` is None it is read from the environment.
    """

    _GUARD.acquire()
    try:
        code = _intercept(computation, config)
    finally:
        _GUARD.release()
    sys.exit(code)


def catch(
    func: Callable[..., Any] | None = None,
    *,
    config: BoundaryConfig | None = None,
) -> Any:
    """Decorate the program's entry point with the boundary.

        @tidyfail.catch
        def main() -> None:
            ...

    Calling the decorated function never returns; it exits the process.
    """

    def decorate(fn: Callable[..., Any]) -> Callable[..., NoReturn]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> NoReturn:
            run(lambda: fn(*args, **kwargs), config=config)

        return wrapper

    if func is None:
        return decorate
    return decorate(func)
