"""Runtime assertions that report where they failed and how they were reached."""

from __future__ import annotations

import contextlib
import inspect
import signal
import threading
import traceback
from collections.abc import Iterator
from types import FrameType
from typing import Any

_TRACE_SIZE = 10

#: When true, a failed assertion raises :class:`AssertionException`;
#: otherwise it sends the process a trap signal so an attached debugger stops.
throw_assertion_exception = True

_report_lock = threading.Lock()


class AssertionException(Exception):
    """Raised when an assertion fails while exceptions are enabled."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


@contextlib.contextmanager
def exceptions_enabled() -> Iterator[None]:
    """Make failed assertions raise for the duration of the block."""
    global throw_assertion_exception
    original = throw_assertion_exception
    throw_assertion_exception = True
    try:
        yield
    finally:
        throw_assertion_exception = original


def _report(message: str, args: tuple[Any, ...], frame: FrameType | None) -> str:
    if frame is None:
        location, function, trace = "<unknown>:0", "<unknown>", "No backtrace could be generated!"
    else:
        location = f"{frame.f_code.co_filename}:{frame.f_lineno}"
        function = frame.f_code.co_name
        trace = "".join(traceback.format_stack(frame, limit=_TRACE_SIZE))
    text = f'[{location}]: Assertion "{message}" failed in function "{function}()"\n'
    params = ", ".join(str(arg) for arg in args)
    if params:
        text += f"Assertion parameters: {params}\n"
    return text + "Stack trace: " + trace


def _trap() -> None:
    trap = getattr(signal, "SIGTRAP", None)
    if trap is not None:
        signal.raise_signal(trap)


def _fire(message: str, args: tuple[Any, ...], frame: FrameType | None) -> None:
    with _report_lock:
        text = _report(message, args, frame)
    if throw_assertion_exception:
        raise AssertionException(text)
    _trap()


def fire(message: str, *args: Any) -> None:
    """Report a failed assertion at the caller's location."""
    current = inspect.currentframe()
    caller = current.f_back if current is not None else None
    try:
        _fire(message, args, caller)
    finally:
        del current, caller


def check(condition: Any, message: str, *args: Any) -> None:
    """Report a failed assertion at the caller's location unless ``condition`` holds."""
    if condition:
        return
    current = inspect.currentframe()
    caller = current.f_back if current is not None else None
    try:
        _fire(message, args, caller)
    finally:
        del current, caller