"""Clean-up of socket files when the process dies from an exception or a signal."""

from __future__ import annotations

import os
import signal
import sys
import threading
from pathlib import Path
from types import FrameType, TracebackType
from typing import Any

TERM_SIGNALS: tuple[int, ...] = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGQUIT", "SIGINT") if hasattr(signal, name)
)


def remove_socket_file(path: str | os.PathLike[str]) -> bool:
    """Remove the socket file at ``path``.

    Returns True if a file was removed and False if there was nothing to
    remove. An ``OSError`` propagates if the removal fails.
    """
    target = Path(path)
    if target.exists():
        target.unlink()
        return True
    return False


def clean(path: str | os.PathLike[str]) -> None:
    """Try to remove the socket file at ``path``, reporting failures on stderr."""
    try:
        remove_socket_file(path)
    except OSError as exc:
        print(f"Couldn't clean up socket file {os.fspath(path)}: {exc}", file=sys.stderr)


def setup_handlers(model: Any) -> None:
    """Remove the model's socket file on uncaught exceptions and termination signals.

    Exception hooks are chained to the ones already installed. Signal
    handlers can only be installed from the main thread; elsewhere only the
    exception hooks are set up.
    """
    path = model.socket_name

    previous_hook = sys.excepthook

    def excepthook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        clean(path)
        previous_hook(exc_type, exc, tb)

    sys.excepthook = excepthook

    previous_thread_hook = threading.excepthook

    def thread_excepthook(args: Any) -> None:
        clean(path)
        previous_thread_hook(args)

    threading.excepthook = thread_excepthook

    if threading.current_thread() is not threading.main_thread():
        return

    def on_signal(signum: int, frame: FrameType | None) -> None:
        clean(path)
        signal.signal(signum, signal.SIG_DFL)
        signal.raise_signal(signum)
        # Fail-safe in case re-raising the signal did not end the process.
        os._exit(1)

    for sig in TERM_SIGNALS:
        signal.signal(sig, on_signal)