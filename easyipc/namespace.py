"""Default socket names for a given application name."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import platformdirs

from .errors import BadPathError, NamespaceError, SocketConnectError


def namespaced_supported() -> bool:
    """Whether sockets can live in an abstract namespace instead of the file system."""
    return sys.platform.startswith("linux")


def namespace(name: str | os.PathLike[str]) -> Path:
    """Return a sensible socket name for ``name`` on this platform.

    A single-component name is used as is where namespaced sockets are
    available; otherwise a file system path is built with ``filesystem_path``.
    """
    path = Path(name)
    if namespaced_supported() and len(path.parts) == 1:
        return path
    return filesystem_path(name)


def filesystem_path(name: str | os.PathLike[str]) -> Path:
    """Return ``<data dir>/<name>/<name>.sock``, creating the directory if needed."""
    base = platformdirs.user_data_dir()
    if not base:
        raise NamespaceError()
    name_path = Path(name)
    try:
        socket_name = name_path.with_suffix(".sock")
    except ValueError as exc:
        raise BadPathError(exc) from exc

    directory = Path(base) / name_path
    try:
        if not directory.exists():
            directory.mkdir()
    except OSError as exc:
        raise SocketConnectError(exc) from exc
    return directory / socket_name