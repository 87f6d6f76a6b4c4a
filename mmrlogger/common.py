"""Platform helpers shared by the logging utilities."""

from __future__ import annotations

import os
import sys
import threading

DIR_SEPARATOR = os.sep
OS_TYPE = "Windows" if os.name == "nt" else "Linux"
LIB_EXTENSION = ".dll" if os.name == "nt" else ".so"
BUILD_TYPE = "Debug" if __debug__ else "Release"


def cut_function_name(pretty_name: str) -> str:
    """Reduce a full function signature to its scoped name.

    Everything from the first ``(`` onwards is dropped, then everything up to
    and including the first space (the return type) is dropped.
    """
    name, _, _ = pretty_name.partition("(")
    _, space, rest = name.partition(" ")
    return rest if space else name


def thread_id() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


def process_id() -> int:
    """Return the id of the current process."""
    return os.getpid()


def app_path_and_name() -> tuple[str, str]:
    """Return the running program's directory (with a trailing separator) and name.

    The name has its extension removed. Raises ``OSError`` when the program
    path cannot be determined.
    """
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    if not program:
        raise OSError("cannot determine the path of the running program")
    full_path = os.path.abspath(program)
    directory, filename = os.path.split(full_path)
    if not filename:
        raise OSError(f"program path {full_path!r} has no file name")
    name, _ = os.path.splitext(filename)
    if not directory.endswith(os.sep):
        directory += os.sep
    return directory, name