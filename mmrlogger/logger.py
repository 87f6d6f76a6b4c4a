"""Buffered file logger with optional background writing and size-based rotation."""

from __future__ import annotations

import enum
import os
import sys
import threading
import time
from collections import deque
from types import FrameType
from typing import Any

from .common import app_path_and_name, thread_id
from .singleton import Singleton

MAX_MESSAGE_BYTES = 2048
BUFFER_SIZE = 1024 * 1024
MIN_AVAILABLE = 1024
SPARE_BUFFERS = 3
FLUSH_INTERVAL = 5.0

_START_FORMAT = "[%d][A][%s][%d]----------------- start -----------------"
_STOP_FORMAT = "[%d][A][%s][%d]----------------- stop -----------------"


class LogLevel(enum.IntEnum):
    """Severity thresholds; a message is kept when its level is at most the logger's."""

    OFF = -1
    FORCE = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5


def _call_site(frame: FrameType) -> tuple[str, int]:
    code = frame.f_code
    return getattr(code, "co_qualname", code.co_name), frame.f_lineno


class Logger:
    """Writes timestamped lines to ``<dir>/<name>.log``, rotating by size.

    In asynchronous mode records are collected in memory and written by a
    background thread at least every five seconds or whenever a buffer fills.
    Call :meth:`close` (or use the logger as a context manager) to flush.
    """

    def __init__(
        self,
        file_num: int = 10,
        file_size_mb: float = 16,
        asynchronous: bool = True,
        log_dir: str | os.PathLike[str] | None = None,
        log_name: str | None = None,
    ) -> None:
        self.level = LogLevel.DEBUG
        self._file_num = file_num
        self._file_size = int(file_size_mb * 1024 * 1024)
        self._asynchronous = asynchronous
        self._lock = threading.Lock()
        self._wakeup = threading.Condition(self._lock)
        self._current = bytearray()
        self._filled: deque[bytearray] = deque()
        self._spare = SPARE_BUFFERS
        self._running = False
        self._worker: threading.Thread | None = None
        self._last_second: int | None = None
        self._last_stamp = b""

        print(f"Logger instance construct: file number[{file_num}] file size [{file_size_mb} Mb]")

        if not log_dir or not log_name:
            directory, name = app_path_and_name()
            log_dir = os.path.join(directory, "log")
            log_name = name
        os.makedirs(log_dir, exist_ok=True)
        self._path = os.path.join(os.fspath(log_dir), log_name + ".log")
        self._stream = open(self._path, "ab")
        self._stream.seek(0, os.SEEK_END)

        if asynchronous:
            self._running = True
            self._worker = threading.Thread(
                target=self._drain, name="mmrlogger-writer", daemon=True
            )
            self._worker.start()

        name, line = _call_site(sys._getframe())
        self.log_write(_START_FORMAT, thread_id(), name, line)

    @property
    def file_max_num(self) -> int:
        """Number of rotated files kept."""
        return self._file_num

    @property
    def file_max_size(self) -> int:
        """Size in bytes above which the file is rotated."""
        return self._file_size

    @property
    def file_path(self) -> str:
        """Path of the file currently written."""
        return self._path

    def log_force(self, format: str, *args: Any) -> None:
        """Log at FORCE level."""
        self._log_at(LogLevel.FORCE, format, args)

    def log_fatal(self, format: str, *args: Any) -> None:
        """Log at FATAL level."""
        self._log_at(LogLevel.FATAL, format, args)

    def log_error(self, format: str, *args: Any) -> None:
        """Log at ERROR level."""
        self._log_at(LogLevel.ERROR, format, args)

    def log_warn(self, format: str, *args: Any) -> None:
        """Log at WARN level."""
        self._log_at(LogLevel.WARN, format, args)

    def log_info(self, format: str, *args: Any) -> None:
        """Log at INFO level."""
        self._log_at(LogLevel.INFO, format, args)

    def log_debug(self, format: str, *args: Any) -> None:
        """Log at DEBUG level."""
        self._log_at(LogLevel.DEBUG, format, args)

    def log_write(self, format: str, *args: Any) -> None:
        """Log regardless of the current level."""
        self._emit(format, args)

    def close(self) -> None:
        """Flush pending records, stop the writer thread and close the file."""
        if self._running:
            name, line = _call_site(sys._getframe())
            self.log_write(_STOP_FORMAT, thread_id(), name, line)
            with self._wakeup:
                self._running = False
                self._wakeup.notify_all()
            if self._worker is not None:
                self._worker.join()
                self._worker = None
        with self._lock:
            stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()
            print("Logger instance destruct.")

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _log_at(self, level: LogLevel, format: str, args: tuple[Any, ...]) -> None:
        if self.level < level:
            return
        self._emit(format, args)

    def _emit(self, format: str, args: tuple[Any, ...]) -> None:
        now_ns = time.time_ns()
        seconds, rest = divmod(now_ns, 1_000_000_000)
        millis = rest // 1_000_000
        body = (format % args).encode("utf-8", errors="backslashreplace")[:MAX_MESSAGE_BYTES]

        with self._lock:
            if self._stream is None:
                raise ValueError("logger is closed")
            if seconds != self._last_second:
                self._last_second = seconds
                self._last_stamp = time.strftime(
                    "%Y-%m-%d %H:%M:%S", time.localtime(seconds)
                ).encode("ascii")
            record = b"%s.%03d " % (self._last_stamp, millis) + body + b"\n"

            if self._asynchronous:
                if BUFFER_SIZE - 1 - len(self._current) <= MIN_AVAILABLE:
                    self._swap_buffer()
                    self._wakeup.notify_all()
                self._current += record
            else:
                self._stream.write(record)
                self._stream.flush()
                self._check_size()

    def _swap_buffer(self) -> None:
        # Caller holds the lock.
        self._filled.append(self._current)
        if self._spare:
            self._spare -= 1
        else:
            print(" warning! log buf empty queue is empty!")
        self._current = bytearray()

    def _drain(self) -> None:
        while self._running or self._current or self._filled:
            with self._wakeup:
                self._wakeup.wait_for(
                    lambda: not self._running or bool(self._filled),
                    timeout=FLUSH_INTERVAL,
                )
                if not (self._current or self._filled):
                    continue
                self._swap_buffer()
                batch, self._filled = self._filled, deque()
            for chunk in batch:
                self._stream.write(chunk)
                self._stream.flush()
                self._check_size()
                with self._lock:
                    self._spare += 1

    def _check_size(self) -> None:
        if self._stream.tell() > self._file_size:
            self._rotate()

    def _rotate(self) -> None:
        self._stream.close()
        target = f"{self._path}.{self._file_num}"
        if os.path.exists(target):
            os.remove(target)
        for index in range(self._file_num - 1, 0, -1):
            older = f"{self._path}.{index}"
            if os.path.exists(older):
                os.replace(older, target)
            target = older
        os.replace(self._path, target)
        self._stream = open(self._path, "ab")


logger_singleton: Singleton[Logger] = Singleton(Logger)


def _dispatch(
    level: LogLevel, tag: str, format: str, args: tuple[Any, ...], echo: bool
) -> None:
    logger = logger_singleton.get_instance()
    if logger is None:
        raise RuntimeError("the shared logger has not been initialised")
    name, line = _call_site(sys._getframe(2))
    full_format = "[%d][" + tag + "][%s][%d]" + format
    full_args = (thread_id(), name, line, *args)
    logger._log_at(level, full_format, full_args)
    if echo:
        print(full_format % full_args)


def force(format: str, *args: Any, echo: bool = False) -> None:
    """Log at FORCE level through the shared logger, tagged with the call site."""
    _dispatch(LogLevel.FORCE, "A", format, args, echo)


def fatal(format: str, *args: Any, echo: bool = False) -> None:
    """Log at FATAL level through the shared logger, tagged with the call site."""
    _dispatch(LogLevel.FATAL, "F", format, args, echo)


def error(format: str, *args: Any, echo: bool = False) -> None:
    """Log at ERROR level through the shared logger, tagged with the call site."""
    _dispatch(LogLevel.ERROR, "E", format, args, echo)


def warn(format: str, *args: Any, echo: bool = False) -> None:
    """Log at WARN level through the shared logger, tagged with the call site."""
    _dispatch(LogLevel.WARN, "W", format, args, echo)


def info(format: str, *args: Any) -> None:
    """Log at INFO level through the shared logger, tagged with the call site."""
    _dispatch(LogLevel.INFO, "I", format, args, False)


def debug(format: str, *args: Any) -> None:
    """Log at DEBUG level through the shared logger, tagged with the call site."""
    _dispatch(LogLevel.DEBUG, "D", format, args, False)