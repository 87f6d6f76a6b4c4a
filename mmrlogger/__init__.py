"""Buffered, size-rotating file logger with synchronous and asynchronous modes, plus a benchmark."""

__version__ = "0.1.0"
__all__ = ["common", "singleton", "timecounter", "logger", "main"]