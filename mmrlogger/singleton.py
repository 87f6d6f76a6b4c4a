"""A holder that keeps at most one instance of a class."""

from __future__ import annotations

import threading
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Singleton(Generic[T]):
    """Lazily creates, hands out and destroys a single instance of ``cls``."""

    def __init__(self, cls: type[T]) -> None:
        self._cls = cls
        self._instance: T | None = None
        self._lock = threading.Lock()

    def init_instance(self, *args: Any, **kwargs: Any) -> T:
        """Create the instance if there is none yet and return it.

        Arguments are used only when the instance is created.
        """
        with self._lock:
            if self._instance is None:
                self._instance = self._cls(*args, **kwargs)
            return self._instance

    def get_instance(self) -> T | None:
        """Return the current instance, or ``None`` if none exists."""
        return self._instance

    def destroy_instance(self) -> None:
        """Release the instance, closing it first if it can be closed."""
        with self._lock:
            instance, self._instance = self._instance, None
        close = getattr(instance, "close", None)
        if callable(close):
            close()