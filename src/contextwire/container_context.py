from __future__ import annotations

import threading

from contextwire._internal.container import Container


class ContainerContext:
    """Hold the process-wide container for application wiring code.

    Prefer passing a ``Container`` explicitly. When a single shared container
    is genuinely needed, bind it once at startup with ``set_current``. Without
    an explicit binding, ``get_current`` lazily creates a default container
    exactly once, even under concurrent first access.

    The binding is process-global for this instance (not task-local or
    thread-local), which matters for tests that run in parallel.
    """

    def __init__(self) -> None:
        self._container: Container | None = None
        self._lock = threading.Lock()

    def set_current(self, container: Container) -> None:
        """Bind ``container`` as the process-wide container."""
        with self._lock:
            self._container = container

    def get_current(self) -> Container:
        """Return the bound container, creating a default one on first use."""
        container = self._container
        if container is not None:
            return container
        with self._lock:
            if self._container is None:
                self._container = Container()
            return self._container

    def reset(self) -> None:
        """Drop the bound container; the next ``get_current`` creates a new one."""
        with self._lock:
            self._container = None


container_context = ContainerContext()
"""Process-wide ``ContainerContext`` instance."""

__all__ = [
    "ContainerContext",
    "container_context",
]
