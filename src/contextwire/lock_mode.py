from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select how a container serializes registration and resolution.

    Pass the value as ``Container(lock_mode=...)``. Resolvers call back into
    ``make`` while a resolution is in flight, so the thread lock is re-entrant.
    """

    THREAD = "thread"
    """Guard every mutation and every ``make`` call with one ``threading.RLock``."""

    NONE = "none"
    """Disable locking. The container must be confined to a single thread."""
