from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from contextwire._internal.identifiers import Identifier


class BuildStack:
    """Chain of abstracts whose construction is currently in flight.

    Every ``make`` call owns exactly one frame for its whole lifetime. The frame
    right below the top is the consumer that requested the abstract on top,
    which is what contextual overrides are keyed by.
    """

    def __init__(self) -> None:
        self._frames: list[Identifier] = []

    @contextmanager
    def frame(self, abstract: Identifier) -> Generator[None, None, None]:
        """Push ``abstract`` for the duration of the ``with`` block.

        The stack is truncated back to its entry depth on exit, including when
        the block raises.
        """
        depth = len(self._frames)
        self._frames.append(abstract)
        try:
            yield
        finally:
            del self._frames[depth:]

    @property
    def current(self) -> Identifier | None:
        """Return the top frame, the abstract being built right now."""
        return self._frames[-1] if self._frames else None

    @property
    def parent(self) -> Identifier | None:
        """Return the frame below the top, the consumer that asked for ``current``."""
        return self._frames[-2] if len(self._frames) > 1 else None

    def snapshot(self) -> tuple[Identifier, ...]:
        return tuple(self._frames)

    def clear(self) -> None:
        self._frames.clear()

    def __len__(self) -> int:
        return len(self._frames)


__all__ = ["BuildStack"]
