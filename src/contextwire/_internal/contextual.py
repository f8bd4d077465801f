from __future__ import annotations

from contextwire._internal.bindings import Resolver
from contextwire._internal.identifiers import Identifier


class ContextualBindingRegistry:
    """Overrides of a dependency's resolver scoped to one consumer.

    Entries are keyed by ``(consumer, dependency)``. The registry knows nothing
    about the build stack; callers pass the consumer that is asking.
    """

    def __init__(self) -> None:
        self._overrides: dict[tuple[Identifier, Identifier], Resolver] = {}

    def add(self, consumer: Identifier, dependency: Identifier, resolver: Resolver) -> None:
        self._overrides[consumer, dependency] = resolver

    def get(self, consumer: Identifier | None, dependency: Identifier) -> Resolver | None:
        """Return the override for ``dependency`` requested by ``consumer``.

        Args:
            consumer: Identifier of the requesting frame, ``None`` at the top level.
            dependency: Abstract being resolved.

        """
        if consumer is None:
            return None
        return self._overrides.get((consumer, dependency))

    def clear(self) -> None:
        self._overrides.clear()

    def __len__(self) -> int:
        return len(self._overrides)


__all__ = ["ContextualBindingRegistry"]
