from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from contextwire._internal.identifiers import Identifier

if TYPE_CHECKING:
    from contextwire._internal.container import Container

Resolver: TypeAlias = "Callable[[Container, Mapping[str, Any]], Any]"
"""A factory ``(container, args) -> instance`` producing one instance."""


@dataclass(frozen=True, slots=True)
class Binding:
    """Describe how one abstract is produced and whether the result is shared."""

    abstract: Identifier
    """The key callers pass to ``make``."""
    resolver: Resolver
    """Normalized factory invoked with ``(container, args)``."""
    shared: bool = False
    """Cache the first resolved instance and reuse it for later calls."""


class BindingStore:
    """Hold at most one ``Binding`` per abstract."""

    def __init__(self) -> None:
        self._bindings: dict[Identifier, Binding] = {}

    def add(self, binding: Binding) -> Binding | None:
        """Register ``binding``, replacing and returning any previous one."""
        previous = self._bindings.get(binding.abstract)
        self._bindings[binding.abstract] = binding
        return previous

    def get(self, abstract: Identifier) -> Binding | None:
        return self._bindings.get(abstract)

    def remove(self, abstract: Identifier) -> Binding | None:
        return self._bindings.pop(abstract, None)

    def clear(self) -> None:
        self._bindings.clear()

    def __contains__(self, abstract: object) -> bool:
        return abstract in self._bindings


__all__ = [
    "Binding",
    "BindingStore",
    "Resolver",
]
