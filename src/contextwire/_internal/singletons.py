from __future__ import annotations

from typing import Any

from contextwire._internal.identifiers import Identifier

_MISSING: Any = object()


class SingletonCache:
    """Instances built for shared bindings, keyed by abstract.

    ``None`` is a valid cached instance, so lookups go through ``get`` with an
    explicit sentinel instead of truthiness checks.
    """

    def __init__(self) -> None:
        self._instances: dict[Identifier, Any] = {}

    def get(self, abstract: Identifier, default: Any = _MISSING) -> Any:
        return self._instances.get(abstract, default)

    def store(self, abstract: Identifier, instance: Any) -> None:
        self._instances[abstract] = instance

    def forget(self, abstract: Identifier) -> bool:
        """Drop the cached instance of ``abstract``; return whether one existed."""
        return self._instances.pop(abstract, _MISSING) is not _MISSING

    def forget_all(self) -> None:
        self._instances.clear()

    def __contains__(self, abstract: object) -> bool:
        return abstract in self._instances

    def __len__(self) -> int:
        return len(self._instances)


MISSING = _MISSING

__all__ = [
    "MISSING",
    "SingletonCache",
]
