from __future__ import annotations

import importlib
import warnings
from typing import Any

from contextwire._internal.type_checks import is_runtime_class

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)
_SETTINGS_MODULES = ("pydantic_settings", "pydantic.v1")


def _load_base_settings(module_name: str) -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


def _discover_settings_bases() -> tuple[type[Any], ...]:
    bases: list[type[Any]] = []
    for module_name in _SETTINGS_MODULES:
        candidate = _load_base_settings(module_name)
        if candidate is not None and candidate not in bases:
            bases.append(candidate)
    return tuple(bases)


SETTINGS_BASES: tuple[type[Any], ...] = _discover_settings_bases()


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a concrete Pydantic settings model.

    ``pydantic_settings.BaseSettings`` and legacy ``pydantic.v1.BaseSettings``
    are recognized when importable. Without Pydantic every candidate yields
    ``False``.

    The container uses this check to build unbound settings models with no
    arguments, so values come from the environment, and to share that
    instance for the container lifetime.

    Args:
        candidate: Object to test.

    """
    if not is_runtime_class(candidate) or candidate in SETTINGS_BASES:
        return False
    try:
        return any(issubclass(candidate, base) for base in SETTINGS_BASES)
    except TypeError:
        return False


__all__ = [
    "SETTINGS_BASES",
    "is_pydantic_settings_subclass",
]
