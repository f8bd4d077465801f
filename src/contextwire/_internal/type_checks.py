from __future__ import annotations

import datetime
import decimal
import inspect
import pathlib
import types
import uuid
from typing import Any, TypeGuard

_PRIMITIVE_BASE_TYPES: tuple[type[Any], ...] = (
    pathlib.PurePath,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    decimal.Decimal,
)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: type[Any]) -> bool:
    """Return true when candidate is a ``typing.Protocol`` definition."""
    return bool(getattr(candidate, "_is_protocol", False))


def is_interface_like(candidate: object) -> bool:
    """Return true for classes that describe a contract rather than an implementation.

    Abstract base classes with unimplemented abstract methods and protocols
    qualify. An ``ABC`` subclass without abstract methods is a regular class.

    Args:
        candidate: Value being checked.

    """
    if not is_runtime_class(candidate):
        return False
    return inspect.isabstract(candidate) or is_protocol_class(candidate)


def is_instantiable(candidate: object) -> bool:
    """Return true when candidate is a class that may be constructed directly."""
    if not is_runtime_class(candidate):
        return False
    if is_interface_like(candidate):
        return False
    return not issubclass(candidate, type)


def is_primitive_type(candidate: object) -> bool:
    """Return true for builtin and value-like types that are never auto-wired.

    Everything defined in ``builtins`` qualifies (``int``, ``str``, ``list``,
    ``object`` ...), as do common value types such as ``datetime`` and ``UUID``.

    Args:
        candidate: Declared parameter type.

    """
    if not is_runtime_class(candidate):
        return False
    if candidate.__module__ == "builtins":
        return True
    return issubclass(candidate, _PRIMITIVE_BASE_TYPES)


__all__ = [
    "is_instantiable",
    "is_interface_like",
    "is_primitive_type",
    "is_protocol_class",
    "is_runtime_class",
]
