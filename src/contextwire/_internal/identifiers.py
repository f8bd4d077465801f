from __future__ import annotations

import importlib
import logging
from typing import Any, TypeAlias

from contextwire._internal.type_checks import is_runtime_class
from contextwire.exceptions import InvalidAbstractError

logger = logging.getLogger(__name__)

Identifier: TypeAlias = type[Any] | str
"""A registration or resolution key: a runtime class or a non-empty string."""


def normalize_identifier(identifier: Any) -> Identifier:
    """Return the canonical key for an identifier.

    Classes are returned unchanged. Dotted strings that import to a class are
    replaced by that class so ``"app.mail.Mailer"`` and ``Mailer`` share one
    binding. Any other non-empty string stays a plain string key.

    Normalizing a dotted string imports its module prefixes, with whatever side
    effects those imports have. A module that fails to import, for any reason,
    leaves the string as a plain key.

    Args:
        identifier: User supplied abstract, consumer, or concrete name.

    Raises:
        InvalidAbstractError: If identifier is neither a class nor a non-empty string.

    """
    if is_runtime_class(identifier):
        return identifier
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidAbstractError(identifier)
    imported = import_class(identifier)
    if imported is not None:
        return imported
    return identifier


def is_valid_identifier(identifier: Any) -> bool:
    """Return whether identifier is accepted by ``normalize_identifier``."""
    if is_runtime_class(identifier):
        return True
    return isinstance(identifier, str) and bool(identifier.strip())


def import_class(path: str) -> type[Any] | None:
    """Import ``module.attr`` style paths and return the class they name.

    Nested attributes are supported (``"pkg.module.Outer.Inner"``). Returns
    ``None`` when the path does not name a class.
    """
    module_name, _, attribute_path = path.rpartition(".")
    attributes = [attribute_path]
    while module_name:
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError:
            module_name, _, attribute = module_name.rpartition(".")
            attributes.insert(0, attribute)
            continue
        except Exception as error:  # noqa: BLE001
            logger.debug(
                "Import of %r failed, keeping %r as a plain key: %s",
                module_name,
                path,
                error,
            )
            return None
        for attribute in attributes:
            target = getattr(target, attribute, None)
            if target is None:
                return None
        return target if is_runtime_class(target) else None
    return None


__all__ = [
    "Identifier",
    "import_class",
    "is_valid_identifier",
    "normalize_identifier",
]
