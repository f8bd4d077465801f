from __future__ import annotations

import inspect
import logging
import sys
import threading
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Annotated, Any, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

_MISSING: Any = object()
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Describe one constructor parameter as seen by the resolver."""

    name: str
    """Parameter name, used to match entries of the ``args`` mapping."""
    kind: Any
    """Binding kind, decides whether the value is passed by position or keyword."""
    declared_type: Any | None = None
    """Resolved annotation with ``Annotated`` metadata stripped, or ``None``."""
    default: Any = _MISSING
    """Declared default value, if any."""
    annotation_error: Exception | None = field(default=None, compare=False)
    """Error raised while evaluating a string annotation, kept as the cause."""

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING

    @property
    def is_variadic(self) -> bool:
        return self.kind in _VARIADIC_KINDS

    @property
    def is_keyword_only(self) -> bool:
        return self.kind in (Parameter.KEYWORD_ONLY, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Constructor parameter list of a concrete class, in declaration order."""

    concrete: type[Any]
    parameters: tuple[ParameterDescriptor, ...] = ()


class TypeDescriptorProvider:
    """Read constructor signatures and type hints of concrete classes.

    Descriptors are cached per class. Forward references are evaluated with
    ``typing.get_type_hints``; when a hint cannot be evaluated the parameter is
    treated as untyped.
    """

    def __init__(self) -> None:
        self._cache: dict[type[Any], TypeDescriptor] = {}
        self._lock = threading.Lock()

    def describe(self, concrete: type[Any]) -> TypeDescriptor:
        """Return the constructor descriptor for ``concrete``.

        Args:
            concrete: Class whose constructor parameters are inspected.

        """
        cached = self._cache.get(concrete)
        if cached is not None:
            return cached

        descriptor = TypeDescriptor(
            concrete=concrete,
            parameters=tuple(self._describe_parameters(concrete)),
        )
        with self._lock:
            self._cache.setdefault(concrete, descriptor)
        return descriptor

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _describe_parameters(self, concrete: type[Any]) -> list[ParameterDescriptor]:
        try:
            signature = inspect.signature(concrete)
        except (TypeError, ValueError):
            logger.debug("No signature available for %r, constructing without arguments", concrete)
            return []

        type_hints = self._get_type_hints(concrete)
        parameters: list[ParameterDescriptor] = []
        for name, parameter in signature.parameters.items():
            annotation = type_hints.get(name, parameter.annotation)
            annotation_error: Exception | None = None
            if isinstance(annotation, str):
                annotation, annotation_error = self._evaluate_annotation(concrete, annotation)
            parameters.append(
                ParameterDescriptor(
                    name=name,
                    kind=parameter.kind,
                    declared_type=_strip_annotated(annotation),
                    default=(
                        _MISSING if parameter.default is Parameter.empty else parameter.default
                    ),
                    annotation_error=annotation_error,
                ),
            )
        return parameters

    def _get_type_hints(self, concrete: type[Any]) -> dict[str, Any]:
        init = concrete.__init__
        if init is object.__init__:
            init = getattr(concrete, "__new__", init)
        try:
            return get_type_hints(init, include_extras=True)
        except (NameError, TypeError, AttributeError) as error:
            logger.debug("Unable to evaluate type hints of %r: %s", concrete, error)
            return {}

    def _evaluate_annotation(
        self,
        concrete: type[Any],
        annotation: str,
    ) -> tuple[Any, Exception | None]:
        """Evaluate one string annotation in the namespace of ``concrete``.

        Used once ``get_type_hints`` failed for the constructor as a whole, so a
        single unevaluable annotation only leaves its own parameter untyped.
        """
        module = sys.modules.get(concrete.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = {concrete.__name__: concrete, **vars(concrete)}
        try:
            return eval(annotation, globalns, localns), None  # noqa: S307
        except (NameError, SyntaxError, TypeError, AttributeError) as error:
            logger.debug("Unable to evaluate annotation %r of %r: %s", annotation, concrete, error)
            return None, error


def _strip_annotated(annotation: Any) -> Any | None:
    if annotation is Parameter.empty or isinstance(annotation, str):
        return None
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


__all__ = [
    "ParameterDescriptor",
    "TypeDescriptor",
    "TypeDescriptorProvider",
]
