from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from contextlib import AbstractContextManager, nullcontext
from inspect import Parameter
from typing import Any, TypeVar, overload

from typing_extensions import Self

from contextwire._internal.bindings import Binding, BindingStore, Resolver
from contextwire._internal.build_stack import BuildStack
from contextwire._internal.contextual import ContextualBindingRegistry
from contextwire._internal.identifiers import (
    Identifier,
    import_class,
    is_valid_identifier,
    normalize_identifier,
)
from contextwire._internal.singletons import MISSING, SingletonCache
from contextwire._internal.type_checks import (
    is_instantiable,
    is_interface_like,
    is_primitive_type,
    is_runtime_class,
)
from contextwire._internal.type_descriptors import ParameterDescriptor, TypeDescriptorProvider
from contextwire.exceptions import (
    AbstractNotFoundError,
    ConcreteNotFoundError,
    ConcreteNotInstantiableError,
    ContextWireResolutionError,
    InterfaceNotBoundError,
    InvalidAbstractError,
    UnresolvableDependencyError,
    describe_identifier,
)
from contextwire.integrations.pydantic_settings import is_pydantic_settings_subclass
from contextwire.lock_mode import LockMode

T = TypeVar("T")

logger = logging.getLogger(__name__)
_NO_DEPENDENCY: Any = object()


class Container:
    """Register how abstracts are satisfied and build fully wired instances.

    Abstracts are classes (concrete classes, ABCs, protocols) or string keys.
    Dotted strings that import to a class are treated as that class. A binding
    maps an abstract to a concrete class, which is auto-wired from its
    constructor signature, or to a factory ``(container, args) -> instance``.

    Unbound concrete classes are auto-wired on demand. Contextual overrides
    registered with ``when(...).needs(...).give(...)`` replace a dependency
    only while it is requested directly by the given consumer.

    Examples:
        .. code-block:: python

            container = Container()
            container.singleton(Mailer, SmtpMailer)
            container.when(ReportJob).needs(Mailer).give(NullMailer)

            job = container.make(ReportJob)

    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.THREAD,
        cache_settings: bool = False,
    ) -> None:
        """Initialize an empty container.

        Args:
            lock_mode: ``LockMode.THREAD`` serializes registrations and
                resolutions behind one re-entrant lock. ``LockMode.NONE`` skips
                locking for containers confined to one thread.
            cache_settings: Reuse the instance of an unbound Pydantic settings
                model resolved without arguments. The instance lives in its own
                cache: no binding is registered, so ``has`` stays false.

        """
        self._lock_mode = lock_mode
        self._cache_settings = cache_settings

        self._bindings = BindingStore()
        self._instances = SingletonCache()
        self._settings = SingletonCache()
        self._contextual_bindings = ContextualBindingRegistry()
        self._build_stack = BuildStack()
        self._type_descriptors = TypeDescriptorProvider()

        self._lock: AbstractContextManager[Any]
        if lock_mode is LockMode.THREAD:
            self._lock = threading.RLock()
        else:
            self._lock = nullcontext()

    # region Registration Methods
    def bind(self, abstract: Any, concrete: Any = None, *, shared: bool = False) -> Self:
        """Register how ``abstract`` is resolved.

        Args:
            abstract: Class or non-empty string requested through ``make``.
            concrete: Class to auto-wire, dotted path of such a class, or a
                factory ``(container, args) -> instance``. Defaults to
                ``abstract`` itself.
            shared: Cache the first resolved instance and return it on every
                later ``make`` call.

        Returns:
            The container, for chaining.

        Raises:
            InvalidAbstractError: If ``abstract`` is not a valid identifier.
            ConcreteNotFoundError: If ``concrete`` names no importable class.
            ConcreteNotInstantiableError: If ``concrete`` is abstract or a protocol.

        Notes:
            Re-binding an abstract replaces its binding and drops any instance
            cached for it.

        """
        key = normalize_identifier(abstract)
        resolver = self._wrap_concrete(key if concrete is None else concrete)

        with self._lock:
            self._bindings.add(Binding(abstract=key, resolver=resolver, shared=shared))
            if self._instances.forget(key):
                logger.debug("Dropped cached instance of %s on rebind", describe_identifier(key))
        logger.debug(
            "Bound %s (shared=%s)",
            describe_identifier(key),
            shared,
        )
        return self

    def singleton(self, abstract: Any, concrete: Any = None) -> Self:
        """Register a shared binding; see ``bind``."""
        return self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: Any, instance: Any) -> Self:
        """Register an already built ``instance`` as the shared value of ``abstract``.

        Args:
            abstract: Class or non-empty string requested through ``make``.
            instance: Value returned by every later ``make(abstract)``.

        """
        key = normalize_identifier(abstract)

        def resolve_instance(container: Container, args: Mapping[str, Any]) -> Any:
            return instance

        with self._lock:
            self._bindings.add(Binding(abstract=key, resolver=resolve_instance, shared=True))
            self._instances.store(key, instance)
        logger.debug("Registered instance for %s", describe_identifier(key))
        return self

    def unbind(self, abstract: Any) -> Self:
        """Remove the binding of ``abstract`` and its cached instance, if any."""
        key = normalize_identifier(abstract)
        with self._lock:
            self._bindings.remove(key)
            self._instances.forget(key)
        return self

    def when(self, consumer: Any, *consumers: Any) -> ContextualBindingBuilder:
        """Start a contextual override for one or more consumers.

        Examples:
            .. code-block:: python

                container.when(ReportJob).needs(Mailer).give(NullMailer)

        Raises:
            InvalidAbstractError: If a consumer is not a valid identifier.

        """
        return ContextualBindingBuilder(
            self,
            tuple(normalize_identifier(item) for item in (consumer, *consumers)),
        )

    def add_contextual_binding(self, consumer: Any, dependency: Any, implementation: Any) -> None:
        """Resolve ``dependency`` with ``implementation`` when ``consumer`` asks for it.

        The override applies only when ``consumer`` is the direct requester.
        Results are never cached, even when ``dependency`` is a singleton.

        Args:
            consumer: Class or key whose construction requests ``dependency``.
            dependency: Abstract to override.
            implementation: Class, dotted path, or factory, normalized as in ``bind``.

        """
        consumer_key = normalize_identifier(consumer)
        dependency_key = normalize_identifier(dependency)
        resolver = self._wrap_concrete(implementation)

        with self._lock:
            self._contextual_bindings.add(consumer_key, dependency_key, resolver)
        logger.debug(
            "Bound %s for %s contextually",
            describe_identifier(dependency_key),
            describe_identifier(consumer_key),
        )

    # endregion Registration Methods

    def has(self, abstract: Any) -> bool:
        """Return whether ``abstract`` has a binding or an override for the consumer in flight.

        Called from inside a factory, the consumer is the abstract that factory
        is building.
        """
        if not is_valid_identifier(abstract):
            return False
        key = normalize_identifier(abstract)
        with self._lock:
            if key in self._bindings:
                return True
            return self._contextual_bindings.get(self._build_stack.current, key) is not None

    # region Resolution Methods
    @overload
    def make(self, abstract: type[T], args: Mapping[str, Any] | None = None) -> T: ...

    @overload
    def make(self, abstract: str, args: Mapping[str, Any] | None = None) -> Any: ...

    def make(self, abstract: Any, args: Mapping[str, Any] | None = None) -> Any:
        """Resolve ``abstract`` into an instance.

        Resolution order: a contextual override for the requesting consumer,
        then the binding of ``abstract`` (cached when shared), then
        auto-wiring of unbound concrete classes.

        Args:
            abstract: Class or key to resolve.
            args: Constructor arguments by parameter name. They apply to the
                requested class only, not to its dependencies, and are passed
                to factories as-is.

        Raises:
            InvalidAbstractError: If ``abstract`` is not a valid identifier.
            InterfaceNotBoundError: If an unbound ABC or protocol is requested.
            AbstractNotFoundError: If ``abstract`` names no class and is not bound.
            UnresolvableDependencyError: If a constructor parameter cannot be filled.
            ConcreteNotInstantiableError: If a class cannot be constructed.

        """
        key = normalize_identifier(abstract)
        arguments: Mapping[str, Any] = {} if args is None else args

        with self._lock, self._build_stack.frame(key):
            override = self._contextual_bindings.get(self._build_stack.parent, key)
            if override is not None:
                logger.debug(
                    "Resolving %s contextually for %s",
                    describe_identifier(key),
                    describe_identifier(self._build_stack.parent),
                )
                return override(self, arguments)

            binding = self._bindings.get(key)
            if binding is None:
                return self._make_unbound(key, arguments)
            if not binding.shared:
                return binding.resolver(self, arguments)

            instance = self._instances.get(key)
            if instance is MISSING:
                instance = binding.resolver(self, arguments)
                self._instances.store(key, instance)
                logger.debug("Cached shared instance of %s", describe_identifier(key))
            return instance

    def make_with_dependencies(
        self,
        concrete: type[T],
        args: Mapping[str, Any] | None = None,
    ) -> T:
        """Instantiate ``concrete``, filling every constructor parameter.

        For each parameter the first applicable source wins: a value from
        ``args``, the declared default, a single resolved element for
        ``*args`` parameters (left empty when unresolvable), and finally
        ``make`` of the annotated class.

        Raises:
            ConcreteNotInstantiableError: If ``concrete`` is abstract or a protocol.
            UnresolvableDependencyError: If a required parameter is untyped or
                annotated with a primitive type.

        """
        if not is_instantiable(concrete):
            raise ConcreteNotInstantiableError(concrete)
        arguments: Mapping[str, Any] = {} if args is None else args

        with self._lock:
            descriptor = self._type_descriptors.describe(concrete)
            positional: list[Any] = []
            keyword: dict[str, Any] = {}
            for parameter in descriptor.parameters:
                if parameter.name in arguments:
                    _place_argument(parameter, arguments[parameter.name], positional, keyword)
                    continue
                if parameter.has_default:
                    if not parameter.is_keyword_only:
                        positional.append(parameter.default)
                    continue
                if parameter.is_variadic:
                    dependency = self._make_variadic_element(concrete, parameter)
                    if dependency is not _NO_DEPENDENCY:
                        positional.append(dependency)
                    continue
                declared_type = parameter.declared_type
                if not is_runtime_class(declared_type) or is_primitive_type(declared_type):
                    raise UnresolvableDependencyError(
                        parameter.name,
                        concrete,
                    ) from parameter.annotation_error
                _place_argument(parameter, self.make(declared_type), positional, keyword)

            return concrete(*positional, **keyword)

    # endregion Resolution Methods

    # region Cache Management
    def forget_instance(self, abstract: Any) -> None:
        """Drop the cached instance of a shared ``abstract``; the binding stays."""
        key = normalize_identifier(abstract)
        with self._lock:
            self._instances.forget(key)
            self._settings.forget(key)

    def forget_instances(self) -> None:
        """Drop every cached shared instance; bindings and overrides stay."""
        with self._lock:
            self._instances.forget_all()
            self._settings.forget_all()

    def flush(self) -> None:
        """Reset bindings, cached instances, contextual overrides and the build stack."""
        with self._lock:
            self._bindings.clear()
            self._instances.forget_all()
            self._settings.forget_all()
            self._contextual_bindings.clear()
            self._build_stack.clear()
        logger.debug("Flushed container state")

    # endregion Cache Management

    def _wrap_concrete(self, concrete: Any) -> Resolver:
        if isinstance(concrete, str):
            imported = import_class(concrete) if concrete.strip() else None
            if imported is None:
                raise ConcreteNotFoundError(concrete)
            concrete = imported
        if is_runtime_class(concrete):
            if not is_instantiable(concrete):
                raise ConcreteNotInstantiableError(concrete)
            return _AutoWiringResolver(concrete)
        if callable(concrete):
            return concrete
        raise ConcreteNotFoundError(concrete)

    def _make_unbound(self, key: Identifier, args: Mapping[str, Any]) -> Any:
        if not is_runtime_class(key):
            raise AbstractNotFoundError(key)
        if is_interface_like(key):
            raise InterfaceNotBoundError(key)
        if is_pydantic_settings_subclass(key):
            return self._make_settings(key, args)
        return self.make_with_dependencies(key, args)

    def _make_settings(self, settings_type: type[Any], args: Mapping[str, Any]) -> Any:
        if not self._cache_settings or args:
            return settings_type(**args)

        settings = self._settings.get(settings_type)
        if settings is MISSING:
            settings = settings_type()
            self._settings.store(settings_type, settings)
            logger.debug("Cached settings model %s", describe_identifier(settings_type))
        return settings

    def _make_variadic_element(self, concrete: type[Any], parameter: ParameterDescriptor) -> Any:
        element_type = parameter.declared_type
        if parameter.kind is Parameter.VAR_KEYWORD:
            return _NO_DEPENDENCY
        if not is_runtime_class(element_type) or is_primitive_type(element_type):
            logger.debug(
                "Leaving variadic parameter %r of %s empty",
                parameter.name,
                describe_identifier(concrete),
            )
            return _NO_DEPENDENCY
        try:
            return self.make(element_type)
        except ContextWireResolutionError as error:
            logger.debug(
                "Leaving variadic parameter %r of %s empty: %s",
                parameter.name,
                describe_identifier(concrete),
                error,
            )
            return _NO_DEPENDENCY


class ContextualBindingBuilder:
    """Fluent ``when(consumer).needs(dependency).give(implementation)`` builder."""

    def __init__(self, container: Container, consumers: tuple[Identifier, ...]) -> None:
        self._container = container
        self._consumers = consumers
        self._dependency: Any = _NO_DEPENDENCY

    def needs(self, dependency: Any) -> Self:
        """Select the abstract the consumers need."""
        self._dependency = normalize_identifier(dependency)
        return self

    def give(self, implementation: Any) -> None:
        """Register ``implementation`` for the selected dependency of every consumer.

        Raises:
            InvalidAbstractError: If ``needs`` was not called first.

        """
        if self._dependency is _NO_DEPENDENCY:
            raise InvalidAbstractError(None)
        for consumer in self._consumers:
            self._container.add_contextual_binding(consumer, self._dependency, implementation)


class _AutoWiringResolver:
    """Resolver that builds a concrete class through ``make_with_dependencies``."""

    __slots__ = ("concrete",)

    def __init__(self, concrete: type[Any]) -> None:
        self.concrete = concrete

    def __call__(self, container: Container, args: Mapping[str, Any]) -> Any:
        return container.make_with_dependencies(self.concrete, args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({describe_identifier(self.concrete)})"


def _place_argument(
    parameter: ParameterDescriptor,
    value: Any,
    positional: list[Any],
    keyword: dict[str, Any],
) -> None:
    if parameter.kind is Parameter.VAR_POSITIONAL:
        positional.extend(value)
    elif parameter.kind is Parameter.VAR_KEYWORD:
        keyword.update(value)
    elif parameter.kind is Parameter.KEYWORD_ONLY:
        keyword[parameter.name] = value
    else:
        positional.append(value)


__all__ = [
    "Container",
    "ContextualBindingBuilder",
]
