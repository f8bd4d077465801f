from __future__ import annotations

from typing import Any


def describe_identifier(identifier: Any) -> str:
    """Return a short human readable name for an abstract or concrete identifier."""
    if isinstance(identifier, type):
        return f"{identifier.__module__}.{identifier.__qualname__}"
    if isinstance(identifier, str):
        return identifier
    return repr(identifier)


class ContextWireError(Exception):
    """Represent a base class for all contextwire-specific failures.

    Catch this type when you want to handle any container error path without
    matching each concrete exception class individually.
    """


class ContextWireRegistrationError(ContextWireError):
    """Signal an invalid ``bind``/``singleton``/``when().needs().give()`` call.

    Registration errors are raised before the container is mutated, so a failed
    registration leaves previously registered bindings untouched.
    """


class ContextWireResolutionError(ContextWireError):
    """Signal that ``make`` could not build the requested abstract."""


class InvalidAbstractError(ContextWireRegistrationError):
    """Signal that a registration or resolution key is not a valid identifier.

    Valid identifiers are runtime classes and non-empty strings.
    """

    def __init__(self, abstract: Any) -> None:
        self.abstract = abstract
        super().__init__(
            f"Abstract must be a class or a non-empty string, `{type(abstract).__name__}` given.",
        )


class ConcreteNotFoundError(ContextWireRegistrationError):
    """Signal that a named concrete does not refer to any importable class.

    Typical fixes include passing the class object itself, using a full dotted
    path such as ``"app.services.Mailer"``, or passing a factory callable.
    """

    def __init__(self, concrete: Any) -> None:
        self.concrete = concrete
        super().__init__(f"Concrete `{describe_identifier(concrete)}` not found.")


class ConcreteNotInstantiableError(ContextWireRegistrationError, ContextWireResolutionError):
    """Signal that a concrete class exists but cannot be constructed.

    Raised for abstract base classes with unimplemented abstract methods and for
    ``typing.Protocol`` classes, both at registration and at resolution time.
    """

    def __init__(self, concrete: Any) -> None:
        self.concrete = concrete
        super().__init__(f"Concrete `{describe_identifier(concrete)}` is not instantiable.")


class InterfaceNotBoundError(ContextWireResolutionError):
    """Signal that an interface-like abstract was requested without a binding.

    Typical fix is ``container.bind(Interface, Implementation)`` or a contextual
    override for the consumer that needs it.
    """

    def __init__(self, abstract: Any) -> None:
        self.abstract = abstract
        super().__init__(
            f"Interface `{describe_identifier(abstract)}` is not bound to a concrete.",
        )


class AbstractNotFoundError(ContextWireResolutionError):
    """Signal that an identifier names no known class and has no binding."""

    def __init__(self, abstract: Any) -> None:
        self.abstract = abstract
        super().__init__(f"Abstract `{describe_identifier(abstract)}` not found.")


class UnresolvableDependencyError(ContextWireResolutionError):
    """Signal that a constructor parameter cannot be filled automatically.

    Raised when a required parameter has no annotation, or is annotated with a
    primitive/builtin type, and neither a named argument nor a default value is
    available.

    Typical fixes include passing the value through ``make(..., args={...})``,
    adding a default value, or binding the consumer to a factory.
    """

    def __init__(self, parameter: str, concrete: Any) -> None:
        self.parameter = parameter
        self.concrete = concrete
        super().__init__(
            f"Unresolvable dependency resolving parameter `{parameter}` "
            f"of `{describe_identifier(concrete)}`.",
        )
