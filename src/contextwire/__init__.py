from contextwire.container import Container, ContextualBindingBuilder
from contextwire.container_context import ContainerContext, container_context
from contextwire.exceptions import (
    AbstractNotFoundError,
    ConcreteNotFoundError,
    ConcreteNotInstantiableError,
    ContextWireError,
    ContextWireRegistrationError,
    ContextWireResolutionError,
    InterfaceNotBoundError,
    InvalidAbstractError,
    UnresolvableDependencyError,
)
from contextwire.lock_mode import LockMode

__all__ = [
    "AbstractNotFoundError",
    "ConcreteNotFoundError",
    "ConcreteNotInstantiableError",
    "Container",
    "ContainerContext",
    "ContextWireError",
    "ContextWireRegistrationError",
    "ContextWireResolutionError",
    "ContextualBindingBuilder",
    "InterfaceNotBoundError",
    "InvalidAbstractError",
    "LockMode",
    "UnresolvableDependencyError",
    "container_context",
]
