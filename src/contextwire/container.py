from contextwire._internal.container import Container, ContextualBindingBuilder

__all__ = [
    "Container",
    "ContextualBindingBuilder",
]
