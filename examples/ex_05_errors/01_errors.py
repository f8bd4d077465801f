"""Errors: what each failure looks like and how to recover."""

from __future__ import annotations

from abc import ABC, abstractmethod

from contextwire import (
    AbstractNotFoundError,
    ConcreteNotInstantiableError,
    Container,
    ContextWireError,
    InterfaceNotBoundError,
    UnresolvableDependencyError,
)


class Cache(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None: ...


class RateLimiter:
    def __init__(self, limit: int) -> None:
        self.limit = limit


def main() -> None:
    container = Container()

    try:
        container.make(Cache)
    except InterfaceNotBoundError as error:
        print(type(error).__name__)  # => InterfaceNotBoundError

    try:
        container.make("cache.backend")
    except AbstractNotFoundError as error:
        print(error)  # => Abstract `cache.backend` not found.

    try:
        container.make(RateLimiter)
    except UnresolvableDependencyError as error:
        print(f"parameter={error.parameter}")  # => parameter=limit

    print(container.make(RateLimiter, {"limit": 10}).limit)  # => 10

    try:
        container.bind(Cache)
    except ConcreteNotInstantiableError as error:
        print(isinstance(error, ContextWireError))  # => True


if __name__ == "__main__":
    main()
