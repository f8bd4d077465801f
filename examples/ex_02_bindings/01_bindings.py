"""Bindings: map abstractions to classes, factories, and string keys.

Bind an ABC to an implementation class, bind a string key to a factory that
receives the container and the ``make`` arguments, and bind by dotted path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from contextwire import Container


class Notifier(ABC):
    @abstractmethod
    def notify(self, message: str) -> str: ...


class EmailNotifier(Notifier):
    def __init__(self, sender: str = "noreply@example.com") -> None:
        self.sender = sender

    def notify(self, message: str) -> str:
        return f"email from {self.sender}: {message}"


def build_settings(container: Container, args: Mapping[str, Any]) -> dict[str, Any]:
    return {"debug": False, **args}


def main() -> None:
    container = Container()
    container.bind(Notifier, EmailNotifier)
    container.bind("settings", build_settings)

    notifier = container.make(Notifier)
    print(notifier.notify("hi"))  # => email from noreply@example.com: hi

    custom = container.make(Notifier, {"sender": "ops@example.com"})
    print(custom.notify("deploy"))  # => email from ops@example.com: deploy

    print(container.make("settings", {"debug": True}))  # => {'debug': True}

    container.bind("collections.abc.Mapping", "collections.OrderedDict")
    print(type(container.make(Mapping)).__name__)  # => OrderedDict

    print(f"has_notifier={container.has(Notifier)}")  # => has_notifier=True


if __name__ == "__main__":
    main()
