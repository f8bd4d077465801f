"""Singletons: shared bindings, rebinding, and forgetting cached instances."""

from __future__ import annotations

from contextwire import Container


class Connection:
    opened = 0

    def __init__(self, dsn: str = "sqlite://") -> None:
        Connection.opened += 1
        self.dsn = dsn


def main() -> None:
    container = Container()
    container.singleton(Connection)

    first = container.make(Connection)
    second = container.make(Connection)
    print(f"same_instance={first is second}")  # => same_instance=True
    print(f"opened={Connection.opened}")  # => opened=1

    container.forget_instance(Connection)
    third = container.make(Connection)
    print(f"rebuilt={third is not first}")  # => rebuilt=True

    container.singleton(Connection, lambda container, args: Connection("postgres://"))
    print(f"dsn={container.make(Connection).dsn}")  # => dsn=postgres://

    container.flush()
    print(f"bound_after_flush={container.has(Connection)}")  # => bound_after_flush=False


if __name__ == "__main__":
    main()
