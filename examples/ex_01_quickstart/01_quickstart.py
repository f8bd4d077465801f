"""Quickstart: automatic dependency wiring from type hints.

Start with plain classes, resolve only the top-level service, and see how
contextwire builds the full dependency chain for you.
"""

from __future__ import annotations

from contextwire import Container


class Database:
    def __init__(self, host: str = "localhost") -> None:
        self.host = host


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository, page_size: int = 20) -> None:
        self.repository = repository
        self.page_size = page_size


def main() -> None:
    container = Container()
    service = container.make(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database

    paged = container.make(UserService, {"page_size": 50})
    print(f"page_size={paged.page_size}")  # => page_size=50


if __name__ == "__main__":
    main()
