"""Quickstart: register types and resolve injected instances.

Mark class attributes with ``Injected[...]`` and resolve only the top-level
service; the container fills in the whole chain.
"""

from __future__ import annotations

from diregistry import Container, Injected


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    database: Injected[Database]


class UserService:
    repository: Injected[UserRepository]


def main() -> None:
    container = Container()
    container.register(Database)
    container.register(UserRepository)
    container.register(UserService)

    service = container.resolve(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database


if __name__ == "__main__":
    main()
