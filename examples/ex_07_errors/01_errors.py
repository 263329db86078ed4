"""Errors: registration and resolution failures.

Every failure carries the offending type as ``key`` and a readable ``cause``.
Failed calls leave the registry unchanged.
"""

from __future__ import annotations

from diregistry import (
    Container,
    DIRegistryError,
    DIRegistryRegistrationError,
    DIRegistryResolveError,
    RegistrationOption,
)


class Storage:
    pass


class DiskStorage(Storage):
    pass


class Missing:
    pass


def main() -> None:
    container = Container()

    try:
        container.register(DiskStorage, DiskStorage, RegistrationOption.ADD_CONCRETE_TYPE_REGISTRATION)
    except DIRegistryRegistrationError as error:
        print(error)  # => Exception while registering type DiskStorage: Option ADD_CONCRETE_TYPE_REGISTRATION cannot be used when registering a concrete type registration

    try:
        container.resolve(Missing)
    except DIRegistryResolveError as error:
        print(error)  # => Exception while resolving type Missing: Type not registered.

    container.register(Storage, DiskStorage)
    try:
        container.resolve(Storage, Missing)
    except DIRegistryError as error:
        print(f"key={error.key.__name__}")  # => key=Storage


if __name__ == "__main__":
    main()
