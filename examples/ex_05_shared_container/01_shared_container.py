"""Shared container: one lazily created container for the whole process.

``get_shared_container()`` builds the container on first access and returns
the same object afterwards, from any thread.
"""

from __future__ import annotations

from diregistry import Container, get_shared_container, shared_container


class Cache:
    pass


def bootstrap() -> None:
    get_shared_container().register(Cache)


def main() -> None:
    bootstrap()

    container = get_shared_container()
    print(f"same_container={container is get_shared_container()}")  # => same_container=True
    print(f"cache_shared={container.resolve(Cache) is get_shared_container().resolve(Cache)}")  # => cache_shared=True

    test_container = Container()
    shared_container.set_current(test_container)
    print(f"rebound={get_shared_container() is test_container}")  # => rebound=True


if __name__ == "__main__":
    main()
