"""Reference cycles: injected members that point back at each other.

Resolution terminates. With single-instance scopes both sides end up fully
wired; with new-instance scopes the instance that closes the cycle is returned
without its own members injected.
"""

from __future__ import annotations

from diregistry import Container, Injected, Lifetime


class Parent:
    child: Injected[Child]


class Child:
    parent: Injected[Parent]


def main() -> None:
    container = Container()
    container.register(Parent)
    container.register(Child)

    parent = container.resolve(Parent)
    print(f"single_closed={parent.child.parent is parent}")  # => single_closed=True

    transient = Container(default_lifetime=Lifetime.TRANSIENT)
    transient.register(Parent)
    transient.register(Child)

    parent = transient.resolve(Parent)
    inner = parent.child.parent
    print(f"transient_new_parent={inner is not parent}")  # => transient_new_parent=True
    print(f"inner_injected={hasattr(inner, 'child')}")  # => inner_injected=False


if __name__ == "__main__":
    main()
