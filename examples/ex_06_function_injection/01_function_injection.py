"""Function injection: resolve ``Injected[...]`` parameters per call.

``container.inject`` hides injected parameters from the public signature.
Explicit arguments still win over the container.
"""

from __future__ import annotations

import inspect

from diregistry import Container, Injected, Maybe


class Greeter:
    def greet(self, name: str) -> str:
        return f"hello {name}"


class LoudGreeter(Greeter):
    def greet(self, name: str) -> str:
        return f"HELLO {name.upper()}"


class Tracer:
    pass


container = Container()
container.register(Greeter)


@container.inject
def welcome(name: str, greeter: Injected[Greeter], tracer: Maybe[Tracer] = None) -> str:
    suffix = "" if tracer is None else " (traced)"
    return greeter.greet(name) + suffix


def main() -> None:
    print(welcome("ada"))  # => hello ada
    print(f"signature={inspect.signature(welcome)}")  # => signature=(name: 'str') -> 'str'
    print(welcome("ada", greeter=LoudGreeter()))  # => HELLO ADA


if __name__ == "__main__":
    main()
