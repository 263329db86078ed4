"""Scopes: single instance, new instance, existing instance.

Registrations default to a single shared instance. Change the scope through
the returned registration, or pick the default for a whole container.
"""

from __future__ import annotations

from diregistry import Container, Lifetime


class Settings:
    def __init__(self, env: str = "dev") -> None:
        self.env = env


class RequestId:
    pass


class Clock:
    pass


def main() -> None:
    container = Container()

    container.register(Clock)
    print(f"single_same={container.resolve(Clock) is container.resolve(Clock)}")  # => single_same=True

    container.register(RequestId).new_instance()
    fresh = container.resolve(RequestId) is not container.resolve(RequestId)
    print(f"new_differs={fresh}")  # => new_differs=True

    container.register(Settings).existing_instance(Settings(env="prod"))
    print(f"existing_env={container.resolve(Settings).env}")  # => existing_env=prod

    transient = Container(default_lifetime=Lifetime.TRANSIENT)
    transient.register(Clock)
    print(f"transient_differs={transient.resolve(Clock) is not transient.resolve(Clock)}")  # => transient_differs=True


if __name__ == "__main__":
    main()
