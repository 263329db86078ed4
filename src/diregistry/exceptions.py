from __future__ import annotations

from typing import Any

from diregistry._internal.keys import describe_key


class DIRegistryError(Exception):
    """Represent a base class for all diregistry failures.

    Every error carries the offending type identity as ``key`` and the
    human-readable reason as ``cause``. Catch this type when you want to
    handle any registry error path without matching concrete classes.
    """

    action = "handling"

    def __init__(self, cause: str, key: Any) -> None:
        self.cause = cause
        self.key = key
        super().__init__(f"Exception while {self.action} type {describe_key(key)}: {cause}")


class DIRegistryRegistrationError(DIRegistryError):
    """Signal an invalid registration.

    Raised by ``Container.register`` when an option does not fit the given
    arguments (for example ``ADD_CONCRETE_TYPE_REGISTRATION`` on a
    self-registration), when the concrete type cannot be instantiated, or when
    it does not implement the registered type. The registry is left unchanged.
    """

    action = "registering"


class DIRegistryResolveError(DIRegistryError):
    """Signal that a resolution request cannot be satisfied.

    Raised by ``resolve``/``resolve_all`` when the requested type is not
    registered, when several candidates match and no qualifier was given, or
    when no candidate matches the given qualifier.

    Typical fixes include registering the type, or passing the concrete type
    as a qualifier: ``container.resolve(Base, Concrete)``.
    """

    action = "resolving"
