from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from diregistry._internal.keys import describe_key
from diregistry.exceptions import DIRegistryRegistrationError
from diregistry.scopes import (
    ExistingInstanceScope,
    LockMode,
    NewInstanceScope,
    Scope,
    SingleInstanceScope,
)

if TYPE_CHECKING:
    from typing_extensions import Self

    from diregistry.container import Container


@dataclass(frozen=True, slots=True)
class InstantiationContext:
    """Per-request flags handed to ``Registration.get_instance``."""

    inject_instance: bool = True


class Registration:
    """Bind a registered type identity to a concrete type and its scope.

    Registrations are created by ``Container.register`` and returned to the
    caller so the scope can be changed fluently::

        container.register(Cache, RedisCache).new_instance()

    A registration linked to another one (see ``link_to``) delegates instance
    production to it, so both resolve paths share the same scope.
    """

    def __init__(
        self,
        registered_key: Any,
        instantiatable_type: type[Any],
        container: Container,
        *,
        scope: Scope | None = None,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        self.registered_key = registered_key
        self.instantiatable_type = instantiatable_type
        self.scope: Scope = scope if scope is not None else SingleInstanceScope(lock_mode)
        self.linked_registration: Registration | None = None
        self._container = container
        self._lock_mode = lock_mode

    def __repr__(self) -> str:
        return (
            f"Registration({describe_key(self.registered_key)} -> "
            f"{describe_key(self.instantiatable_type)})"
        )

    def set_scope(self, scope: Scope) -> Self:
        self.scope = scope
        return self

    def single_instance(self) -> Self:
        """Share one lazily created instance for every resolution."""
        return self.set_scope(SingleInstanceScope(self._lock_mode))

    def new_instance(self) -> Self:
        """Create a new instance for every resolution."""
        return self.set_scope(NewInstanceScope())

    def existing_instance(self, instance: object) -> Self:
        """Always resolve to ``instance``, which must be of the concrete type."""
        if not isinstance(instance, self.instantiatable_type):
            msg = f"Existing instance {instance!r} is not an instance of {describe_key(self.instantiatable_type)}."
            raise DIRegistryRegistrationError(msg, self.registered_key)
        return self.set_scope(ExistingInstanceScope(instance))

    def link_to(self, registration: Registration) -> Self:
        self.linked_registration = registration
        return self

    def get_instance(self, context: InstantiationContext | None = None) -> Any:
        """Produce an instance through the scope and inject its members.

        Injection is skipped when ``context.inject_instance`` is false, which
        the container requests to break reference cycles.
        """
        context = context or InstantiationContext()
        if self.linked_registration is not None:
            return self.linked_registration.get_instance(context)

        instance = self.scope.get_instance(self.instantiatable_type)
        if context.inject_instance:
            self._container.autowire(instance)
        return instance


__all__ = ["InstantiationContext", "Registration"]
