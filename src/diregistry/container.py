from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar, overload

from diregistry._internal import injection_guard
from diregistry._internal.autowire import (
    SKIPPED,
    InjectedCallableInspector,
    InjectedMemberInspector,
)
from diregistry._internal.keys import describe_key, is_instantiatable, is_protocol, is_runtime_class
from diregistry._internal.registration import InstantiationContext, Registration
from diregistry.exceptions import DIRegistryRegistrationError, DIRegistryResolveError
from diregistry.scopes import Lifetime, LockMode, scope_for_lifetime

T = TypeVar("T")
Q = TypeVar("Q")
F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


class RegistrationOption(Enum):
    """Options which influence the process of registering dependencies."""

    ADD_CONCRETE_TYPE_REGISTRATION = "add_concrete_type_registration"
    """Also register the concrete type under itself, linked to the new registration.

    The type can then be resolved both by super type (with a qualifier) and by
    concrete type, and both paths share the instance managed by one scope.
    """


class Container:
    """Keep type registrations and hand out injected instances.

    Several concrete types may be registered under one type identity; a
    qualifier (the concrete type) picks one of them on resolution. Resolved
    instances are produced by the registration's scope and get their
    ``Injected[...]`` members filled in before being returned.

    All table access is serialized by a reentrant lock that is released before
    scopes and injection run, so resolution may re-enter the container from
    the same or other threads. Reference cycles between injected members are
    broken by returning the instance without injecting it a second time.

    In most cases a single process-wide container from
    ``get_shared_container()`` is enough. New containers can still be created
    for tests or isolated subsystems.
    """

    def __init__(
        self,
        *,
        default_lifetime: Lifetime = Lifetime.SINGLETON,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize an empty container.

        Args:
            default_lifetime: Scope given to new registrations. Change it per
                registration with ``single_instance()``/``new_instance()``.
            lock_mode: Locking used by single-instance scopes this container
                creates.

        """
        self._default_lifetime = default_lifetime
        self._lock_mode = lock_mode
        self._registrations: dict[Any, list[Registration]] = {}
        self._lock = threading.RLock()
        self._member_inspector = InjectedMemberInspector()
        self._callable_inspector = InjectedCallableInspector()

    # region Registration Methods
    def register(
        self,
        registered: Any,
        concrete: type[Any] | None = None,
        *options: RegistrationOption,
    ) -> Registration:
        """Register ``concrete`` under the ``registered`` type identity.

        With ``concrete`` omitted the type is registered under itself and can
        only be resolved by that type. Registering the same pair twice returns
        the existing registration. New registrations use the container's
        default lifetime.

        Args:
            registered: Type identity to file the registration under. A super
                type, the concrete type itself, or a string token.
            concrete: Concrete class instantiated on resolution.
            *options: ``RegistrationOption`` values.

        Returns:
            The registration, which can be used to change its scope.

        Raises:
            DIRegistryRegistrationError: If ``concrete`` cannot be instantiated,
                does not implement ``registered``, or an option does not apply.

        Examples:
            .. code-block:: python

                container.register(Clock)
                container.register(Notifier, EmailNotifier).new_instance()
                container.register(
                    Notifier,
                    SmsNotifier,
                    RegistrationOption.ADD_CONCRETE_TYPE_REGISTRATION,
                )

        """
        concrete_type = registered if concrete is None else concrete
        self._validate_registration(registered, concrete_type, options)

        logger.debug("Register type %s (as %s)", describe_key(concrete_type), describe_key(registered))

        with self._lock:
            existing = self._find_registration(self._registrations.get(registered, ()), concrete_type)
            if existing is not None:
                return existing

            registration = Registration(
                registered,
                concrete_type,
                self,
                scope=scope_for_lifetime(self._default_lifetime, self._lock_mode),
                lock_mode=self._lock_mode,
            )

            if RegistrationOption.ADD_CONCRETE_TYPE_REGISTRATION in options:
                if registered == concrete_type:
                    msg = (
                        "Option ADD_CONCRETE_TYPE_REGISTRATION cannot be used "
                        "when registering a concrete type registration"
                    )
                    raise DIRegistryRegistrationError(msg, concrete_type)
                self.register(concrete_type).link_to(registration)

            self._registrations.setdefault(registered, []).append(registration)
            return registration

    def _validate_registration(
        self,
        registered: Any,
        concrete_type: Any,
        options: tuple[Any, ...],
    ) -> None:
        for option in options:
            if not isinstance(option, RegistrationOption):
                msg = f"Unknown registration option {option!r}."
                raise DIRegistryRegistrationError(msg, registered)

        if not is_instantiatable(concrete_type):
            msg = f"Concrete type {describe_key(concrete_type)} must be a non-abstract class."
            raise DIRegistryRegistrationError(msg, registered)

        if is_runtime_class(registered) and not is_protocol(registered):
            if not issubclass(concrete_type, registered):
                msg = f"Concrete type {describe_key(concrete_type)} must be a subclass of {describe_key(registered)}."
                raise DIRegistryRegistrationError(msg, registered)

    def is_registered(self, key: Any) -> bool:
        with self._lock:
            return bool(self._registrations.get(key))

    def remove_registration(self, key: Any) -> None:
        """Remove every registration filed under ``key``.

        Unknown keys are ignored. Concrete-type registrations linked to a
        removed registration stay in place and keep resolving through it.
        """
        logger.debug("Remove registrations of type %s", describe_key(key))
        with self._lock:
            self._registrations.pop(key, None)

    def clear_all_registrations(self) -> None:
        logger.debug("Clear all registrations")
        with self._lock:
            self._registrations.clear()

    # endregion Registration Methods

    # region Resolution Methods
    @overload
    def resolve(self, key: type[T], qualifier: None = None) -> T: ...

    @overload
    def resolve(self, key: Any, qualifier: type[Q]) -> Q: ...

    @overload
    def resolve(self, key: Any, qualifier: None = None) -> Any: ...

    def resolve(self, key: Any, qualifier: Any = None) -> Any:
        """Resolve an injected instance of ``key``.

        Without a qualifier, exactly one registration must exist for ``key``.
        With a qualifier, the registration whose concrete type is the
        qualifier is used.

        Args:
            key: Type identity to resolve.
            qualifier: Concrete type selecting one of several registrations.

        Returns:
            An instance created according to the registration's scope.

        Raises:
            DIRegistryResolveError: If ``key`` is not registered, several
                registrations match and no qualifier was given, or no
                registration matches the qualifier.

        """
        qualifier_key = key if qualifier is None else qualifier
        logger.debug("Resolving type %s with qualifier %s", describe_key(key), describe_key(qualifier_key))

        registration = self._get_qualified_registration(key, qualifier_key)
        return self._resolve_injected_instance(registration)

    def resolve_all(self, key: Any) -> list[Any]:
        """Resolve one injected instance per registration filed under ``key``.

        Instances are returned in registration order.

        Raises:
            DIRegistryResolveError: If ``key`` is not registered.

        """
        logger.debug("Resolving all registrations of type %s", describe_key(key))
        return [
            self._resolve_injected_instance(registration)
            for registration in self._get_candidates(key)
        ]

    def _get_candidates(self, key: Any) -> list[Registration]:
        with self._lock:
            candidates = list(self._registrations.get(key, ()))
        if not candidates:
            msg = "Type not registered."
            raise DIRegistryResolveError(msg, key)
        return candidates

    def _get_qualified_registration(self, key: Any, qualifier_key: Any) -> Registration:
        candidates = self._get_candidates(key)

        if qualifier_key == key:
            if len(candidates) > 1:
                candidate_list = ", ".join(
                    describe_key(candidate.instantiatable_type) for candidate in candidates
                )
                msg = f"Multiple qualified candidates available: {candidate_list}. Please use a qualifier."
                raise DIRegistryResolveError(msg, key)
            return candidates[0]

        registration = self._find_registration(candidates, qualifier_key)
        if registration is None:
            msg = f"Type not registered for qualifier {describe_key(qualifier_key)}."
            raise DIRegistryResolveError(msg, key)
        return registration

    @staticmethod
    def _find_registration(candidates: Any, concrete_type: Any) -> Registration | None:
        for registration in candidates:
            if registration.instantiatable_type == concrete_type:
                return registration
        return None

    def _resolve_injected_instance(self, registration: Registration) -> Any:
        if injection_guard.is_injecting(registration):
            # The instance is returned without its own members injected.
            logger.debug("Breaking reference cycle at %r", registration)
            return registration.get_instance(InstantiationContext(inject_instance=False))

        with injection_guard.guard(registration):
            return registration.get_instance(InstantiationContext())

    # endregion Resolution Methods

    # region Injection Methods
    def autowire(self, instance: object) -> None:
        """Inject every ``Injected[...]`` member of ``instance`` that is not set yet.

        Members holding a value other than ``None`` are left alone, so calling
        this repeatedly on the same instance is cheap and only fills gaps.

        Raises:
            DIRegistryResolveError: If a member's dependency cannot be resolved
                or its annotation cannot be evaluated.

        """
        for member in self._member_inspector.inspect_class(type(instance)):
            if getattr(instance, member.name, None) is not None:
                continue
            value = member.resolve(self)
            if value is not SKIPPED:
                setattr(instance, member.name, value)

    def inject(self, func: F) -> F:
        """Wrap ``func`` so ``Injected[...]`` parameters are resolved on each call.

        Injected parameters are removed from the wrapper's public signature.
        Passing one explicitly overrides the container.

        Examples:
            .. code-block:: python

                @container.inject
                def send(message: str, notifier: Injected[Notifier]) -> None:
                    notifier.notify(message)

                send("hello")

        """
        inspection = self._callable_inspector.inspect_callable(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound_arguments = inspection.signature.bind_partial(*args, **kwargs)
            for parameter in inspection.injected_parameters:
                if parameter.name in bound_arguments.arguments:
                    continue
                value = parameter.resolve(self)
                if value is not SKIPPED:
                    bound_arguments.arguments[parameter.name] = value
            return func(*bound_arguments.args, **bound_arguments.kwargs)

        wrapper.__signature__ = inspection.public_signature  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    # endregion Injection Methods


__all__ = ["Container", "RegistrationOption"]
