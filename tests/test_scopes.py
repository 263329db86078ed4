"""Tests for the built-in scopes and registration instance production."""

from __future__ import annotations

from diregistry._internal.registration import InstantiationContext, Registration
from diregistry.container import Container
from diregistry.markers import Injected
from diregistry.scopes import (
    ExistingInstanceScope,
    Lifetime,
    LockMode,
    NewInstanceScope,
    SingleInstanceScope,
    scope_for_lifetime,
)


class Counter:
    created = 0

    def __init__(self) -> None:
        Counter.created += 1


class Dependency:
    pass


class Dependent:
    dependency: Injected[Dependency]


class TestScopes:
    def test_single_instance_scope_calls_factory_once(self) -> None:
        calls: list[int] = []
        scope = SingleInstanceScope()

        def factory() -> object:
            calls.append(1)
            return object()

        first = scope.get_instance(factory)
        second = scope.get_instance(factory)

        assert first is second
        assert len(calls) == 1

    def test_new_instance_scope_calls_factory_every_time(self) -> None:
        scope = NewInstanceScope()

        assert scope.get_instance(object) is not scope.get_instance(object)

    def test_existing_instance_scope_ignores_factory(self) -> None:
        instance = object()
        scope = ExistingInstanceScope(instance)

        assert scope.get_instance(object) is instance

    def test_scope_for_lifetime(self) -> None:
        assert isinstance(scope_for_lifetime(Lifetime.SINGLETON), SingleInstanceScope)
        assert isinstance(scope_for_lifetime(Lifetime.TRANSIENT), NewInstanceScope)
        assert isinstance(scope_for_lifetime(Lifetime.SINGLETON, LockMode.NONE), SingleInstanceScope)


class TestRegistrationGetInstance:
    def test_get_instance_injects_by_default(self, container: Container) -> None:
        container.register(Dependency)
        registration = Registration(Dependent, Dependent, container)

        instance = registration.get_instance()

        assert isinstance(instance.dependency, Dependency)

    def test_get_instance_without_injection(self, container: Container) -> None:
        registration = Registration(Dependent, Dependent, container)

        instance = registration.get_instance(InstantiationContext(inject_instance=False))

        assert not hasattr(instance, "dependency")

    def test_linked_registration_delegates(self, container: Container) -> None:
        target = Registration(Counter, Counter, container).new_instance()
        alias = Registration(Counter, Counter, container).link_to(target)
        before = Counter.created

        alias.get_instance()

        assert Counter.created == before + 1

    def test_repr(self, container: Container) -> None:
        registration = Registration(object, Counter, container)

        assert repr(registration) == "Registration(object -> Counter)"
