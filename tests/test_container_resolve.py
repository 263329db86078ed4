"""Tests for Container.resolve() and Container.resolve_all()."""

import pytest

from diregistry.container import Container
from diregistry.exceptions import DIRegistryError, DIRegistryResolveError


class Storage:
    pass


class DiskStorage(Storage):
    pass


class MemoryStorage(Storage):
    pass


class Unregistered:
    pass


class TestResolveWithoutQualifier:
    def test_single_candidate(self, container: Container) -> None:
        container.register(Storage, DiskStorage)

        assert isinstance(container.resolve(Storage), DiskStorage)

    def test_single_instance_is_shared(self, container: Container) -> None:
        container.register(DiskStorage)

        assert container.resolve(DiskStorage) is container.resolve(DiskStorage)

    def test_unregistered_type(self, container: Container) -> None:
        with pytest.raises(DIRegistryResolveError) as exc_info:
            container.resolve(Unregistered)

        assert exc_info.value.key is Unregistered
        assert exc_info.value.cause == "Type not registered."
        assert str(exc_info.value) == "Exception while resolving type Unregistered: Type not registered."

    def test_ambiguous_candidates_list_every_concrete_type(self, container: Container) -> None:
        container.register(Storage, DiskStorage)
        container.register(Storage, MemoryStorage)

        with pytest.raises(DIRegistryResolveError) as exc_info:
            container.resolve(Storage)

        message = str(exc_info.value)
        assert "Multiple qualified candidates available" in message
        assert "DiskStorage" in message
        assert "MemoryStorage" in message
        assert "Please use a qualifier" in message


class TestResolveWithQualifier:
    def test_qualifier_picks_candidate(self, container: Container) -> None:
        container.register(Storage, DiskStorage)
        container.register(Storage, MemoryStorage)

        assert type(container.resolve(Storage, DiskStorage)) is DiskStorage
        assert type(container.resolve(Storage, MemoryStorage)) is MemoryStorage

    def test_qualifier_equal_to_key_behaves_like_no_qualifier(self, container: Container) -> None:
        container.register(DiskStorage)

        assert container.resolve(DiskStorage, DiskStorage) is container.resolve(DiskStorage)

    def test_unknown_qualifier(self, container: Container) -> None:
        container.register(Storage, DiskStorage)

        with pytest.raises(DIRegistryResolveError) as exc_info:
            container.resolve(Storage, MemoryStorage)

        assert exc_info.value.key is Storage
        assert "qualifier MemoryStorage" in str(exc_info.value)

    def test_failed_resolution_leaves_registrations_untouched(self, container: Container) -> None:
        container.register(Storage, DiskStorage)
        container.register(Storage, MemoryStorage)

        with pytest.raises(DIRegistryError):
            container.resolve(Storage)

        assert isinstance(container.resolve(Storage, DiskStorage), DiskStorage)


class TestResolveAll:
    def test_returns_one_instance_per_registration(self, container: Container) -> None:
        container.register(Storage, DiskStorage)
        container.register(Storage, MemoryStorage)

        instances = container.resolve_all(Storage)

        assert [type(instance) for instance in instances] == [DiskStorage, MemoryStorage]

    def test_uses_registration_scopes(self, container: Container) -> None:
        container.register(Storage, DiskStorage)
        container.register(Storage, MemoryStorage).new_instance()

        first = container.resolve_all(Storage)
        second = container.resolve_all(Storage)

        assert first[0] is second[0]
        assert first[1] is not second[1]

    def test_unregistered_type(self, container: Container) -> None:
        with pytest.raises(DIRegistryResolveError):
            container.resolve_all(Unregistered)

    def test_result_is_a_copy(self, container: Container) -> None:
        container.register(Storage, DiskStorage)

        container.resolve_all(Storage).clear()

        assert len(container.resolve_all(Storage)) == 1
