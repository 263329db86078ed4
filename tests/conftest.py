"""Shared pytest fixtures for diregistry tests."""

import pytest

from diregistry.container import Container
from diregistry.scopes import Lifetime


@pytest.fixture()
def container() -> Container:
    """Default container; registrations use single-instance scope."""
    return Container()


@pytest.fixture()
def container_transient() -> Container:
    """Container with new-instance scope as default."""
    return Container(default_lifetime=Lifetime.TRANSIENT)
