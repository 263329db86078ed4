from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, cast

import pytest

from diregistry._internal.autowire import InjectedCallableInspector
from diregistry.container import Container

CONTAINER_FIXTURE = "diregistry_container"
_INJECTED_SIGNATURE_ATTR = "__diregistry_injected_signature__"
_inspector = InjectedCallableInspector()


@pytest.fixture()
def diregistry_container() -> Container:
    """Per-test container that ``Injected[...]`` test parameters resolve from.

    Override it in a ``conftest.py`` or test module to register test doubles.
    """
    return Container()


@pytest.fixture(autouse=True)
def _diregistry_container_in_closure(diregistry_container: Container) -> Container:
    # Makes the container available in ``item.funcargs`` for every test.
    return diregistry_container


def pytest_pycollect_makeitem(collector: Any, name: str, obj: object) -> None:
    """Hide ``Injected[...]`` parameters of test functions from fixture lookup.

    The full signature is kept on the function so the parameters can be
    resolved at call time.
    """
    if not callable(obj) or not collector.istestfunction(obj, name):
        return

    inspection = _inspector.inspect_callable(cast("Callable[..., Any]", obj))
    if not inspection.injected_parameters:
        return

    function = cast("Any", obj)
    setattr(function, _INJECTED_SIGNATURE_ATTR, inspection.signature)
    function.__signature__ = inspection.public_signature


@contextmanager
def _injected_signature_restored(test_callable: Any) -> Iterator[None]:
    function = getattr(test_callable, "__func__", test_callable)
    public_signature = function.__signature__
    function.__signature__ = getattr(function, _INJECTED_SIGNATURE_ATTR)
    try:
        yield
    finally:
        function.__signature__ = public_signature


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> Iterator[None]:
    """Run tests with injected parameters through ``Container.inject``."""
    test_callable = pyfuncitem.obj
    container = pyfuncitem.funcargs.get(CONTAINER_FIXTURE)
    if container is None or not hasattr(test_callable, _INJECTED_SIGNATURE_ATTR):
        yield
        return

    with _injected_signature_restored(test_callable):
        pyfuncitem.obj = cast("Container", container).inject(test_callable)
    try:
        yield
    finally:
        pyfuncitem.obj = test_callable
