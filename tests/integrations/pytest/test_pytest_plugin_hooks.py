from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, cast

from diregistry import Container, Injected, Maybe
from diregistry.integrations.pytest_plugin import (
    CONTAINER_FIXTURE,
    pytest_pycollect_makeitem,
    pytest_pyfunc_call,
)


class Sink:
    pass


class FileSink(Sink):
    pass


class NetworkSink(Sink):
    pass


class Tracer:
    pass


class _Collector:
    def istestfunction(self, obj: object, name: str) -> bool:
        return name.startswith("test")


class _Item:
    def __init__(self, obj: Callable[..., Any], funcargs: dict[str, Any]) -> None:
        self.obj = obj
        self.funcargs = funcargs


def _collect(func: Callable[..., Any]) -> Callable[..., Any]:
    pytest_pycollect_makeitem(_Collector(), func.__name__, func)
    return func


def _run(item: _Item, **fixture_values: Any) -> Any:
    hook = pytest_pyfunc_call(cast("Any", item))
    next(hook)
    try:
        return item.obj(**fixture_values)
    finally:
        next(hook, None)


def _sinks_container() -> Container:
    container = Container()
    container.register(Sink, FileSink)
    container.register(Sink, NetworkSink)
    return container


def test_collection_hides_qualified_and_collection_parameters() -> None:
    @_collect
    def test_fan_out(
        retries: int,
        primary: Injected[Sink, FileSink],
        sinks: Injected[list[Sink]],
    ) -> None:
        pass

    assert tuple(inspect.signature(test_fan_out).parameters) == ("retries",)


def test_collection_skips_helpers_and_plain_tests() -> None:
    def helper(sink: Injected[Sink]) -> None:
        pass

    def test_plain(retries: int) -> None:
        pass

    pytest_pycollect_makeitem(_Collector(), "helper", helper)
    _collect(test_plain)

    assert tuple(inspect.signature(helper).parameters) == ("sink",)
    assert "__signature__" not in test_plain.__dict__


def test_qualified_parameter_picks_the_concrete_registration() -> None:
    @_collect
    def test_primary(retries: int, primary: Injected[Sink, NetworkSink]) -> tuple[int, Sink]:
        return retries, primary

    container = _sinks_container()
    item = _Item(test_primary, {CONTAINER_FIXTURE: container, "retries": 3})

    retries, primary = _run(item, retries=3)

    assert retries == 3
    assert primary is container.resolve(Sink, NetworkSink)


def test_collection_parameter_receives_every_registration() -> None:
    @_collect
    def test_all(sinks: Injected[list[Sink]]) -> list[Sink]:
        return sinks

    item = _Item(test_all, {CONTAINER_FIXTURE: _sinks_container()})

    sinks = _run(item)

    assert [type(sink) for sink in sinks] == [FileSink, NetworkSink]


def test_optional_parameter_keeps_default_when_unregistered() -> None:
    @_collect
    def test_tracing(tracer: Maybe[Tracer] = None) -> Tracer | None:
        return tracer

    item = _Item(test_tracing, {CONTAINER_FIXTURE: Container()})

    assert _run(item) is None


def test_test_callable_and_signature_are_restored_after_the_call() -> None:
    @_collect
    def test_primary(primary: Injected[Sink, FileSink]) -> Sink:
        return primary

    public_signature = inspect.signature(test_primary)
    item = _Item(test_primary, {CONTAINER_FIXTURE: _sinks_container()})

    assert isinstance(_run(item), FileSink)
    assert item.obj is test_primary
    assert inspect.signature(test_primary) == public_signature


def test_call_without_container_fixture_runs_test_unchanged() -> None:
    @_collect
    def test_primary(primary: Injected[Sink, FileSink]) -> None:
        pass

    item = _Item(test_primary, {})
    hook = pytest_pyfunc_call(cast("Any", item))
    next(hook)

    assert item.obj is test_primary
    next(hook, None)
