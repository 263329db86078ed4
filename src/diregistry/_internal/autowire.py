from __future__ import annotations

import inspect
import threading
import weakref
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, get_args, get_origin, get_type_hints

from diregistry.exceptions import DIRegistryResolveError
from diregistry.markers import get_injected_marker, strip_optional

if TYPE_CHECKING:
    from diregistry.container import Container

SKIPPED: Any = object()
"""Returned by ``InjectedMember.resolve`` when an optional dependency is not registered."""

_MARKER_NAMES = ("Injected[", "Maybe[")


@dataclass(frozen=True, slots=True)
class InjectedMember:
    """One attribute or parameter the container fills in."""

    name: str
    key: Any
    qualifier: Any = None
    collection: bool = False
    optional: bool = False

    @classmethod
    def from_annotation(cls, name: str, annotation: Any) -> InjectedMember | None:
        marker = get_injected_marker(annotation)
        if marker is None:
            return None

        key = get_args(strip_optional(annotation))[0]
        collection = get_origin(key) is list
        if collection:
            key = get_args(key)[0]
        return cls(
            name=name,
            key=key,
            qualifier=marker.qualifier,
            collection=collection,
            optional=marker.optional,
        )

    def resolve(self, container: Container) -> Any:
        if self.optional and not container.is_registered(self.key):
            return SKIPPED
        if self.collection:
            return container.resolve_all(self.key)
        return container.resolve(self.key, self.qualifier)


def _mentions_marker(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return any(name in annotation for name in _MARKER_NAMES)
    return get_injected_marker(annotation) is not None


def _read_hints(
    target: Any,
    owner: Any,
    raw_annotations: Mapping[str, Any],
) -> dict[str, Any]:
    try:
        return get_type_hints(target, include_extras=True)
    except (NameError, TypeError) as exc:
        # Unrelated annotations that cannot be evaluated are fine as long as
        # nothing asks for injection.
        if not any(_mentions_marker(value) for value in raw_annotations.values()):
            return {}
        msg = f"Cannot read injected annotations: {exc}"
        raise DIRegistryResolveError(msg, owner) from exc


class InjectedMemberInspector:
    """Collect ``Injected[...]`` class attributes, cached per class."""

    def __init__(self) -> None:
        self._cache: weakref.WeakKeyDictionary[type[Any], tuple[InjectedMember, ...]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()

    def inspect_class(self, cls: type[Any]) -> tuple[InjectedMember, ...]:
        with self._lock:
            cached = self._cache.get(cls)
        if cached is not None:
            return cached

        raw_annotations: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            raw_annotations.update(inspect.get_annotations(klass))

        hints = _read_hints(cls, cls, raw_annotations)
        members = tuple(
            member
            for name, annotation in hints.items()
            if (member := InjectedMember.from_annotation(name, annotation)) is not None
        )
        with self._lock:
            self._cache[cls] = members
        return members


@dataclass(frozen=True, slots=True)
class InjectedCallableInspection:
    signature: inspect.Signature
    public_signature: inspect.Signature
    injected_parameters: tuple[InjectedMember, ...]


class InjectedCallableInspector:
    """Find ``Injected[...]`` parameters of a callable."""

    def inspect_callable(self, func: Callable[..., Any]) -> InjectedCallableInspection:
        signature = inspect.signature(func)
        raw_annotations = {name: param.annotation for name, param in signature.parameters.items()}
        hints = _read_hints(func, getattr(func, "__qualname__", func), raw_annotations)

        injected: list[InjectedMember] = []
        public_parameters: list[inspect.Parameter] = []
        for name, parameter in signature.parameters.items():
            member = InjectedMember.from_annotation(name, hints.get(name))
            if member is None:
                public_parameters.append(parameter)
            else:
                injected.append(member)

        return InjectedCallableInspection(
            signature=signature,
            public_signature=signature.replace(parameters=public_parameters),
            injected_parameters=tuple(injected),
        )


__all__ = [
    "SKIPPED",
    "InjectedCallableInspection",
    "InjectedCallableInspector",
    "InjectedMember",
    "InjectedMemberInspector",
]
