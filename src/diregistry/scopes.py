from __future__ import annotations

import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from enum import Enum
from typing import Any, Protocol

InstanceFactory = Callable[[], Any]
"""Zero-argument callable that constructs a fresh instance for a registration."""


class Lifetime(Enum):
    """Select the built-in scope given to new registrations."""

    SINGLETON = "singleton"
    """Create one instance on first resolution and share it afterwards."""

    TRANSIENT = "transient"
    """Build a new instance for every resolution call."""


class LockMode(Enum):
    """Select locking behavior for cached single-instance construction."""

    THREAD = "thread"
    """Guard first construction with ``threading.RLock``."""

    NONE = "none"
    """Disable locking around construction; only safe for single-threaded use."""


class Scope(Protocol):
    """Decide whether a registration hands out a shared or a fresh instance."""

    def get_instance(self, factory: InstanceFactory) -> Any:
        """Return an instance, calling ``factory`` when a new one is needed."""
        ...


_MISSING: Any = object()


class SingleInstanceScope:
    """Create the instance once and return the same object on every request.

    First construction is double-checked under a reentrant lock so concurrent
    first resolution never builds more than one instance.
    """

    def __init__(self, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._instance: Any = _MISSING
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )

    def get_instance(self, factory: InstanceFactory) -> Any:
        if self._instance is _MISSING:
            with self._lock:
                if self._instance is _MISSING:
                    self._instance = factory()
        return self._instance


class NewInstanceScope:
    """Build a new instance for every request."""

    def get_instance(self, factory: InstanceFactory) -> Any:
        return factory()


class ExistingInstanceScope:
    """Always return an instance supplied at registration time."""

    def __init__(self, instance: object) -> None:
        self._instance = instance

    def get_instance(self, factory: InstanceFactory) -> Any:
        return self._instance


def scope_for_lifetime(lifetime: Lifetime, lock_mode: LockMode = LockMode.THREAD) -> Scope:
    if lifetime is Lifetime.TRANSIENT:
        return NewInstanceScope()
    return SingleInstanceScope(lock_mode)


__all__ = [
    "ExistingInstanceScope",
    "InstanceFactory",
    "Lifetime",
    "LockMode",
    "NewInstanceScope",
    "Scope",
    "SingleInstanceScope",
    "scope_for_lifetime",
]
