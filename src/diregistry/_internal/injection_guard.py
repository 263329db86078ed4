from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from diregistry._internal.registration import Registration

# Registrations currently producing an instance in this execution context.
# Each thread and asyncio task sees its own value; the tuple is never mutated.
_inject_stack: ContextVar[tuple[Registration, ...]] = ContextVar(
    "diregistry_inject_stack",
    default=(),
)


def current_stack() -> tuple[Registration, ...]:
    return _inject_stack.get()


def is_injecting(registration: Registration) -> bool:
    """Return whether ``registration`` is already being produced up the call chain."""
    return any(entry is registration for entry in _inject_stack.get())


@contextmanager
def guard(registration: Registration) -> Iterator[None]:
    """Push ``registration`` for the duration of the block and always pop it."""
    token = _inject_stack.set((*_inject_stack.get(), registration))
    try:
        yield
    finally:
        _inject_stack.reset(token)


__all__ = ["current_stack", "guard", "is_injecting"]
