from __future__ import annotations

import inspect
import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility as a concrete or qualifier type.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol(candidate: object) -> bool:
    """Return true when candidate is a ``typing.Protocol`` class."""
    return is_runtime_class(candidate) and bool(getattr(candidate, "_is_protocol", False))


def is_instantiatable(candidate: object) -> bool:
    return is_runtime_class(candidate) and not inspect.isabstract(candidate) and not is_protocol(candidate)


def describe_key(key: Any) -> str:
    """Render a type identity for error messages and log records."""
    if is_runtime_class(key):
        return key.__qualname__
    return repr(key)


__all__ = ["describe_key", "is_instantiatable", "is_protocol", "is_runtime_class"]
