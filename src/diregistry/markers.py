from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, NamedTuple, TypeVar, Union, get_args, get_origin

T = TypeVar("T")


class InjectedMarker(NamedTuple):
    """Annotation metadata telling the container to inject a member or parameter.

    ``qualifier`` selects one concrete registration among several filed under
    the same type. ``optional`` leaves the member untouched when the type is
    not registered instead of failing.
    """

    qualifier: Any = None
    optional: bool = False


def _build_annotated(params: tuple[object, ...]) -> Any:
    """Return Annotated[...] with a pre-built params tuple (Py 3.10+ compatible)."""
    try:
        return Annotated.__class_getitem__(params)  # type: ignore[attr-defined]
    except AttributeError:
        return Annotated.__getitem__(params)  # type: ignore[attr-defined]


def _mark(item: Any, *, optional: bool) -> Any:
    qualifier = None
    if isinstance(item, tuple):
        item, qualifier = item
    marker = InjectedMarker(qualifier=qualifier, optional=optional)
    if get_origin(item) is Annotated:
        args = get_args(item)
        return _build_annotated((args[0], *args[1:], marker))
    return _build_annotated((item, marker))


def strip_optional(annotation: Any) -> Any:
    """Unwrap ``Optional[X]`` added by ``get_type_hints`` for ``None`` defaults on Python 3.10."""
    if get_origin(annotation) is Union:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def get_injected_marker(annotation: Any) -> InjectedMarker | None:
    """Return the injection marker attached to ``annotation``, if any."""
    annotation = strip_optional(annotation)
    if get_origin(annotation) is not Annotated:
        return None
    for metadata in reversed(get_args(annotation)[1:]):
        if isinstance(metadata, InjectedMarker):
            return metadata
    return None


if TYPE_CHECKING:
    Injected = Union[T, T]  # noqa: UP007,PYI016
    """Mark a class attribute or parameter for container-driven injection.

    ``Injected[T]`` resolves ``T``; ``Injected[T, Q]`` resolves ``T`` qualified
    by the concrete type ``Q``; ``Injected[list[T]]`` resolves every
    registration of ``T``.
    """

    Maybe = Union[T, None]  # noqa: UP007
    """Like ``Injected`` but skipped when the type is not registered."""

else:

    class Injected:
        """Mark a class attribute or parameter for container-driven injection.

        At runtime ``Injected[T]`` resolves to ``Annotated[T, InjectedMarker()]``
        and ``Injected[T, Q]`` to ``Annotated[T, InjectedMarker(qualifier=Q)]``.

        Examples:
            .. code-block:: python

                class Checkout:
                    payments: Injected[PaymentGateway, StripeGateway]
                    audit_sinks: Injected[list[AuditSink]]

        """

        def __class_getitem__(cls, item: Any) -> Any:
            return _mark(item, optional=False)

    class Maybe:
        """Mark an optional injected member.

        At runtime ``Maybe[T]`` resolves to
        ``Annotated[T, InjectedMarker(optional=True)]``. Unregistered types
        leave the member as it is.
        """

        def __class_getitem__(cls, item: Any) -> Any:
            return _mark(item, optional=True)


__all__ = ["Injected", "InjectedMarker", "Maybe", "get_injected_marker", "strip_optional"]
