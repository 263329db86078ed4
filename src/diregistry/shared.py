from __future__ import annotations

import logging
import threading

from diregistry.container import Container

logger = logging.getLogger(__name__)


class SharedContainer:
    """Hold one process-wide container, created on first access.

    The binding is process-global for this ``SharedContainer`` instance. It is
    not task-local or thread-local. Lazy creation is double-checked under a
    lock so concurrent first access still builds exactly one container.
    """

    def __init__(self) -> None:
        self._container: Container | None = None
        self._lock = threading.Lock()

    def get_current(self) -> Container:
        """Return the shared container, creating it on first use."""
        container = self._container
        if container is None:
            with self._lock:
                if self._container is None:
                    logger.debug("Creating shared container")
                    self._container = Container()
                container = self._container
        return container

    def set_current(self, container: Container) -> None:
        """Bind ``container`` as the shared container, e.g. during bootstrap or in tests."""
        with self._lock:
            self._container = container

    def reset(self) -> None:
        """Drop the shared container; the next access creates a new one."""
        with self._lock:
            self._container = None


shared_container = SharedContainer()


def get_shared_container() -> Container:
    """Return the global container shared by the whole process."""
    return shared_container.get_current()


__all__ = ["SharedContainer", "get_shared_container", "shared_container"]
