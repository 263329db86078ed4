from diregistry.integrations.pytest_plugin.plugin import (
    CONTAINER_FIXTURE,
    diregistry_container,
    pytest_pycollect_makeitem,
    pytest_pyfunc_call,
)

__all__ = [
    "CONTAINER_FIXTURE",
    "diregistry_container",
    "pytest_pycollect_makeitem",
    "pytest_pyfunc_call",
]
