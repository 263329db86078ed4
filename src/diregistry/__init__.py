from diregistry._internal.registration import InstantiationContext, Registration
from diregistry.container import Container, RegistrationOption
from diregistry.exceptions import (
    DIRegistryError,
    DIRegistryRegistrationError,
    DIRegistryResolveError,
)
from diregistry.markers import Injected, Maybe
from diregistry.scopes import (
    ExistingInstanceScope,
    Lifetime,
    LockMode,
    NewInstanceScope,
    Scope,
    SingleInstanceScope,
)
from diregistry.shared import SharedContainer, get_shared_container, shared_container

__all__ = [
    "Container",
    "DIRegistryError",
    "DIRegistryRegistrationError",
    "DIRegistryResolveError",
    "ExistingInstanceScope",
    "Injected",
    "InstantiationContext",
    "Lifetime",
    "LockMode",
    "Maybe",
    "NewInstanceScope",
    "Registration",
    "RegistrationOption",
    "Scope",
    "SharedContainer",
    "SingleInstanceScope",
    "get_shared_container",
    "shared_container",
]
