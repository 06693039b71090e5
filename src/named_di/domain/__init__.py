"""
Domain layer - Core models of named dependency injection.

This layer contains the enums, exceptions, models and interfaces shared by
the rest of the package. It has no dependencies on other layers.
"""

from .enums import Kind, Lifecycle
from .exceptions import (
    CircularDependencyError,
    DIException,
    InvalidDescriptorError,
    InvalidRegistrationError,
    ProducerError,
    UnknownDependencyError,
)
from .interfaces import IContainer, ILifecycleCache, IRegistry, IResolver, chain
from .models import (
    AliasedDependencies,
    Definition,
    DependencyDescriptor,
    DependencyList,
    Registration,
    ResolutionContext,
    SingleDependency,
    parse_descriptor,
)

__all__ = [
    # Enums
    "Kind",
    "Lifecycle",
    # Exceptions
    "DIException",
    "InvalidRegistrationError",
    "UnknownDependencyError",
    "CircularDependencyError",
    "ProducerError",
    "InvalidDescriptorError",
    # Interfaces
    "IContainer",
    "IRegistry",
    "IResolver",
    "ILifecycleCache",
    "chain",
    # Models
    "Registration",
    "Definition",
    "ResolutionContext",
    "SingleDependency",
    "DependencyList",
    "AliasedDependencies",
    "DependencyDescriptor",
    "parse_descriptor",
]
