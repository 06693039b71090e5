"""
named-di: Name-based Dependency Injection container with lifecycles and child containers.

Public API exports for the named-di package.
"""

# Application exports
from named_di.application.container import Container

# Domain exports
from named_di.domain.enums import Kind, Lifecycle
from named_di.domain.exceptions import (
    CircularDependencyError,
    DIException,
    InvalidDescriptorError,
    InvalidRegistrationError,
    ProducerError,
    UnknownDependencyError,
)
from named_di.domain.models import Registration

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "Registration",
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
]
