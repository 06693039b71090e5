"""
Application layer - Use cases and orchestration.

This layer contains the registry, cache, resolver and container that
orchestrate domain objects. It depends only on the Domain layer.
"""

from .container import Container
from .lifecycle_cache import LifecycleCache
from .registry import Registry
from .resolver import DependencyResolver

__all__ = [
    "Container",
    "DependencyResolver",
    "LifecycleCache",
    "Registry",
]
