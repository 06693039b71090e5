"""
FastAPI integration module.

Provides helpers and utilities for integrating named-di with FastAPI.
"""

from .integration import (
    SpawnedContainerMiddleware,
    create_fastapi_dependency,
    create_spawned_dependency,
    inject_dependencies,
)

__all__ = [
    "create_fastapi_dependency",
    "create_spawned_dependency",
    "inject_dependencies",
    "SpawnedContainerMiddleware",
]
