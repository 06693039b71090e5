"""
Infrastructure layer - Host framework adapters and test helpers.

This layer consumes the container's descriptor contract from FastAPI and
provides containers tailored for tests. It depends on both Application and
Domain layers.
"""

from . import fastapi_integration, testing

__all__ = [
    "fastapi_integration",
    "testing",
]
