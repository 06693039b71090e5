from typing import Any, List, Optional, Sequence


class DIException(Exception):
    """Base exception for DI-related errors."""


class InvalidRegistrationError(DIException):
    """Raised when a registration is malformed.

    This occurs when:
    - The name is empty or not a string.
    - The kind or lifecycle is not recognized.
    - The dependency list is not a list of names.
    - The producer is missing or has the wrong shape for its kind.

    Attributes:
        name: The name that was being registered.
        reason: Why the registration was rejected.
    """

    def __init__(self, name: Any, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid registration for {name!r}: {reason}")


class UnknownDependencyError(DIException):
    """Raised when a name is found neither in the overrides nor in the registry chain.

    Attributes:
        name: The missing name.
        path: Names being resolved when the missing one was requested.
    """

    def __init__(self, name: str, path: Optional[Sequence[str]] = None) -> None:
        self.name = name
        self.path: List[str] = list(path or [])
        message = f"Unknown dependency: {name}"
        if self.path:
            message += f" (required by {' -> '.join(self.path)})"
        super().__init__(message)


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Attributes:
        path: Names from the original request down to the repeated name.
    """

    def __init__(self, path: Sequence[str]) -> None:
        self.path: List[str] = list(path)
        super().__init__(f"Circular dependency detected: {' -> '.join(self.path)}")


class ProducerError(DIException):
    """Raised when a service constructor or factory fails while building a value.

    The original exception is available as ``__cause__``.

    Attributes:
        name: The name whose producer failed.
        reason: Text of the original failure.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to produce {name!r}: {reason}")


class InvalidDescriptorError(DIException):
    """Raised when a host dependency descriptor is neither a name, a list of names nor an alias mapping."""

    def __init__(self, descriptor: Any, reason: str) -> None:
        self.descriptor = descriptor
        self.reason = reason
        super().__init__(f"Invalid dependency descriptor {descriptor!r}: {reason}")
