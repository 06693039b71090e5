from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from named_di.application import Container
from named_di.domain import IContainer, Kind, Lifecycle, Registration


class TestContainer(Container):
    """Container for testing with dependency override capabilities.

    Inherits every registration from a parent container without copying or
    mutating it, and lets tests replace selected names. Mocked names are
    applied as overrides on every resolution, so they win at every depth of
    the dependency graph and are never cached.

    Attributes:
        _mocks: Dictionary of mocked values keyed by name.

    Example:
        >>> container = Container()
        >>> container.service("emailService", RealEmailService)
        >>> container.service("userService", UserService, ["emailService"])
        >>>
        >>> def test_user_service():
        ...     test_container = TestContainer(container)
        ...     mock_email = MockEmailService()
        ...     test_container.mock_constant("emailService", mock_email)
        ...
        ...     service = test_container.get("userService")
        ...     assert service.email is mock_email
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(self, parent_container: Optional[IContainer] = None) -> None:
        """Initialize the test container.

        Args:
            parent_container: Optional container to inherit registrations from.
                If None, creates an empty isolated container.
        """
        super().__init__(parent=parent_container)
        self._mocks: Dict[str, Any] = {}

    def mock_constant(self, name: str, value: Any) -> None:
        """Replace ``name`` with a fixed value for all subsequent resolutions.

        Example:
            >>> test_container.mock_constant("database", mock_db)
            >>> service = test_container.get("userService")
            >>> assert service.db is mock_db
        """
        self._mocks[name] = value

    def override_registration(
        self,
        name: str,
        kind: Kind,
        producer: Any,
        dependencies: Optional[Sequence[str]] = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        """Register a replacement definition on this container only.

        The parent keeps its own definition. Inherited APPLICATION values that
        the parent builds keep using the parent's definitions; use
        ``mock_constant`` to replace a name at every depth.

        Example:
            >>> test_container.override_registration("cache", Kind.SERVICE, InMemoryCache)
        """
        return self._register(name, kind, dependencies, producer, lifecycle)

    def get(self, name: str, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        merged = dict(self._mocks)
        merged.update(overrides or {})
        return super().get(name, merged)

    def reset_overrides(self) -> None:
        """Remove all mocks and local registrations, restoring the parent's view.

        Useful for cleaning up between test cases.
        """
        self._mocks.clear()
        self.reset()

    def __enter__(self) -> "TestContainer":
        """Context manager entry - returns self."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - automatically clean up overrides."""
        self.reset_overrides()
        return False


def create_mock_container(*constants: Tuple[str, Any], parent: Optional[IContainer] = None) -> TestContainer:
    """Create a test container with pre-configured mocked names.

    Args:
        *constants: Tuples of (name, mock_value).
        parent: Optional container to inherit the remaining registrations from.

    Returns:
        TestContainer with mocked names.

    Example:
        >>> test_container = create_mock_container(
        ...     ("database", mock_db),
        ...     ("cache", mock_cache),
        ...     parent=container,
        ... )
    """
    container = TestContainer(parent)

    for name, value in constants:
        container.mock_constant(name, value)

    return container


class MockScope:
    """Context manager spawning a child container with automatic cleanup.

    Example:
        >>> with MockScope(container) as child:
        ...     child.service("requestContext", RequestContext, lifecycle=Lifecycle.CLASS)
        ...     ctx = child.get("requestContext")
        ...
        ... # Child registrations and cache are dropped here
    """

    def __init__(self, parent_container: IContainer, inherit: bool = True) -> None:
        """Initialize the mock scope.

        Args:
            parent_container: The container to spawn from.
            inherit: Whether the child inherits the parent's registrations.
        """
        self._parent_container = parent_container
        self._inherit = inherit
        self._child_container: Optional[IContainer] = None

    def __enter__(self) -> IContainer:
        """Spawn and return the child container."""
        self._child_container = self._parent_container.spawn(self._inherit)
        return self._child_container

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Drop the child's registrations and cached values."""
        if self._child_container:
            self._child_container.reset()
            self._child_container = None
        return False
