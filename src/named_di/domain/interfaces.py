from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from named_di.domain.enums import Kind, Lifecycle
from named_di.domain.models import Definition, Registration, ResolutionContext


class IRegistry(ABC):
    """Abstract interface for the name -> definition mapping of one container."""

    @abstractmethod
    def register(
        self,
        name: str,
        kind: Kind,
        dependencies: Optional[Sequence[str]] = None,
        producer: Any = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        """Validate and store a definition, overwriting any previous one with the same name.

        Raises:
            InvalidRegistrationError: If any argument is malformed.
        """

    @abstractmethod
    def lookup(self, name: str) -> Optional[Definition]:
        """Return the local definition for ``name``, or None."""

    @abstractmethod
    def definitions(self) -> List[Definition]:
        """Return every local definition."""

    @abstractmethod
    def reset(self) -> None:
        """Remove every local definition."""


class ILifecycleCache(ABC):
    """Abstract interface for caching resolved values according to their lifecycle."""

    @abstractmethod
    def read(self, definition: Definition) -> Tuple[Any, bool]:
        """Return the cached value and whether it is resolved."""

    @abstractmethod
    def write(self, definition: Definition, value: Any) -> None:
        """Cache ``value`` if the definition's lifecycle allows it."""

    @abstractmethod
    def clear(self, definition: Definition) -> None:
        """Drop the cached value for one definition."""

    @abstractmethod
    def clear_all(self) -> None:
        """Drop every cached value held by this cache."""

    @abstractmethod
    def create(self, definition: Definition, factory: Callable[[], Any]) -> Any:
        """Build a value through ``factory`` without reading or writing the cache."""

    @abstractmethod
    def get_or_create(self, definition: Definition, factory: Callable[[], Any]) -> Any:
        """Return the cached value or build, cache and return a new one.

        Args:
            definition: The definition being resolved.
            factory: A callable building the value if needed.
        """


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @property
    @abstractmethod
    def parent(self) -> Optional["IContainer"]:
        """The container lookups fall back to, if any."""

    @property
    @abstractmethod
    def registry(self) -> IRegistry:
        """The registry owned by this container."""

    @property
    @abstractmethod
    def cache(self) -> ILifecycleCache:
        """The lifecycle cache owned by this container."""

    @abstractmethod
    def service(
        self,
        name: str,
        producer: Callable[..., Any],
        dependencies: Optional[Sequence[str]] = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        """Register a class constructed with its resolved dependencies."""

    @abstractmethod
    def factory(
        self,
        name: str,
        producer: Callable[..., Any],
        dependencies: Optional[Sequence[str]] = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        """Register a callable invoked with its resolved dependencies."""

    @abstractmethod
    def constant(self, name: str, value: Any) -> Registration:
        """Register a fixed value."""

    @abstractmethod
    def enum(self, name: str, labels: Sequence[str]) -> Registration:
        """Register a label -> index mapping."""

    @abstractmethod
    def get(self, name: str, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        """Resolve and return the value registered under ``name``.

        Args:
            name: The name to resolve.
            overrides: Request-scoped values replacing registrations at every depth.
        """

    @abstractmethod
    def inject(self, descriptor: Any, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Resolve a host dependency descriptor into an alias -> value mapping."""

    @abstractmethod
    def spawn(self, inherit: bool = False) -> "IContainer":
        """Create a child container, optionally inheriting this container's registrations."""

    @abstractmethod
    def reset(self) -> None:
        """Remove all registrations owned by this container."""

    @abstractmethod
    def clear_cache(self, forever: bool = False) -> None:
        """Drop cached values held by this container."""


class IResolver(ABC):
    """Abstract interface for dependency resolution operations."""

    @abstractmethod
    def resolve(
        self,
        container: IContainer,
        name: str,
        overrides: Mapping[str, Any],
        context: ResolutionContext,
    ) -> Any:
        """Build the value registered under ``name`` with all dependencies wired.

        Args:
            container: The container the request is made against.
            name: The name to resolve.
            overrides: Request-scoped values replacing registrations.
            context: Names being resolved by the current request.

        Raises:
            UnknownDependencyError: If a required name cannot be found.
            CircularDependencyError: If a name reappears in the resolution path.
        """


def chain(container: IContainer) -> Iterable[IContainer]:
    """Yield ``container`` followed by its ancestors, nearest first."""
    current: Optional[IContainer] = container
    while current is not None:
        yield current
        current = current.parent
