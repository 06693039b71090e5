import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from named_di.application.lifecycle_cache import LifecycleCache
from named_di.application.registry import Registry
from named_di.application.resolver import DependencyResolver
from named_di.domain import (
    IContainer,
    ILifecycleCache,
    IRegistry,
    IResolver,
    Kind,
    Lifecycle,
    Registration,
    ResolutionContext,
    parse_descriptor,
)

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Main dependency injection container.

    Orchestrates registration and resolution of named dependencies. Supports
    services, factories, constants and enums, the APPLICATION, NONE and CLASS
    lifecycles, request-scoped overrides and child containers.

    Attributes:
        _parent: Container lookups fall back to, or None for an isolated container.
        _registry: Definitions owned by this container.
        _cache: Values cached by this container.
        _resolver: Component responsible for wiring dependencies.
    """

    def __init__(self, parent: Optional[IContainer] = None) -> None:
        """Initialize the container with an empty registry and cache.

        Args:
            parent: Optional container whose registrations this one inherits.
                The parent is only read from, never mutated.
        """
        self._parent = parent
        self._registry: IRegistry = Registry()
        self._cache: ILifecycleCache = LifecycleCache()
        self._resolver: IResolver = DependencyResolver()

    @property
    def parent(self) -> Optional[IContainer]:
        return self._parent

    @property
    def registry(self) -> IRegistry:
        return self._registry

    @property
    def cache(self) -> ILifecycleCache:
        return self._cache

    def _register(
        self,
        name: str,
        kind: Kind,
        dependencies: Optional[Sequence[str]] = None,
        producer: Any = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        previous = self._registry.lookup(name)
        registration = self._registry.register(name, kind, dependencies, producer, lifecycle)
        if previous is not None:
            self._cache.clear(previous)
        return registration

    def service(
        self,
        name: str,
        producer: Callable[..., Any],
        dependencies: Optional[Sequence[str]] = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        """Register a class constructed with its resolved dependencies.

        Args:
            name: The name to register under.
            producer: The class to construct.
            dependencies: Names passed, in order, as constructor arguments.
            lifecycle: Caching policy for the constructed instance.

        Returns:
            The stored registration.

        Raises:
            InvalidRegistrationError: If any argument is malformed.

        Example:
            >>> container.service("userService", UserService, ["userRepository", "logger"])
        """
        return self._register(name, Kind.SERVICE, dependencies, producer, lifecycle)

    def factory(
        self,
        name: str,
        producer: Callable[..., Any],
        dependencies: Optional[Sequence[str]] = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        """Register a callable whose return value is the resolved value.

        Example:
            >>> container.constant("apiRoot", "http://a")
            >>> container.factory("urlBuilder", lambda root: lambda path: f"{root}/{path}", ["apiRoot"])
            >>> container.get("urlBuilder")("stuff")
            'http://a/stuff'
        """
        return self._register(name, Kind.FACTORY, dependencies, producer, lifecycle)

    def constant(self, name: str, value: Any) -> Registration:
        """Register a fixed value. Any value, including None, is accepted."""
        return self._register(name, Kind.CONSTANT, producer=value)

    def enum(self, name: str, labels: Sequence[str]) -> Registration:
        """Register labels exposed as a mapping of label to zero-based index.

        Example:
            >>> container.enum("Status", ["foo", "bah"])
            >>> container.get("Status")
            {'foo': 0, 'bah': 1}
        """
        return self._register(name, Kind.ENUM, producer=labels)

    def get(self, name: str, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        """Resolve and return the value registered under ``name``.

        Args:
            name: The name to resolve.
            overrides: Values used instead of registrations for this call only,
                at every depth of the resolution.

        Returns:
            The fully-wired value.

        Raises:
            UnknownDependencyError: If a required name cannot be found.
            CircularDependencyError: If a circular dependency is detected.
            ProducerError: If a constructor or factory raises.
        """
        return self._resolver.resolve(self, name, dict(overrides or {}), ResolutionContext())

    def has(self, name: str) -> bool:
        """Whether ``name`` is registered on this container or an ancestor."""
        return DependencyResolver.find(self, name) is not None

    def inject(self, descriptor: Any, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Resolve a host dependency descriptor into an alias -> value mapping.

        Args:
            descriptor: A name, a list of names or a mapping of alias -> name.
            overrides: Request-scoped values, as for ``get``.

        Returns:
            Resolved values keyed by alias (or by name when no alias is given).

        Raises:
            InvalidDescriptorError: If the descriptor has an unsupported shape.

        Example:
            >>> container.inject({"api": "apiClient", "log": "logger"})
            {'api': <ApiClient>, 'log': <Logger>}
        """
        return {alias: self.get(name, overrides) for alias, name in parse_descriptor(descriptor).bindings()}

    def spawn(self, inherit: bool = False) -> "Container":
        """Create a child container.

        Args:
            inherit: When True the child resolves names missing from its own
                registry through this container. Otherwise it is fully isolated.

        Returns:
            A new container with an empty registry and cache.

        Example:
            >>> child = container.spawn(inherit=True)
            >>> child.constant("requestId", "abc")
            >>> child.get("apiRoot")  # inherited
        """
        return Container(parent=self if inherit else None)

    def reset(self) -> None:
        """Remove all registrations and cached values owned by this container.

        Ancestors are left untouched.
        """
        self._registry.reset()
        self._cache.clear_all()

    def clear_cache(self, forever: bool = False) -> None:
        """Drop every value cached by this container.

        Args:
            forever: Also switch this container's own definitions to the NONE
                lifecycle so they are never cached again.
        """
        self._cache.clear_all()
        if forever:
            for definition in self._registry.definitions():
                definition.lifecycle = Lifecycle.NONE
        logger.debug("Cleared cache (forever=%s)", forever)
