from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Literal, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from named_di.domain.enums import Kind, Lifecycle
from named_di.domain.exceptions import CircularDependencyError, InvalidDescriptorError


class Registration(BaseModel):
    """Value object representing a named registration.

    Returned to the caller as the registration handle.

    Attributes:
        name: The name the producer is registered under.
        kind: How the producer is turned into a value.
        dependencies: Names resolved and passed positionally to the producer.
        producer: Class, callable, constant value or label -> index mapping.
        lifecycle: Caching policy declared at registration time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The name the producer is registered under.")
    kind: Kind = Field(..., description="How the producer is turned into a value.")
    dependencies: Tuple[str, ...] = Field(
        default=(),
        description="Names resolved, in order, before the producer is invoked.",
    )
    producer: Any = Field(default=None, description="The class, callable or value backing the registration.")
    lifecycle: Lifecycle = Field(
        default=Lifecycle.APPLICATION,
        description="The caching policy declared at registration time.",
    )


class Definition(BaseModel):
    """Registry entry wrapping a registration with its mutable resolution state.

    Attributes:
        registration: The original registration.
        lifecycle: Effective caching policy; ``clear_cache(forever=True)`` rewrites it to NONE.
        resolution_count: Number of times a value has been built for this definition.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    registration: Registration = Field(..., description="The registration backing this definition.")
    lifecycle: Lifecycle = Field(..., description="The effective caching policy.")
    resolution_count: int = Field(default=0, description="Number of values built for this definition.")

    @classmethod
    def from_registration(cls, registration: Registration) -> "Definition":
        return cls(registration=registration, lifecycle=registration.lifecycle)

    @property
    def name(self) -> str:
        return self.registration.name

    @property
    def kind(self) -> Kind:
        return self.registration.kind

    @property
    def dependencies(self) -> Tuple[str, ...]:
        return self.registration.dependencies

    @property
    def producer(self) -> Any:
        return self.registration.producer


class ResolutionContext(BaseModel):
    """Tracks the names being resolved by one top-level request.

    Used for circular dependency detection. A fresh context is created for
    every ``get`` call and entries are released when their frame exits.

    Attributes:
        stack: Names currently being resolved, outermost first.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    stack: List[str] = Field(
        default_factory=list,
        description="Names currently being resolved, outermost first.",
    )

    def push(self, name: str) -> None:
        """Add a name to the resolution stack.

        Args:
            name: The name being resolved.

        Raises:
            CircularDependencyError: If the name is already in the stack.
        """
        if name in self.stack:
            raise CircularDependencyError(self.stack + [name])
        self.stack.append(name)

    def pop(self) -> None:
        """Remove the last (most recent) name from the stack."""
        if self.stack:
            self.stack.pop()

    @contextmanager
    def frame(self, name: str) -> Iterator[None]:
        """Hold ``name`` on the stack for the duration of the block."""
        self.push(name)
        try:
            yield
        finally:
            self.pop()

    def path(self) -> List[str]:
        """Return a copy of the names being resolved, outermost first."""
        return list(self.stack)


class SingleDependency(BaseModel):
    """Descriptor requesting one name, bound under the same name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    name: str

    def bindings(self) -> List[Tuple[str, str]]:
        return [(self.name, self.name)]


class DependencyList(BaseModel):
    """Descriptor requesting several names, each bound under its own name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    names: Tuple[str, ...]

    def bindings(self) -> List[Tuple[str, str]]:
        return [(name, name) for name in self.names]


class AliasedDependencies(BaseModel):
    """Descriptor mapping aliases to the names they should be resolved from."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["aliased"] = "aliased"
    aliases: Dict[str, str]

    def bindings(self) -> List[Tuple[str, str]]:
        return list(self.aliases.items())


DependencyDescriptor = Union[SingleDependency, DependencyList, AliasedDependencies]


def _check_name(raw: Any, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidDescriptorError(raw, f"expected a non-empty name, got {value!r}")
    return value


def parse_descriptor(raw: Any) -> DependencyDescriptor:
    """Turn a raw host descriptor into its tagged form.

    Args:
        raw: A name, a list/tuple of names, a mapping of alias -> name, or an
            already parsed descriptor.

    Returns:
        The matching descriptor variant.

    Raises:
        InvalidDescriptorError: If ``raw`` has none of the supported shapes.

    Example:
        >>> parse_descriptor({"api": "apiClient"}).bindings()
        [('api', 'apiClient')]
    """
    if isinstance(raw, (SingleDependency, DependencyList, AliasedDependencies)):
        return raw
    if isinstance(raw, str):
        return SingleDependency(name=_check_name(raw, raw))
    if isinstance(raw, (list, tuple)):
        return DependencyList(names=tuple(_check_name(raw, name) for name in raw))
    if isinstance(raw, Mapping):
        return AliasedDependencies(
            aliases={_check_name(raw, alias): _check_name(raw, name) for alias, name in raw.items()}
        )
    raise InvalidDescriptorError(raw, "expected a name, a list of names or a mapping of alias to name")
