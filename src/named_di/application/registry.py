"""Application layer - Name registry with registration-time validation."""

import logging
from collections.abc import Sequence as SequenceABC
from typing import Any, Dict, List, Optional, Sequence, Tuple

from named_di.domain import (
    Definition,
    InvalidRegistrationError,
    IRegistry,
    Kind,
    Lifecycle,
    Registration,
)

logger = logging.getLogger(__name__)


class Registry(IRegistry):
    """Stores the definitions owned by one container.

    Names are unique; registering an existing name replaces its definition.

    Attributes:
        _definitions: Dictionary mapping names to their definitions.
    """

    def __init__(self) -> None:
        self._definitions: Dict[str, Definition] = {}

    def register(
        self,
        name: str,
        kind: Kind,
        dependencies: Optional[Sequence[str]] = None,
        producer: Any = None,
        lifecycle: Lifecycle = Lifecycle.APPLICATION,
    ) -> Registration:
        """Validate and store a definition.

        Args:
            name: The name to register under.
            kind: How the producer is turned into a value.
            dependencies: Names to resolve and pass positionally to the producer.
            producer: Class (service), callable (factory), value (constant) or labels (enum).
            lifecycle: Caching policy for the resolved value.

        Returns:
            The stored registration.

        Raises:
            InvalidRegistrationError: If any argument is malformed.

        Example:
            >>> registry = Registry()
            >>> registry.register("apiRoot", Kind.CONSTANT, producer="http://a")
        """
        if not isinstance(name, str) or not name:
            raise InvalidRegistrationError(name, "name must be a non-empty string")

        kind = self._validate_kind(name, kind)
        lifecycle = self._validate_lifecycle(name, lifecycle)
        names = self._validate_dependencies(name, dependencies)

        if kind is Kind.CONSTANT:
            value = producer
        elif producer is None:
            raise InvalidRegistrationError(name, f"a {kind} registration requires a producer")
        elif kind is Kind.ENUM:
            value = self._expand_labels(name, producer)
        else:
            if not callable(producer):
                raise InvalidRegistrationError(name, f"{kind} producer must be callable, got {producer!r}")
            value = producer

        registration = Registration(
            name=name,
            kind=kind,
            dependencies=names,
            producer=value,
            lifecycle=lifecycle,
        )

        if name in self._definitions:
            logger.debug("Overwriting registration for %r", name)
        self._definitions[name] = Definition.from_registration(registration)
        logger.debug("Registered %s %r (lifecycle=%s, dependencies=%s)", kind, name, lifecycle, list(names))
        return registration

    @staticmethod
    def _validate_kind(name: str, kind: Any) -> Kind:
        try:
            return Kind(kind)
        except (TypeError, ValueError):
            raise InvalidRegistrationError(name, f"unknown kind {kind!r}") from None

    @staticmethod
    def _validate_lifecycle(name: str, lifecycle: Any) -> Lifecycle:
        try:
            return Lifecycle(lifecycle)
        except (TypeError, ValueError):
            raise InvalidRegistrationError(name, f"unknown lifecycle {lifecycle!r}") from None

    @staticmethod
    def _validate_dependencies(name: str, dependencies: Optional[Sequence[str]]) -> Tuple[str, ...]:
        if dependencies is None:
            return ()
        # A bare string is a sequence too, but never a list of names
        if not isinstance(dependencies, SequenceABC) or isinstance(dependencies, (str, bytes)):
            raise InvalidRegistrationError(name, "dependencies must be a list of names")
        for dependency in dependencies:
            if not isinstance(dependency, str) or not dependency:
                raise InvalidRegistrationError(name, f"dependency names must be non-empty strings, got {dependency!r}")
        return tuple(dependencies)

    @staticmethod
    def _expand_labels(name: str, labels: Any) -> Dict[str, int]:
        if not isinstance(labels, (list, tuple)):
            raise InvalidRegistrationError(name, "enum labels must be a list of strings")
        mapping: Dict[str, int] = {}
        for index, label in enumerate(labels):
            if not isinstance(label, str):
                raise InvalidRegistrationError(name, f"enum labels must be strings, got {label!r}")
            if label in mapping:
                raise InvalidRegistrationError(name, f"duplicate enum label {label!r}")
            mapping[label] = index
        return mapping

    def lookup(self, name: str) -> Optional[Definition]:
        """Return the local definition for ``name``, or None if it is not registered here."""
        return self._definitions.get(name)

    def definitions(self) -> List[Definition]:
        """Return every definition owned by this registry, in registration order."""
        return list(self._definitions.values())

    def names(self) -> List[str]:
        """Return the names registered in this registry."""
        return list(self._definitions)

    def reset(self) -> None:
        """Remove every definition from this registry."""
        logger.debug("Resetting registry with %d definitions", len(self._definitions))
        self._definitions.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
