import logging
from typing import Any, List, Mapping, Optional, Set, Tuple

from named_di.domain import (
    Definition,
    IContainer,
    IResolver,
    Kind,
    Lifecycle,
    ResolutionContext,
    UnknownDependencyError,
    chain,
)

logger = logging.getLogger(__name__)


class DependencyResolver(IResolver):
    """Resolves names by walking the registry chain and wiring declared dependencies.

    Where a value is built and cached depends on its lifecycle:
    - APPLICATION: in the container owning the definition, so children share its value.
    - CLASS and NONE: in the container the request was made against.
    """

    def resolve(
        self,
        container: IContainer,
        name: str,
        overrides: Mapping[str, Any],
        context: ResolutionContext,
    ) -> Any:
        """Resolve ``name`` and all of its dependencies.

        Args:
            container: The container the request is made against.
            name: The name to resolve.
            overrides: Request-scoped values replacing registrations at every depth.
            context: Names being resolved by the current request.

        Returns:
            The fully-built value.

        Raises:
            UnknownDependencyError: If ``name`` is neither overridden nor registered in the chain.
            CircularDependencyError: If ``name`` is already being resolved.
            ProducerError: If a producer raises while building the value.

        Example:
            >>> resolver = DependencyResolver()
            >>> resolver.resolve(container, "urlBuilder", {}, ResolutionContext())
        """
        if name in overrides:
            logger.debug("Resolved %r from overrides", name)
            return overrides[name]

        found = self.find(container, name)
        if found is None:
            raise UnknownDependencyError(name, context.path())
        owner, definition = found

        with context.frame(name):
            if definition.kind is Kind.CONSTANT:
                return definition.producer
            if definition.kind is Kind.ENUM:
                return dict(definition.producer)

            scope = self._scope_for(container, owner, definition)

            def build() -> Any:
                values = [self.resolve(scope, dependency, overrides, context) for dependency in definition.dependencies]
                return self._instantiate(definition, values)

            # Values built from overridden names must not leak into the cache
            if overrides and self._uses_overrides(scope, definition, overrides, set()):
                return scope.cache.create(definition, build)
            return scope.cache.get_or_create(definition, build)

    @staticmethod
    def find(container: IContainer, name: str) -> Optional[Tuple[IContainer, Definition]]:
        """Locate ``name`` in ``container`` or its nearest ancestor registering it."""
        for current in chain(container):
            definition = current.registry.lookup(name)
            if definition is not None:
                return current, definition
        return None

    @staticmethod
    def _scope_for(requester: IContainer, owner: IContainer, definition: Definition) -> IContainer:
        if definition.lifecycle is Lifecycle.APPLICATION:
            return owner
        return requester

    def _uses_overrides(
        self,
        scope: IContainer,
        definition: Definition,
        overrides: Mapping[str, Any],
        seen: Set[Tuple[int, int]],
    ) -> bool:
        for dependency in definition.dependencies:
            if dependency in overrides:
                return True
            found = self.find(scope, dependency)
            if found is None:
                continue
            owner, child = found
            child_scope = self._scope_for(scope, owner, child)
            # A shadowed name is a different definition, possibly in a different scope
            key = (id(child_scope), id(child))
            if key in seen:
                continue
            seen.add(key)
            if self._uses_overrides(child_scope, child, overrides, seen):
                return True
        return False

    @staticmethod
    def _instantiate(definition: Definition, values: List[Any]) -> Any:
        if definition.kind is Kind.SERVICE:
            cls = definition.producer
            return cls(*values)
        # Kind.FACTORY
        return definition.producer(*values)
