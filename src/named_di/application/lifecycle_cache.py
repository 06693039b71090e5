import logging
from typing import Any, Callable, Dict, Tuple

from named_di.domain import DIException, Definition, ILifecycleCache, Lifecycle, ProducerError

logger = logging.getLogger(__name__)

_CACHING_LIFECYCLES = (Lifecycle.APPLICATION, Lifecycle.CLASS)


class LifecycleCache(ILifecycleCache):
    """Caches resolved values for one container according to their lifecycle.

    Entries are keyed by name and bound to the definition they were built
    for, so a value cached for a replaced registration is never served.

    Attributes:
        _entries: Dictionary mapping names to (definition, value) pairs.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[Definition, Any]] = {}

    def read(self, definition: Definition) -> Tuple[Any, bool]:
        """Return the cached value and whether it is resolved.

        Args:
            definition: The definition to look up.

        Returns:
            ``(value, True)`` on a hit, ``(None, False)`` otherwise.
        """
        entry = self._entries.get(definition.name)
        if entry is None or entry[0] is not definition:
            return None, False
        return entry[1], True

    def write(self, definition: Definition, value: Any) -> None:
        """Cache ``value``; a no-op unless the lifecycle is APPLICATION or CLASS."""
        if definition.lifecycle in _CACHING_LIFECYCLES:
            self._entries[definition.name] = (definition, value)

    def clear(self, definition: Definition) -> None:
        entry = self._entries.get(definition.name)
        if entry is not None and entry[0] is definition:
            del self._entries[definition.name]

    def clear_all(self) -> None:
        """Drop every cached value held by this cache."""
        self._entries.clear()

    def create(self, definition: Definition, factory: Callable[[], Any]) -> Any:
        """Build a value without touching the cache.

        Args:
            definition: The definition being resolved.
            factory: A callable building the value.

        Raises:
            ProducerError: If the factory raises anything other than a DI error.
        """
        try:
            value = factory()
        except DIException:
            raise
        except Exception as e:
            raise ProducerError(definition.name, str(e)) from e
        definition.resolution_count += 1
        return value

    def get_or_create(self, definition: Definition, factory: Callable[[], Any]) -> Any:
        """Get the cached value or build a new one according to the lifecycle.

        Returns:
            Value according to lifecycle rules:
            - APPLICATION / CLASS: cached value, or a new value that is cached
            - NONE: always a new value

        Example:
            >>> value = cache.get_or_create(definition, lambda: Database())
        """
        value, resolved = self.read(definition)
        if resolved:
            logger.debug("Cache hit for %r", definition.name)
            return value
        value = self.create(definition, factory)
        self.write(definition, value)
        return value

    def __len__(self) -> int:
        return len(self._entries)
