from enum import Enum


class Kind(str, Enum):
    """Defines how a registered producer is turned into a value.

    Attributes:
        SERVICE: Producer is a class, constructed with the resolved dependencies.
        FACTORY: Producer is a plain callable, called with the resolved dependencies.
        CONSTANT: Producer is the value itself.
        ENUM: Producer is a list of labels, exposed as a label -> index mapping.
    """

    SERVICE = "service"
    FACTORY = "factory"
    CONSTANT = "constant"
    ENUM = "enum"

    def __str__(self) -> str:
        return self.value


class Lifecycle(str, Enum):
    """Defines whether and where a resolved value is cached.

    Attributes:
        APPLICATION: Cached on first resolution by the container owning the registration.
        NONE: Never cached, rebuilt on every resolution.
        CLASS: Cached per container; a spawned child always starts with its own empty cache.
    """

    APPLICATION = "application"
    NONE = "none"
    CLASS = "class"

    def __str__(self) -> str:
        return self.value
