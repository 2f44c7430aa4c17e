"""Type-keyed resource container shared by the host's systems."""

from threading import RLock
from typing import Any, Dict, Optional, Type, TypeVar

from infrastructure.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")


class ResourceNotFoundError(LookupError):
    """Raised when a required resource has not been inserted."""

    def __init__(self, resource_type: type):
        self.resource_type = resource_type
        super().__init__(f"Resource not found: {resource_type.__name__}")


class Resources:
    """Holds at most one value per type.

    Systems pass the container around explicitly instead of reaching for
    module-level globals. All operations are lock-protected.

    Example:
        resources = Resources()
        resources.insert(LanguageAssets())
        assets = resources.require(LanguageAssets)
    """

    def __init__(self):
        self._values: Dict[type, Any] = {}
        self._lock = RLock()

    def insert(self, value: Any, resource_type: Optional[type] = None) -> None:
        """Insert a value, replacing any existing value of the same type.

        Args:
            value: Resource instance.
            resource_type: Key to store under (defaults to ``type(value)``).
        """
        key = resource_type or type(value)
        with self._lock:
            replaced = key in self._values
            self._values[key] = value
        logger.debug("resource_inserted", resource=key.__name__, replaced=replaced)

    def get(self, resource_type: Type[T]) -> Optional[T]:
        with self._lock:
            return self._values.get(resource_type)

    def require(self, resource_type: Type[T]) -> T:
        """Get a resource that must exist.

        Raises:
            ResourceNotFoundError: If no value of that type was inserted.
        """
        with self._lock:
            if resource_type not in self._values:
                raise ResourceNotFoundError(resource_type)
            return self._values[resource_type]

    def remove(self, resource_type: Type[T]) -> Optional[T]:
        with self._lock:
            value = self._values.pop(resource_type, None)
        if value is not None:
            logger.debug("resource_removed", resource=resource_type.__name__)
        return value

    def contains(self, resource_type: type) -> bool:
        with self._lock:
            return resource_type in self._values

    def __contains__(self, resource_type: object) -> bool:
        return self.contains(resource_type)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
