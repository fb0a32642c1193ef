"""Thread-safe registry of named items.

``SchemaFactory`` keeps two registries: one mapping configuration
``type`` names to validator builders and one mapping transform names to
callables.

Example:
    ```python
    from schemaknobs.registry import Registry

    transforms = Registry[Callable[[Any], Any]]("transforms")
    transforms.register("strip", str.strip)
    transforms.get("strip")("  hi  ")
    # 'hi'
    ```
"""

import logging
import threading
from typing import Dict, Generic, Iterator, List, TypeVar

from .exceptions import NotFoundError, OperationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry(Generic[T]):
    """Registry for managing items by unique name.

    All operations take an internal re-entrant lock, so a registry can be
    populated and read from several threads.

    Attributes:
        name: Name of the registry (used in error messages and logs)

    Args:
        name: Name for this registry instance
    """

    def __init__(self, name: str):
        self._name = name
        self._items: Dict[str, T] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    def register(self, key: str, item: T, allow_overwrite: bool = False) -> None:
        """Register an item by key.

        Args:
            key: Unique identifier for the item
            item: Item to register
            allow_overwrite: Whether to replace an existing item

        Raises:
            OperationError: If key already exists and allow_overwrite is False
        """
        with self._lock:
            if not allow_overwrite and key in self._items:
                raise OperationError(
                    f"Item '{key}' already registered in {self._name}",
                    context={"key": key, "registry": self._name},
                )
            self._items[key] = item
        logger.debug(f"Registered '{key}' in {self._name}")

    def unregister(self, key: str) -> T:
        """Unregister and return an item by key.

        Raises:
            NotFoundError: If item not found
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={"key": key, "registry": self._name},
                )
            item = self._items.pop(key)
        logger.debug(f"Unregistered '{key}' from {self._name}")
        return item

    def get(self, key: str) -> T:
        """Get an item by key.

        Raises:
            NotFoundError: If item not found; the context lists available keys
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={
                        "key": key,
                        "registry": self._name,
                        "available_keys": list(self._items.keys()),
                    },
                )
            return self._items[key]

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._items

    def list_keys(self) -> List[str]:
        """List all registered keys in registration order."""
        with self._lock:
            return list(self._items.keys())

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_keys())
