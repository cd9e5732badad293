"""
Explicit lazily-initialized values.

A LazyValue holds a factory, a "computed yet" flag and the stored value. The
factory runs on the first ``get()`` and the result is reused until ``reset()``.
Failures are not cached: if the factory raises, the next ``get()`` tries again.
"""

import logging
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class LazyValue(Generic[T]):
    """Compute-once holder for an expensive value."""

    def __init__(self, factory: Callable[[], T], name: str = "value"):
        self._factory = factory
        self._name = name
        self._computed = False
        self._value: Optional[T] = None

    @property
    def computed(self) -> bool:
        return self._computed

    def get(self) -> T:
        if not self._computed:
            logger.debug(f"Computing lazy value '{self._name}'")
            self._value = self._factory()
            self._computed = True
        return self._value

    def set(self, value: T) -> None:
        """Store ``value`` as if the factory had produced it."""
        self._value = value
        self._computed = True

    def reset(self) -> None:
        self._computed = False
        self._value = None
