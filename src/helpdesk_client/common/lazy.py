"""Per-instance memoization of related-object lookups."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    """
    A value loaded on first access and kept until reloaded or reset.

    ``None`` results are not cached, so a lookup that found nothing is
    retried on the next access.
    """

    __slots__ = ("_loader", "_value", "_loaded")

    def __init__(self, loader: Callable[[], T | None]):
        self._loader = loader
        self._value: T | None = None
        self._loaded = False

    def get(self, reload: bool = False) -> T | None:
        if self._loaded and not reload:
            return self._value
        value = self._loader()
        self._value = value
        self._loaded = value is not None
        return value

    def set(self, value: T | None) -> None:
        """Prime the cache with an already known value."""
        self._value = value
        self._loaded = value is not None

    def reset(self) -> None:
        self._value = None
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __repr__(self) -> str:
        state = repr(self._value) if self._loaded else "not loaded"
        return f"Lazy({state})"
