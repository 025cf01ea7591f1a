"""Key-token to result lookup tables used by the input router."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class Keymap(Generic[T]):
    """Maps normalized key tokens to factories producing a result.

    Binding a token twice is an error: every key has exactly one meaning
    within a map.
    """

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize or str
        self._factories: dict[str, Callable[[str], T]] = {}

    def bind(self, keys: Iterable[str], factory: Callable[[str], T]) -> Keymap[T]:
        for key in keys:
            token = self._normalize(key)
            if token in self._factories:
                raise ValueError(f"key {token!r} is already bound")
            self._factories[token] = factory
        return self

    def __contains__(self, key: str) -> bool:
        return self._normalize(key) in self._factories

    def bound_keys(self) -> tuple[str, ...]:
        return tuple(self._factories)

    def lookup(self, key: str) -> T | None:
        """Build the result for ``key``, or ``None`` when it is unbound."""
        factory = self._factories.get(self._normalize(key))
        return None if factory is None else factory(key)
