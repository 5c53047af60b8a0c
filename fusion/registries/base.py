from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class Registry(Generic[K, V]):
    """Minimal registry mapping keys to values.

    Typical usage:
        REG = Registry[str, MethodSpec](_name="methods")

        REG.add("foo", spec)
        REG.freeze()

        spec = REG.get("foo")

    Once frozen, further registrations raise, so module-level tables built at
    import time stay constant for the life of the process.
    """

    _items: Dict[K, V] = field(default_factory=dict)
    _name: str = "registry"
    _frozen: bool = False

    def add(self, key: K, value: V) -> V:
        if self._frozen:
            raise RuntimeError(f"{self._name}: registry is frozen; cannot add {key!r}")
        self._items[key] = value
        return value

    def freeze(self) -> None:
        self._frozen = True

    def get(self, key: K) -> V:
        if key not in self._items:
            raise KeyError(f"{self._name}: unknown key {key!r}")
        return self._items[key]

    def keys(self) -> Iterable[K]:
        return self._items.keys()

    def values(self) -> Iterable[V]:
        return self._items.values()

    def __contains__(self, key: K) -> bool:  # pragma: no cover
        return key in self._items
