from typing import Generic, Hashable, Set, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class GraphNode(Generic[K, V]):
    """Internal record holding a node's key, its payload and its neighbor keys."""

    def __init__(self, key: K, value: V):
        self._key = key
        self._value = value
        self._neighbors: Set[K] = set()

    @property
    def key(self) -> K:
        return self._key

    @property
    def value(self) -> V:
        return self._value

    @property
    def neighbors(self) -> Set[K]:
        return self._neighbors

    def add_neighbor(self, key: K) -> None:
        self._neighbors.add(key)

    def remove_neighbor(self, key: K) -> bool:
        if key not in self._neighbors:
            return False
        self._neighbors.discard(key)
        return True

    def has_neighbor(self, key: K) -> bool:
        return key in self._neighbors

    def __repr__(self) -> str:
        return f"GraphNode(key={self._key!r}, neighbors={len(self._neighbors)})"
