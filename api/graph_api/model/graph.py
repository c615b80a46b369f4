import logging
from collections import deque
from typing import Callable, Dict, Generic, Hashable, List, Optional, Set, TypeVar

from .graph_node import GraphNode

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger(__name__)


class Graph(Generic[K, V]):
    """
    In-memory undirected graph keyed by K, carrying an opaque V per node.

    Operations that reference a missing key never raise. Mutators return
    False when nothing was applied, queries return None or an empty list.
    """

    def __init__(self):
        self._nodes: Dict[K, GraphNode[K, V]] = {}

    # -----------------
    # NODE OPERATIONS
    # -----------------

    @property
    def size(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def keys(self) -> List[K]:
        return list(self._nodes)

    def add_node(self, key: K, value: V) -> bool:
        """Add a node. An existing key keeps its original value."""
        if key in self._nodes:
            logger.debug("Node %r already exists, keeping original value.", key)
            return False

        self._nodes[key] = GraphNode(key, value)
        return True

    def find_node(self, key: K) -> Optional[V]:
        node = self._nodes.get(key)
        return node.value if node is not None else None

    def remove_node(self, key: K) -> bool:
        """Remove a node and prune it from every remaining neighbor set."""
        if key not in self._nodes:
            logger.debug("Cannot remove node %r: not found.", key)
            return False

        del self._nodes[key]
        for node in self._nodes.values():
            node.remove_neighbor(key)
        return True

    def neighbors(self, key: K) -> Set[K]:
        node = self._nodes.get(key)
        return set(node.neighbors) if node is not None else set()

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edge(self, from_key: K, to_key: K) -> bool:
        """
        Connect two existing nodes in both directions.

        Missing endpoints and self edges are ignored. Adding an existing
        edge again changes nothing but still reports success.
        """
        from_node = self._nodes.get(from_key)
        to_node = self._nodes.get(to_key)

        if from_node is None or to_node is None:
            logger.debug("Cannot add edge %r-%r: missing endpoint.", from_key, to_key)
            return False

        if from_key == to_key:
            logger.debug("Ignoring self edge on %r.", from_key)
            return False

        from_node.add_neighbor(to_key)
        to_node.add_neighbor(from_key)
        return True

    def remove_edge(self, from_key: K, to_key: K) -> bool:
        from_node = self._nodes.get(from_key)
        to_node = self._nodes.get(to_key)

        if from_node is None or to_node is None:
            logger.debug("Cannot remove edge %r-%r: missing endpoint.", from_key, to_key)
            return False

        from_node.remove_neighbor(to_key)
        to_node.remove_neighbor(from_key)
        return True

    def contains_edge(self, from_key: K, to_key: K) -> bool:
        from_node = self._nodes.get(from_key)
        to_node = self._nodes.get(to_key)

        if from_node is None or to_node is None:
            return False

        return from_node.has_neighbor(to_key) and to_node.has_neighbor(from_key)

    # -----------------
    # QUERIES
    # -----------------

    def get_path(self, from_key: K, to_key: K) -> List[V]:
        """
        Return the values along one shortest path, both endpoints included.

        Breadth-first search; the first time the target is dequeued the
        predecessor chain gives a minimum hop path. Returns [] when an
        endpoint is missing or the two nodes are not connected.
        """
        start = self._nodes.get(from_key)
        target = self._nodes.get(to_key)
        if start is None or target is None:
            return []

        queue = deque([start])
        visited = {from_key}
        previous: Dict[K, K] = {}

        while queue:
            node = queue.popleft()
            if node is target:
                return self._build_path(from_key, to_key, previous)

            for neighbor_key in node.neighbors:
                if neighbor_key in visited:
                    continue
                neighbor = self._nodes.get(neighbor_key)
                if neighbor is None:
                    continue
                visited.add(neighbor_key)
                previous[neighbor_key] = node.key
                queue.append(neighbor)

        return []

    def _build_path(self, from_key: K, to_key: K, previous: Dict[K, K]) -> List[V]:
        path = []
        current = to_key
        while current != from_key:
            path.append(self._nodes[current].value)
            current = previous[current]
        path.append(self._nodes[from_key].value)
        path.reverse()
        return path

    def edge_suggestions(self, key: K) -> List[V]:
        """
        Suggest nodes connected to two or more of this node's neighbors
        but not to the node itself. Result order is unspecified.
        """
        node = self._nodes.get(key)
        if node is None:
            return []

        direct = node.neighbors
        counts: Dict[K, int] = {}

        for neighbor_key in direct:
            neighbor = self._nodes.get(neighbor_key)
            if neighbor is None:
                continue

            for candidate in neighbor.neighbors:
                if candidate == key or candidate in direct:
                    continue
                counts[candidate] = counts.get(candidate, 0) + 1

        return [
            self._nodes[candidate].value
            for candidate, count in counts.items()
            if count >= 2 and candidate in self._nodes
        ]

    def for_each(self, visitor: Callable[[V, List[V]], None]) -> None:
        """Call visitor(value, neighbor_values) once per node."""
        for node in list(self._nodes.values()):
            neighbor_values = [
                self._nodes[neighbor_key].value
                for neighbor_key in node.neighbors
                if neighbor_key in self._nodes
            ]
            visitor(node.value, neighbor_values)

    def __repr__(self) -> str:
        return f"Graph(size={len(self._nodes)})"
