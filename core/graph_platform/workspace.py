import json
import logging
import random
from typing import Any, List, Optional

from api.graph_api.generator import generate_random_graph
from api.graph_api.model import Graph, UserData
from api.graph_api.snapshot import build_snapshot
from .query_state import EdgeResult, PathResult, QueryContext, SuggestionsResult

logger = logging.getLogger(__name__)


class Workspace:
    """
    Central application state container.

    Responsibilities:
    - Manage current user graph state
    - Run graph queries and remember the last result for highlighting
    - Act as stable integration layer for CLI and Web
    """

    def __init__(self, graph: Optional[Graph[int, UserData]] = None):
        self._current_graph: Optional[Graph[int, UserData]] = None
        self.context = QueryContext()
        if graph is not None:
            self.set_graph(graph)

    # ==========================================================
    # GRAPH STATE MANAGEMENT
    # ==========================================================

    def set_graph(self, graph: Graph[int, UserData]) -> None:
        self._current_graph = graph
        self.context.reset()
        logger.info("Workspace graph replaced (%d users).", graph.size)

    def get_graph(self) -> Optional[Graph[int, UserData]]:
        return self._current_graph

    def has_graph(self) -> bool:
        return self._current_graph is not None

    def clear(self) -> None:
        self._current_graph = None
        self.context.reset()

    def reset(self) -> None:
        """Forget the last query result."""
        self.context.reset()

    def generate_random_graph(
        self, node_count: int, edge_count: int, rng: Optional[random.Random] = None
    ) -> Graph[int, UserData]:
        graph = generate_random_graph(node_count, edge_count, rng=rng)
        self.set_graph(graph)
        return graph

    # ==========================================================
    # QUERIES
    # ==========================================================

    def find_node(self, key: int) -> Optional[UserData]:
        self.reset()
        if self._current_graph is None:
            return None

        user = self._current_graph.find_node(key)
        if user is not None:
            self.context.found_node = str(key)
        return user

    def find_edge(self, source: int, target: int) -> bool:
        self.reset()
        if self._current_graph is None:
            return False

        if not self._current_graph.contains_edge(source, target):
            return False
        self.context.found_edge = EdgeResult(str(source), str(target))
        return True

    def load_path(self, source: int, target: int) -> List[UserData]:
        self.reset()
        if self._current_graph is None:
            return []

        path = self._current_graph.get_path(source, target)
        if path:
            self.context.found_path = PathResult(
                source=str(source),
                target=str(target),
                path={str(user.id) for user in path},
            )
        return path

    def load_suggestions(self, key: int) -> List[UserData]:
        self.reset()
        if self._current_graph is None:
            return []

        suggestions = self._current_graph.edge_suggestions(key)
        if suggestions:
            self.context.suggestions = SuggestionsResult(
                key=str(key),
                suggestions={str(user.id) for user in suggestions},
            )
        return suggestions

    def find_nodes_by_name(self, name_substr: str) -> List[UserData]:
        """Return users whose name contains the given substring."""
        if self._current_graph is None:
            return []
        needle = name_substr.lower()
        return [
            user
            for user in (self._current_graph.find_node(k) for k in self._current_graph.keys())
            if user is not None and needle in user.title.lower()
        ]

    # ==========================================================
    # MUTATIONS
    # ==========================================================

    def delete_node(self, key: int) -> bool:
        self.reset()
        if self._current_graph is None:
            return False
        return self._current_graph.remove_node(key)

    def delete_edge(self, source: int, target: int) -> bool:
        self.reset()
        if self._current_graph is None:
            return False
        if not self._current_graph.contains_edge(source, target):
            return False
        return self._current_graph.remove_edge(source, target)

    # ==========================================================
    # SNAPSHOTS
    # ==========================================================

    def graph_data(self) -> dict[str, list[dict[str, Any]]]:
        """Nodes and links with string ids, decorated with the last query result."""
        if self._current_graph is None:
            return {"nodes": [], "links": []}

        snapshot = build_snapshot(self._current_graph)
        nodes = [
            self.context.decorate_node({"id": str(node["id"]), "name": node["name"]})
            for node in snapshot.nodes
        ]
        links = [
            self.context.decorate_link({"source": str(source), "target": str(target)})
            for source, target in snapshot.relations
        ]
        return {"nodes": nodes, "links": links}

    def export(self) -> dict:
        if self._current_graph is None:
            return {"nodes": [], "relations": []}
        return build_snapshot(self._current_graph).to_dict()

    def export_json(self) -> str:
        return json.dumps(self.export())
