# base.py
from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any

from api.graph_api.model import Graph, UserData
from api.graph_api.services.datasource_plugin import DataSourcePlugin

logger = logging.getLogger(__name__)


class BaseDatasourcePlugin(DataSourcePlugin):
    # Base class for defining the flow of creating a Graph object
    # The flow is always to first parse the source (this is different based on plugin)
    # Secondly, we add the users and then the relations (which is the same for all)

    def load_graph(self, source: Any, **options: Any) -> Graph[int, UserData]:
        raw_data = self._parse_source(source, **options)

        graph: Graph[int, UserData] = Graph()
        self._build_nodes(raw_data, graph)
        self._build_edges(raw_data, graph)
        logger.info("Loaded graph from %s with %d users.", self.plugin_id, graph.size)
        return graph

    @abstractmethod
    def _parse_source(self, source: Any, **options: Any) -> dict[str, Any]:
        # Must return a dict with 'users' [{id, name}] and 'relations' [[from, to]]
        pass

    @staticmethod
    def _to_key(raw: Any) -> int:
        # bool is an int subclass, but never a valid user id
        if isinstance(raw, bool):
            raise ValueError(f"Invalid user id: {raw!r}")
        if isinstance(raw, float) and not raw.is_integer():
            raise ValueError(f"Invalid user id: {raw!r}")
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid user id: {raw!r}") from None

    def _build_nodes(self, raw_data: dict[str, Any], graph: Graph) -> None:
        for user in raw_data.get("users", []) or []:
            if not isinstance(user, dict) or "id" not in user:
                raise ValueError(f"Invalid user record: {user!r}")

            key = self._to_key(user["id"])
            name = user.get("name")
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"Invalid user name for {key}: {name!r}")
            graph.add_node(key, UserData(key, name))

    def _build_edges(self, raw_data: dict[str, Any], graph: Graph) -> None:
        for relation in raw_data.get("relations", []) or []:
            if isinstance(relation, dict):
                relation = (relation.get("source"), relation.get("target"))
            if not isinstance(relation, (list, tuple)) or len(relation) != 2:
                raise ValueError(f"Invalid relation: {relation!r}")

            source, target = (self._to_key(r) for r in relation)
            # Relations to unknown users are skipped by the graph itself
            if not graph.add_edge(source, target):
                logger.debug("Skipped relation %s-%s.", source, target)
