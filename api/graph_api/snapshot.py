"""Deduplicated node/relation snapshot of a graph, used for rendering and export."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable

from .model import Graph


def _default_id(value: Any) -> Any:
    return value.id


def _default_label(value: Any) -> str:
    return value.title


@dataclass
class Snapshot:
    nodes: list[dict[str, Any]] = field(default_factory=list)
    relations: list[list[Any]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "nodes": [dict(node) for node in self.nodes],
            "relations": [list(pair) for pair in self.relations],
        }

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)


def build_snapshot(
    graph: Graph,
    node_id: Callable[[Any], Hashable] = _default_id,
    node_label: Callable[[Any], str] = _default_label,
) -> Snapshot:
    """
    Walk the graph with for_each and collect every node and every
    undirected relation exactly once.

    Each relation is reported from both endpoints, so pairs already seen
    in either direction are skipped.
    """
    snapshot = Snapshot()
    seen: set[frozenset] = set()

    def visit(value: Any, neighbors: list[Any]) -> None:
        source = node_id(value)
        snapshot.nodes.append({"id": source, "name": node_label(value)})

        for neighbor in neighbors:
            target = node_id(neighbor)
            pair = frozenset((source, target))
            if pair in seen:
                continue
            seen.add(pair)
            snapshot.relations.append([source, target])

    graph.for_each(visit)
    return snapshot
