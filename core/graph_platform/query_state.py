"""Highlight state describing the result of the last workspace query."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

KEY_COLOR = "red"
RESULT_COLOR = "orange"


@dataclass
class SuggestionsResult:
    key: str
    suggestions: set[str] = field(default_factory=set)


@dataclass
class EdgeResult:
    source: str
    target: str

    def matches(self, source: str, target: str) -> bool:
        return {self.source, self.target} == {source, target}


@dataclass
class PathResult:
    source: str
    target: str
    path: set[str] = field(default_factory=set)


@dataclass
class QueryContext:
    """
    Presentation state owned by a single workspace.

    At most one kind of result is expected at a time; the workspace calls
    reset() before every query. Decorating never touches the graph.
    """

    suggestions: Optional[SuggestionsResult] = None
    found_node: Optional[str] = None
    found_edge: Optional[EdgeResult] = None
    found_path: Optional[PathResult] = None

    def reset(self) -> None:
        self.suggestions = None
        self.found_node = None
        self.found_edge = None
        self.found_path = None

    @property
    def is_empty(self) -> bool:
        return (
            self.suggestions is None
            and self.found_node is None
            and self.found_edge is None
            and self.found_path is None
        )

    def decorate_node(self, node: dict[str, Any]) -> dict[str, Any]:
        decorated = dict(node)
        node_id = decorated["id"]

        if self.suggestions is not None:
            if self.suggestions.key == node_id:
                decorated["color"] = KEY_COLOR
            elif node_id in self.suggestions.suggestions:
                decorated["color"] = RESULT_COLOR

        if self.found_node is not None and self.found_node == node_id:
            decorated["color"] = KEY_COLOR

        if self.found_edge is not None and node_id in (self.found_edge.source, self.found_edge.target):
            decorated["color"] = KEY_COLOR

        if self.found_path is not None:
            if node_id in (self.found_path.source, self.found_path.target):
                decorated["color"] = KEY_COLOR
            elif node_id in self.found_path.path:
                decorated["color"] = RESULT_COLOR

        return decorated

    def decorate_link(self, link: dict[str, Any]) -> dict[str, Any]:
        decorated = dict(link)
        source, target = decorated["source"], decorated["target"]

        if self.found_edge is not None and self.found_edge.matches(source, target):
            decorated["color"] = RESULT_COLOR

        if self.found_path is not None:
            path = self.found_path.path
            if source in path and target in path:
                decorated["color"] = RESULT_COLOR

        return decorated
