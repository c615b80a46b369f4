"""Visualizer plugin interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class VisualizerPlugin(ABC):
    """Contract for plugins that render decorated graph data to HTML output."""

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Return a unique, stable plugin identifier."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return a human-readable plugin name for UI and logs."""

    def render_options_schema(self) -> dict[str, Any] | None:
        """Return an optional render options schema for UI/platform integration."""
        return None

    @abstractmethod
    def render(self, graph_data: dict[str, list[dict[str, Any]]], **options: Any) -> str:
        """
        Render graph data and return HTML output.

        graph_data has a "nodes" list of {id, name, color?} and a "links"
        list of {source, target, color?}, each undirected link listed once.
        """
