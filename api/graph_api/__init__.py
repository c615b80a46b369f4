"""Public API exports for graph_api plugin contracts."""

from .model import GraphNode, Graph, UserData
from .services import DataSourcePlugin, VisualizerPlugin
from .snapshot import Snapshot, build_snapshot

__all__ = [
    "GraphNode",
    "Graph",
    "UserData",
    "DataSourcePlugin",
    "VisualizerPlugin",
    "Snapshot",
    "build_snapshot",
]
