"""
Core graph domain model (GraphNode, Graph, UserData).
"""

from .graph_node import GraphNode
from .graph import Graph
from .user import UserData

__all__ = ["GraphNode", "Graph", "UserData"]
