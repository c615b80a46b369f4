"""Workspace, query state and plugin orchestration for the user graph."""

from .engine import GraphEngine
from .query_state import QueryContext
from .registry import PluginRegistry
from .workspace import Workspace

__all__ = ["GraphEngine", "PluginRegistry", "QueryContext", "Workspace"]
