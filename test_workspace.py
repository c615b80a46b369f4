import json
import random

import pytest

from api.graph_api.model import Graph, UserData
from core.graph_platform.query_state import EdgeResult, PathResult, QueryContext, SuggestionsResult
from core.graph_platform.workspace import Workspace


@pytest.fixture
def workspace(users_graph):
    users_graph.add_node(4, UserData(4, "Dan"))
    users_graph.add_node(5, UserData(5, "Erin"))
    users_graph.add_edge(1, 4)
    users_graph.add_edge(4, 3)
    return Workspace(users_graph)


def _colors(graph_data):
    return {node["id"]: node.get("color") for node in graph_data["nodes"]}


def _link_colors(graph_data):
    return {frozenset((l["source"], l["target"])): l.get("color") for l in graph_data["links"]}


# ----------------------------
# Query context
# ----------------------------

class TestQueryContext:
    def test_empty_context_leaves_items_plain(self):
        context = QueryContext()
        assert context.is_empty
        assert context.decorate_node({"id": "1", "name": "Alice"}) == {"id": "1", "name": "Alice"}
        assert context.decorate_link({"source": "1", "target": "2"}) == {"source": "1", "target": "2"}

    def test_decorating_does_not_mutate_input(self):
        context = QueryContext(found_node="1")
        node = {"id": "1", "name": "Alice"}
        assert context.decorate_node(node)["color"] == "red"
        assert "color" not in node

    def test_suggestion_colors(self):
        context = QueryContext(suggestions=SuggestionsResult("1", {"3"}))
        assert context.decorate_node({"id": "1"})["color"] == "red"
        assert context.decorate_node({"id": "3"})["color"] == "orange"
        assert "color" not in context.decorate_node({"id": "2"})

    def test_edge_colors_in_both_directions(self):
        context = QueryContext(found_edge=EdgeResult("1", "2"))
        assert context.decorate_link({"source": "2", "target": "1"})["color"] == "orange"
        assert "color" not in context.decorate_link({"source": "2", "target": "3"})
        assert context.decorate_node({"id": "2"})["color"] == "red"

    def test_path_colors(self):
        context = QueryContext(found_path=PathResult("1", "3", {"1", "2", "3"}))
        assert context.decorate_node({"id": "1"})["color"] == "red"
        assert context.decorate_node({"id": "2"})["color"] == "orange"
        assert context.decorate_link({"source": "2", "target": "3"})["color"] == "orange"

    def test_reset(self):
        context = QueryContext(found_node="1", found_edge=EdgeResult("1", "2"))
        context.reset()
        assert context.is_empty


# ----------------------------
# Workspace queries
# ----------------------------

class TestWorkspaceQueries:
    def test_find_node_highlights_user(self, workspace):
        assert workspace.find_node(2) == UserData(2, "Bob")
        colors = _colors(workspace.graph_data())
        assert colors["2"] == "red"
        assert colors["1"] is None

    def test_find_missing_node_clears_previous_result(self, workspace):
        workspace.find_node(2)
        assert workspace.find_node(99) is None
        assert workspace.context.is_empty

    def test_find_edge(self, workspace):
        assert workspace.find_edge(2, 1) is True
        links = _link_colors(workspace.graph_data())
        assert links[frozenset(("1", "2"))] == "orange"
        assert links[frozenset(("2", "3"))] is None

    def test_find_missing_edge(self, workspace):
        assert workspace.find_edge(1, 3) is False
        assert workspace.context.is_empty

    def test_load_path(self, workspace):
        path = workspace.load_path(2, 4)
        assert len(path) == 3
        assert path[0].name == "Bob"
        assert path[-1].name == "Dan"

        colors = _colors(workspace.graph_data())
        assert colors["2"] == "red" and colors["4"] == "red"
        assert colors[str(path[1].id)] == "orange"
        assert colors["5"] is None

    def test_no_path(self, workspace):
        assert workspace.load_path(1, 5) == []
        assert workspace.context.is_empty

    def test_load_suggestions(self, workspace):
        assert workspace.load_suggestions(1) == [UserData(3, "Carol")]
        colors = _colors(workspace.graph_data())
        assert colors["1"] == "red"
        assert colors["3"] == "orange"

    def test_no_suggestions(self, workspace):
        assert workspace.load_suggestions(5) == []
        assert workspace.context.is_empty

    def test_each_query_replaces_previous_result(self, workspace):
        workspace.load_suggestions(1)
        workspace.find_node(5)
        colors = _colors(workspace.graph_data())
        assert colors["5"] == "red"
        assert colors["3"] is None

    def test_find_nodes_by_name(self, workspace):
        assert {u.name for u in workspace.find_nodes_by_name("a")} == {"Alice", "Carol", "Dan"}


# ----------------------------
# Workspace mutations and state
# ----------------------------

class TestWorkspaceState:
    def test_delete_node(self, workspace):
        assert workspace.delete_node(2) is True
        assert workspace.delete_node(2) is False
        assert "2" not in _colors(workspace.graph_data())

    def test_delete_edge(self, workspace):
        assert workspace.delete_edge(1, 2) is True
        assert workspace.delete_edge(1, 2) is False
        assert frozenset(("1", "2")) not in _link_colors(workspace.graph_data())

    def test_empty_workspace(self):
        workspace = Workspace()
        assert not workspace.has_graph()
        assert workspace.find_node(1) is None
        assert workspace.find_edge(1, 2) is False
        assert workspace.load_path(1, 2) == []
        assert workspace.load_suggestions(1) == []
        assert workspace.delete_node(1) is False
        assert workspace.graph_data() == {"nodes": [], "links": []}
        assert workspace.export() == {"nodes": [], "relations": []}

    def test_empty_graph_is_still_a_graph(self):
        workspace = Workspace(Graph())
        assert workspace.has_graph()
        assert workspace.graph_data() == {"nodes": [], "links": []}

    def test_replacing_graph_keeps_no_history(self, workspace, users_graph):
        replacement = workspace.generate_random_graph(5, 4, rng=random.Random(0))
        assert workspace.get_graph() is replacement
        assert not hasattr(workspace, "undo")

        assert workspace.delete_node(0) is True
        assert workspace.get_graph() is replacement
        assert replacement.find_node(0) is None
        assert users_graph.size == 5

    def test_new_graph_resets_highlight(self, workspace):
        workspace.find_node(1)
        workspace.generate_random_graph(3, 1)
        assert workspace.context.is_empty

    def test_clear(self, workspace):
        workspace.clear()
        assert workspace.get_graph() is None
        assert not workspace.has_graph()

    def test_export_round_trips_through_json(self, workspace):
        exported = json.loads(workspace.export_json())
        assert len(exported["nodes"]) == 5
        assert {frozenset(p) for p in exported["relations"]} == {
            frozenset((1, 2)), frozenset((2, 3)), frozenset((1, 4)), frozenset((3, 4)),
        }
