import os

import django
import pytest

from api.graph_api.model import Graph, UserData


def pytest_configure():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "graph_explorer.settings")
    django.setup()


@pytest.fixture
def users_graph():
    # Alice - Bob - Carol chain from the seed example
    graph = Graph()
    for key, name in [(1, "Alice"), (2, "Bob"), (3, "Carol")]:
        graph.add_node(key, UserData(key, name))
    graph.add_edge(1, 2)
    graph.add_edge(2, 3)
    return graph


@pytest.fixture
def diamond_graph():
    # A-B, A-C, B-D, C-D, D-E: D shares two neighbors (B, C) with A
    graph = Graph()
    for key, name in enumerate(["A", "B", "C", "D", "E"], start=1):
        graph.add_node(key, name)
    for source, target in [(1, 2), (1, 3), (2, 4), (3, 4), (4, 5)]:
        graph.add_edge(source, target)
    return graph
