"""Random graph generation for the explorer and the random datasource."""

from __future__ import annotations

import logging
import math
import random
from typing import Optional, Sequence, TypeVar

from .model import Graph, UserData

T = TypeVar("T")

logger = logging.getLogger(__name__)


def random_choose(pool: Sequence[T], k: int, rng: Optional[random.Random] = None) -> list[T]:
    """Pick k distinct elements from pool without replacement."""
    rng = rng or random.Random()
    if k > len(pool):
        raise ValueError(f"Cannot choose {k} elements from a pool of {len(pool)}.")
    return rng.sample(pool, k)


def max_edge_count(node_count: int) -> int:
    return node_count * (node_count - 1) // 2


def pair_at(index: int) -> tuple[int, int]:
    """
    Map an index in [0, n*(n-1)/2) to the pair (i, j), i < j, without
    building the pair list. Pairs are numbered (0, 1), (0, 2), (1, 2), (0, 3), ...
    """
    j = (1 + math.isqrt(1 + 8 * index)) // 2
    i = index - j * (j - 1) // 2
    return i, j


def generate_random_graph(
    node_count: int,
    edge_count: int,
    rng: Optional[random.Random] = None,
) -> Graph[int, UserData]:
    """
    Build a graph with node_count users ("User 0", "User 1", ...) and
    edge_count distinct random relations.

    edge_count is capped at the number of distinct unordered pairs.
    """
    if node_count < 0 or edge_count < 0:
        raise ValueError("node_count and edge_count must be non-negative.")

    limit = max_edge_count(node_count)
    if edge_count > limit:
        logger.warning(
            "Requested %d edges but %d nodes allow only %d, capping.",
            edge_count, node_count, limit,
        )
        edge_count = limit

    graph: Graph[int, UserData] = Graph()
    for node_id in range(node_count):
        graph.add_node(node_id, UserData(node_id, f"User {node_id}"))

    # Pair indices are sampled, the full pair list is never built
    for index in random_choose(range(limit), edge_count, rng):
        graph.add_edge(*pair_at(index))

    logger.debug("Generated random graph with %d nodes and %d edges.", node_count, edge_count)
    return graph
