import random
from typing import Any

from api.graph_api.generator import generate_random_graph
from api.graph_api.model import Graph, UserData
from api.graph_api.services.datasource_plugin import DataSourcePlugin


class RandomDatasourcePlugin(DataSourcePlugin):
    # Builds a random user graph instead of reading a file
    # The source argument is ignored, everything comes from the options

    @property
    def plugin_id(self) -> str:
        return "random"

    @property
    def display_name(self) -> str:
        return "Random graph"

    def parameters_schema(self) -> dict:
        return {
            "node_count": {
                "type": "int",
                "label": "Number of users",
                "required": True
            },
            "edge_count": {
                "type": "int",
                "label": "Number of relations (capped at n*(n-1)/2)",
                "required": True
            },
            "seed": {
                "type": "int",
                "label": "Random seed",
                "required": False
            }
        }

    def load_graph(self, source: Any = None, **options: Any) -> Graph[int, UserData]:
        try:
            node_count = int(options["node_count"])
            edge_count = int(options["edge_count"])
        except KeyError as exc:
            raise ValueError(f"Missing option: {exc.args[0]}") from None
        except (TypeError, ValueError):
            raise ValueError("node_count and edge_count must be integers.") from None

        seed = options.get("seed")
        rng = random.Random(seed) if seed is not None else None
        return generate_random_graph(node_count, edge_count, rng=rng)
