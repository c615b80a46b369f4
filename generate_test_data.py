import json
import os
import random

from api.graph_api.generator import generate_random_graph
from api.graph_api.snapshot import build_snapshot

OUTPUT_DIR = "test_data"

# ============================================================
# Random user graphs written in the seed format
# ============================================================

SIZES = {
    "users_small.json": (12, 18),
    "users_medium.json": (60, 150),
    "users_dense.json": (30, 300),
}


def write_seed_file(path: str, node_count: int, edge_count: int, seed: int | None = None) -> dict:
    graph = generate_random_graph(node_count, edge_count, rng=random.Random(seed))
    snapshot = build_snapshot(graph).to_dict()

    # Seed files use 'users' for the node list
    document = {"users": snapshot["nodes"], "relations": snapshot["relations"]}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)

    print(f"Generated {os.path.basename(path)} – {len(document['users'])} users, "
          f"{len(document['relations'])} relations")
    return document


def generate_all(output_dir: str = OUTPUT_DIR, seed: int | None = None) -> list[str]:
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for filename, (node_count, edge_count) in SIZES.items():
        path = os.path.join(output_dir, filename)
        write_seed_file(path, node_count, edge_count, seed=seed)
        paths.append(path)
    return paths


if __name__ == "__main__":
    generate_all()
    print(f"\nAll test files in {OUTPUT_DIR}/")
