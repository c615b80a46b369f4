import os
from collections import deque
from jinja2 import Environment, FileSystemLoader, select_autoescape
from api.graph_api.services.visualizer_plugin import VisualizerPlugin

#Width and height of the space for graph
WIDTH = 1100
HEIGHT = 700

NODE_COLOR = "lightgreen"
LINK_COLOR = "lightblue"
HIGHLIGHT_STROKE = "blue"

TEMPLATE_PATH = os.path.join(os.path.dirname(__file__), 'templates')


def get_node_levels(graph_data: dict):
    """
    Performs BFS over the undirected links to determine the depth level of each node.
    Every connected component starts its own BFS at level 0 from its first node.
    Returns a dictionary mapping level (int) to a list of node IDs.
    """
    adjacency = {node["id"]: [] for node in graph_data["nodes"]}
    for link in graph_data["links"]:
        adjacency.setdefault(link["source"], []).append(link["target"])
        adjacency.setdefault(link["target"], []).append(link["source"])

    levels = {}
    for root in adjacency:
        if root in levels:
            continue

        levels[root] = 0
        queue = deque([root])
        while queue:
            curr_id = queue.popleft()
            for neighbor in adjacency[curr_id]:
                if neighbor not in levels:
                    levels[neighbor] = levels[curr_id] + 1
                    queue.append(neighbor)

    # Group node IDs by their levels
    columns = {}
    for node_id, lvl in levels.items():
        columns.setdefault(lvl, []).append(node_id)

    return columns


class SimpleVisualizer(VisualizerPlugin):
    @property
    def plugin_id(self) -> str:
        return "simple"

    @property
    def display_name(self) -> str:
        return "Simple Layered View"

    def render_options_schema(self) -> dict:
        return {
            "width": {"type": "int", "label": "Canvas width", "required": False, "default": WIDTH},
            "height": {"type": "int", "label": "Canvas height", "required": False, "default": HEIGHT},
            "title": {"type": "str", "label": "Page title", "required": False},
        }

    def render(self, graph_data: dict, **options) -> str:
        nodes = graph_data.get("nodes", [])
        links = graph_data.get("links", [])
        n_nodes = len(nodes)
        if n_nodes == 0:
            return "<html><body>Empty Graph</body></html>"

        # --- GET LEVELS USING THE HELPER FUNCTION ---
        columns = get_node_levels({"nodes": nodes, "links": links})

        # --- Calculate Coords ---
        positions = {}
        width = int(options.get("width") or WIDTH)
        height = int(options.get("height") or HEIGHT)

        # Get max level from columns keys
        max_lvl = max(columns.keys()) if columns else 0
        dx = width / (max_lvl + 2)

        for lvl, node_ids in columns.items():
            x = (lvl + 1) * dx
            dy = height / (len(node_ids) + 1)
            for i, node_id in enumerate(node_ids):
                positions[node_id] = {"x": x, "y": dy * (i + 1)}

        # --- Scaling ---
        scale = max(0.4, 1.0 - (n_nodes / 100))
        radius = 25 * scale
        font_size = 12 * scale

        # --- Template Rendering ---
        env = Environment(
            loader=FileSystemLoader(TEMPLATE_PATH),
            autoescape=select_autoescape(["html"]),
        )
        template = env.get_template('simple.html')

        return template.render(
            title=options.get("title") or self.display_name,
            nodes=nodes,
            links=[link for link in links if link["source"] in positions and link["target"] in positions],
            positions=positions,
            width=width,
            height=height,
            radius=radius,
            font_size=font_size,
            node_color=NODE_COLOR,
            link_color=LINK_COLOR,
            highlight_stroke=HIGHLIGHT_STROKE,
        )
