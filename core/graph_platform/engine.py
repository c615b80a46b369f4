from .registry import PluginRegistry
from .workspace import Workspace
from api.graph_api.services import DataSourcePlugin, VisualizerPlugin


class GraphEngine:
    """
    High-level orchestration layer.

    Responsibilities:
    - Plugin execution
    - Graph lifecycle management
    - Delegation to Workspace
    """

    def __init__(self, workspace: Workspace | None = None):
        self.registry = PluginRegistry()
        self.workspace = workspace or Workspace()

    # ==========================================================
    # MAIN ORCHESTRATION
    # ==========================================================

    def load(self, datasource_name: str, source=None, **options):
        datasource_cls = self.registry.get_datasource(datasource_name)
        if not datasource_cls:
            raise ValueError(f"Datasource '{datasource_name}' not found.")

        datasource: DataSourcePlugin = datasource_cls()
        graph = datasource.load_graph(source, **options)

        # Store graph inside workspace
        self.workspace.set_graph(graph)
        return graph

    def render(self, visualizer_name: str, **options) -> str:
        visualizer_cls = self.registry.get_visualizer(visualizer_name)
        if not visualizer_cls:
            raise ValueError(f"Visualizer '{visualizer_name}' not found.")

        visualizer: VisualizerPlugin = visualizer_cls()
        return visualizer.render(self.workspace.graph_data(), **options)

    def process(
        self,
        datasource_name: str,
        visualizer_name: str,
        source=None,
        **options,
    ) -> str:
        if not self.registry.get_visualizer(visualizer_name):
            raise ValueError(f"Visualizer '{visualizer_name}' not found.")

        self.load(datasource_name, source, **options)
        return self.render(visualizer_name, **options)

    # ==========================================================
    # WORKSPACE DELEGATION API
    # ==========================================================

    def get_current_graph(self):
        return self.workspace.get_graph()

    def clear_workspace(self):
        self.workspace.clear()

    def reset(self):
        self.workspace.reset()

    # Query helpers
    def find_node(self, key: int):
        return self.workspace.find_node(key)

    def find_edge(self, source: int, target: int):
        return self.workspace.find_edge(source, target)

    def path(self, source: int, target: int):
        return self.workspace.load_path(source, target)

    def suggestions(self, key: int):
        return self.workspace.load_suggestions(key)

    def search_nodes_by_name(self, name_substr: str):
        return self.workspace.find_nodes_by_name(name_substr)

    # Mutation helpers
    def delete_node(self, key: int):
        return self.workspace.delete_node(key)

    def delete_edge(self, source: int, target: int):
        return self.workspace.delete_edge(source, target)

    def export(self):
        return self.workspace.export()
