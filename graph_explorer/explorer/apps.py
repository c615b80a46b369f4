from django.apps import AppConfig


class ExplorerConfig(AppConfig):
    name = "graph_explorer.explorer"
    label = "explorer"
    verbose_name = "Graph Explorer"
