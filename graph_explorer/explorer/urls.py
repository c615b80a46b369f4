from django.urls import path

from . import views

app_name = "explorer"

urlpatterns = [
    path("", views.index, name="index"),
    path("api/graph/seed/", views.seed_graph_api, name="graph-seed-api"),
    path("api/graph/load/", views.load_graph_api, name="graph-load-api"),
    path("api/graph/random/", views.random_graph_api, name="graph-random-api"),
    path("api/graph/find-node/", views.find_node_api, name="graph-find-node-api"),
    path("api/graph/find-edge/", views.find_edge_api, name="graph-find-edge-api"),
    path("api/graph/path/", views.path_api, name="graph-path-api"),
    path("api/graph/suggestions/", views.suggestions_api, name="graph-suggestions-api"),
    path("api/graph/delete-node/", views.delete_node_api, name="graph-delete-node-api"),
    path("api/graph/delete-edge/", views.delete_edge_api, name="graph-delete-edge-api"),
    path("api/graph/data/", views.graph_data_api, name="graph-data-api"),
    path("api/graph/export/", views.export_graph_api, name="graph-export-api"),
    path("api/workspace/reset/", views.workspace_reset_api, name="workspace-reset-api"),
    path("api/workspace/delete/", views.workspace_delete_api, name="workspace-delete-api"),
    path("api/render/", views.render_visualizer_api, name="render-visualizer-api"),
]
