from django.urls import include, path

urlpatterns = [
    path("", include("graph_explorer.explorer.urls")),
]
