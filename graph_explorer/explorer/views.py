import json
import logging
import os
from functools import wraps
from html import escape as escape_html
from tempfile import NamedTemporaryFile
from uuid import uuid4

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from api.graph_api.model import Graph
from core.graph_platform.workspace import Workspace
from datasource_json.datasource_json_plugin.plugin import JsonDatasourcePlugin
from datasource_random.datasource_random_plugin.plugin import RandomDatasourcePlugin
from visualizer_simple.visualizer_simple_plugin.plugin import SimpleVisualizer

WORKSPACES: dict[str, Workspace] = {}
LOGGER = logging.getLogger(__name__)


def json_error(
    status_code: int,
    error: str,
    message: str,
    expected: dict[str, object] | None = None,
    details: object | None = None,
) -> JsonResponse:
    payload: dict[str, object] = {
        "ok": False,
        "status": status_code,
        "error": error,
        "message": message,
    }
    if expected is not None:
        payload["expected"] = expected
    if details is not None:
        payload["details"] = details
    return JsonResponse(payload, status=status_code)


class ApiError(Exception):
    def __init__(self, status_code: int, error: str, message: str, expected: dict[str, object] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.expected = expected

    def to_response(self) -> JsonResponse:
        return json_error(self.status_code, self.error, self.message, expected=self.expected)


def _parse_json_body(request: HttpRequest) -> dict:
    if not request.body:
        raise ApiError(400, "BadRequest", "Invalid JSON body.")

    try:
        body = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ApiError(400, "BadRequest", "Invalid JSON body.") from None

    if not isinstance(body, dict):
        raise ApiError(400, "BadRequest", "JSON body must be an object.")
    return body


def _parse_int(body: dict, name: str) -> int:
    raw_value = body.get(name)
    if isinstance(raw_value, bool) or raw_value is None:
        raise ApiError(400, "BadRequest", f"'{name}' is required and must be an integer.")
    if isinstance(raw_value, float) and not raw_value.is_integer():
        raise ApiError(400, "BadRequest", f"'{name}' is required and must be an integer.")
    try:
        return int(raw_value)
    except (TypeError, ValueError):
        raise ApiError(400, "BadRequest", f"'{name}' is required and must be an integer.") from None


def _get_workspace(graph_id: object) -> Workspace:
    if not graph_id:
        raise ApiError(400, "BadRequest", "graph_id is required.")

    workspace = WORKSPACES.get(str(graph_id))
    if workspace is None:
        raise ApiError(404, "NotFound", "Graph not found.")
    return workspace


def _evict_workspaces() -> None:
    # Oldest first
    limit = getattr(settings, "GRAPH_EXPLORER_MAX_WORKSPACES", 100)
    while len(WORKSPACES) > limit:
        graph_id = next(iter(WORKSPACES))
        del WORKSPACES[graph_id]
        LOGGER.info("Evicted workspace %s.", graph_id)


def _register_workspace(graph: Graph, source_name: str, filename: str | None = None) -> JsonResponse:
    graph_id = str(uuid4())
    workspace = Workspace(graph)
    WORKSPACES[graph_id] = workspace
    _evict_workspaces()
    LOGGER.info("Created workspace %s from %s (%d users).", graph_id, source_name, graph.size)

    graph_data = workspace.graph_data()
    meta: dict[str, object] = {
        "node_count": len(graph_data["nodes"]),
        "edge_count": len(graph_data["links"]),
        "source": source_name,
    }
    if filename is not None:
        meta["filename"] = filename

    return JsonResponse({"ok": True, "graph_id": graph_id, "meta": meta, "graph": graph_data})


def _graph_response(workspace: Workspace, **extra: object) -> JsonResponse:
    payload: dict[str, object] = {"ok": True}
    payload.update(extra)
    payload["graph"] = workspace.graph_data()
    return JsonResponse(payload)


def _query_view(handler):
    # POST + JSON body + workspace lookup, with ApiError mapped to the error envelope
    @csrf_exempt
    @wraps(handler)
    def view(request: HttpRequest) -> JsonResponse:
        if request.method != "POST":
            return json_error(
                405,
                "MethodNotAllowed",
                "Only POST is allowed.",
                details={"allowed_methods": ["POST"]},
            )
        try:
            body = _parse_json_body(request)
            workspace = _get_workspace(body.get("graph_id"))
            return handler(workspace, body)
        except ApiError as exc:
            return exc.to_response()
        except Exception:
            LOGGER.exception("Unexpected failure in %s.", handler.__name__)
            return json_error(500, "InternalError", "Unexpected graph query failure.")

    return view


def index(request: HttpRequest) -> HttpResponse:
    context = {
        "page_title": "Graph Explorer",
    }
    return render(request, "explorer/index.html", context)


# ==========================================================
# GRAPH CREATION
# ==========================================================

@csrf_exempt
@require_POST
def seed_graph_api(request: HttpRequest) -> JsonResponse:
    seed_path = getattr(settings, "GRAPH_EXPLORER_SEED_PATH", "") or None
    try:
        graph = JsonDatasourcePlugin().load_graph(seed_path)
    except (FileNotFoundError, ValueError) as exc:
        LOGGER.error("Failed to load seed data: %s", exc)
        return json_error(500, "SeedUnavailable", f"Failed to load seed data: {exc}")
    return _register_workspace(graph, "seed")


def _load_graph_from_upload(uploaded_file: UploadedFile) -> Graph:
    temp_path: str | None = None
    try:
        with NamedTemporaryFile(delete=False, suffix=".json") as temp_file:
            temp_path = temp_file.name
            for chunk in uploaded_file.chunks():
                temp_file.write(chunk)

        return JsonDatasourcePlugin().load_graph(temp_path)
    finally:
        if temp_path and os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError:
                LOGGER.warning("Unable to remove temporary upload %s.", temp_path)


@csrf_exempt
@require_POST
def load_graph_api(request: HttpRequest) -> JsonResponse:
    uploaded_file = request.FILES.get("file")
    if uploaded_file is None:
        return json_error(400, "BadRequest", "missing file")

    filename = str(uploaded_file.name or "uploaded-file")
    if not filename.lower().endswith(".json"):
        return json_error(400, "BadRequest", "Unsupported file extension. Only .json is allowed.")

    try:
        graph = _load_graph_from_upload(uploaded_file)
    except ValueError as exc:
        return json_error(400, "BadRequest", f"Failed to parse '{filename}' as json: {exc}")
    except Exception as exc:
        LOGGER.exception("Unexpected graph load failure.")
        return json_error(500, "InternalError", f"Unexpected graph load failure: {exc}")

    return _register_workspace(graph, "json", filename=filename)


@csrf_exempt
@require_POST
def random_graph_api(request: HttpRequest) -> JsonResponse:
    try:
        body = _parse_json_body(request)
        node_count = _parse_int(body, "node_count")
        edge_count = _parse_int(body, "edge_count")
    except ApiError as exc:
        return exc.to_response()

    max_nodes = getattr(settings, "GRAPH_EXPLORER_MAX_RANDOM_NODES", 500)
    if not 0 <= node_count <= max_nodes or edge_count < 0:
        return json_error(
            400,
            "BadRequest",
            f"node_count must be between 0 and {max_nodes}, edge_count must be non-negative.",
            expected={"node_count": f"0..{max_nodes}", "edge_count": "int >= 0"},
        )

    graph = RandomDatasourcePlugin().load_graph(None, node_count=node_count, edge_count=edge_count)
    return _register_workspace(graph, "random")


# ==========================================================
# QUERIES
# ==========================================================

@_query_view
def find_node_api(workspace: Workspace, body: dict) -> JsonResponse:
    key = _parse_int(body, "key")
    user = workspace.find_node(key)
    if user is None:
        raise ApiError(404, "NotFound", f"The user {key} doesn't exist")
    return _graph_response(workspace, user=user.to_dict())


@_query_view
def find_edge_api(workspace: Workspace, body: dict) -> JsonResponse:
    source = _parse_int(body, "source")
    target = _parse_int(body, "target")
    if not workspace.find_edge(source, target):
        raise ApiError(404, "NotFound", f"Relation for {source} and {target} doesn't exist")
    return _graph_response(workspace, relation=[source, target])


@_query_view
def path_api(workspace: Workspace, body: dict) -> JsonResponse:
    source = _parse_int(body, "source")
    target = _parse_int(body, "target")
    path = workspace.load_path(source, target)
    if not path:
        raise ApiError(404, "NotFound", f"No path between {source} and {target} found")
    return _graph_response(workspace, path=[user.to_dict() for user in path])


@_query_view
def suggestions_api(workspace: Workspace, body: dict) -> JsonResponse:
    key = _parse_int(body, "key")
    suggestions = workspace.load_suggestions(key)
    if not suggestions:
        raise ApiError(404, "NotFound", f"No suggestions for {key} found")
    return _graph_response(workspace, suggestions=[user.to_dict() for user in suggestions])


# ==========================================================
# MUTATIONS
# ==========================================================

@_query_view
def delete_node_api(workspace: Workspace, body: dict) -> JsonResponse:
    key = _parse_int(body, "key")
    if not workspace.delete_node(key):
        raise ApiError(404, "NotFound", f"The user {key} doesn't exist")
    return _graph_response(workspace, deleted=key)


@_query_view
def delete_edge_api(workspace: Workspace, body: dict) -> JsonResponse:
    source = _parse_int(body, "source")
    target = _parse_int(body, "target")
    if not workspace.delete_edge(source, target):
        raise ApiError(404, "NotFound", f"Relation for {source} and {target} doesn't exist")
    return _graph_response(workspace, deleted=[source, target])


@_query_view
def workspace_reset_api(workspace: Workspace, body: dict) -> JsonResponse:
    workspace.reset()
    return _graph_response(workspace)


@_query_view
def workspace_delete_api(workspace: Workspace, body: dict) -> JsonResponse:
    graph_id = str(body["graph_id"])
    WORKSPACES.pop(graph_id, None)
    LOGGER.info("Deleted workspace %s.", graph_id)
    return JsonResponse({"ok": True, "deleted": graph_id})


# ==========================================================
# SNAPSHOTS
# ==========================================================

@require_GET
def graph_data_api(request: HttpRequest) -> JsonResponse:
    try:
        workspace = _get_workspace(request.GET.get("graph_id", "").strip())
    except ApiError as exc:
        return exc.to_response()
    return _graph_response(workspace)


@require_GET
def export_graph_api(request: HttpRequest) -> JsonResponse:
    try:
        workspace = _get_workspace(request.GET.get("graph_id", "").strip())
    except ApiError as exc:
        return exc.to_response()
    return JsonResponse(workspace.export())


def _html_response(title: str, message: str, status: int = 200) -> HttpResponse:
    page = [
        "<!doctype html>",
        "<html lang=\"en\">",
        "<head><meta charset=\"utf-8\"><title>{}</title></head>".format(escape_html(title)),
        "<body>",
        "<h1 style=\"font-family:sans-serif;font-size:1.1rem;\">{}</h1>".format(escape_html(title)),
        "<p style=\"font-family:sans-serif;\">{}</p>".format(escape_html(message)),
        "</body>",
        "</html>",
    ]
    return HttpResponse("\n".join(page), status=status, content_type="text/html; charset=utf-8")


def _build_visualizer_map() -> dict[str, object]:
    return {
        "simple": SimpleVisualizer(),
    }


@require_GET
def render_visualizer_api(request: HttpRequest) -> HttpResponse:
    visualizer_id = request.GET.get("visualizer_id", "simple").strip().lower()
    visualizer = _build_visualizer_map().get(visualizer_id)
    if visualizer is None:
        return _html_response(
            "Invalid visualizer_id",
            f"Unsupported visualizer_id '{visualizer_id}'. Allowed values are: simple.",
            status=400,
        )

    graph_id = request.GET.get("graph_id", "").strip()
    if not graph_id:
        return _html_response(
            "Missing graph_id",
            "Query parameter 'graph_id' is required.",
            status=400,
        )

    workspace = WORKSPACES.get(graph_id)
    if workspace is None:
        return _html_response(
            "Graph Not Found",
            f"Graph '{graph_id}' was not found in the active graph store.",
            status=404,
        )

    try:
        html = visualizer.render(workspace.graph_data(), title="Graph Explorer")
    except Exception as exc:
        LOGGER.exception("Visualizer '%s' failed.", visualizer_id)
        return _html_response(
            "Visualizer Render Error",
            f"Failed to render visualizer '{visualizer_id}': {exc}",
            status=500,
        )

    return HttpResponse(str(html), content_type="text/html; charset=utf-8")
