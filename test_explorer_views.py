import json

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import RequestFactory, override_settings

from graph_explorer.explorer import views


@pytest.fixture
def rf():
    return RequestFactory()


@pytest.fixture(autouse=True)
def clean_workspaces():
    views.WORKSPACES.clear()
    yield
    views.WORKSPACES.clear()


def _post(rf, view, body):
    request = rf.post("/", data=json.dumps(body), content_type="application/json")
    response = view(request)
    return response.status_code, json.loads(response.content)


@pytest.fixture
def graph_id(rf):
    status, payload = _post(rf, views.seed_graph_api, {})
    assert status == 200
    return payload["graph_id"]


def _colors(payload):
    return {node["id"]: node.get("color") for node in payload["graph"]["nodes"]}


def test_seed_creates_workspace(rf):
    status, payload = _post(rf, views.seed_graph_api, {})
    assert status == 200
    assert payload["ok"] is True
    assert payload["meta"]["node_count"] == 12
    assert payload["meta"]["edge_count"] == 15
    assert payload["graph_id"] in views.WORKSPACES


def test_random_graph(rf):
    status, payload = _post(rf, views.random_graph_api, {"node_count": 5, "edge_count": 50})
    assert status == 200
    assert payload["meta"]["node_count"] == 5
    assert payload["meta"]["edge_count"] == 10


@pytest.mark.parametrize("body", [
    {"node_count": -1, "edge_count": 2},
    {"node_count": 5},
    {"node_count": "five", "edge_count": 2},
    {"node_count": 100000, "edge_count": 2},
])
def test_random_graph_rejects_bad_counts(rf, body):
    status, payload = _post(rf, views.random_graph_api, body)
    assert status == 400
    assert payload["ok"] is False


def test_find_node(rf, graph_id):
    status, payload = _post(rf, views.find_node_api, {"graph_id": graph_id, "key": 2})
    assert status == 200
    assert payload["user"] == {"id": 2, "name": "Bob"}
    assert _colors(payload)["2"] == "red"


def test_find_missing_node(rf, graph_id):
    status, payload = _post(rf, views.find_node_api, {"graph_id": graph_id, "key": 99})
    assert status == 404
    assert payload["message"] == "The user 99 doesn't exist"


def test_find_edge(rf, graph_id):
    status, _ = _post(rf, views.find_edge_api, {"graph_id": graph_id, "source": 2, "target": 1})
    assert status == 200
    status, payload = _post(rf, views.find_edge_api, {"graph_id": graph_id, "source": 1, "target": 12})
    assert status == 404
    assert payload["message"] == "Relation for 1 and 12 doesn't exist"


def test_path(rf, graph_id):
    status, payload = _post(rf, views.path_api, {"graph_id": graph_id, "source": 1, "target": 5})
    assert status == 200
    assert [u["id"] for u in payload["path"]][0] == 1
    assert [u["id"] for u in payload["path"]][-1] == 5
    assert len(payload["path"]) == 4


def test_no_path(rf, graph_id):
    _post(rf, views.delete_edge_api, {"graph_id": graph_id, "source": 10, "target": 11})
    status, payload = _post(rf, views.path_api, {"graph_id": graph_id, "source": 1, "target": 12})
    assert status == 404
    assert payload["message"] == "No path between 1 and 12 found"


def test_suggestions(rf, graph_id):
    status, payload = _post(rf, views.suggestions_api, {"graph_id": graph_id, "key": 1})
    assert status == 200
    assert payload["suggestions"] == [{"id": 4, "name": "Dan"}]
    colors = _colors(payload)
    assert colors["1"] == "red"
    assert colors["4"] == "orange"


def test_no_suggestions(rf, graph_id):
    status, payload = _post(rf, views.suggestions_api, {"graph_id": graph_id, "key": 12})
    assert status == 404
    assert payload["message"] == "No suggestions for 12 found"


def test_delete_node_and_edge(rf, graph_id):
    status, payload = _post(rf, views.delete_node_api, {"graph_id": graph_id, "key": 12})
    assert status == 200
    assert "12" not in _colors(payload)

    status, _ = _post(rf, views.delete_node_api, {"graph_id": graph_id, "key": 12})
    assert status == 404

    status, payload = _post(rf, views.delete_edge_api, {"graph_id": graph_id, "source": 1, "target": 2})
    assert status == 200
    links = {frozenset((l["source"], l["target"])) for l in payload["graph"]["links"]}
    assert frozenset(("1", "2")) not in links


def test_reset_clears_highlight(rf, graph_id):
    _post(rf, views.find_node_api, {"graph_id": graph_id, "key": 2})
    status, payload = _post(rf, views.workspace_reset_api, {"graph_id": graph_id})
    assert status == 200
    assert set(_colors(payload).values()) == {None}


def test_unknown_graph(rf):
    status, payload = _post(rf, views.find_node_api, {"graph_id": "nope", "key": 1})
    assert status == 404
    assert payload["error"] == "NotFound"


def test_missing_key(rf, graph_id):
    status, payload = _post(rf, views.find_node_api, {"graph_id": graph_id})
    assert status == 400
    assert "'key'" in payload["message"]


@pytest.mark.parametrize("key", [1.9, "1.5", True])
def test_non_integer_key(rf, graph_id, key):
    status, payload = _post(rf, views.find_node_api, {"graph_id": graph_id, "key": key})
    assert status == 400
    assert payload["error"] == "BadRequest"


def test_integral_float_key(rf, graph_id):
    status, payload = _post(rf, views.find_node_api, {"graph_id": graph_id, "key": 1.0})
    assert status == 200
    assert payload["user"]["id"] == 1


def test_delete_workspace(rf, graph_id):
    status, payload = _post(rf, views.workspace_delete_api, {"graph_id": graph_id})
    assert status == 200
    assert payload["deleted"] == graph_id
    assert graph_id not in views.WORKSPACES

    status, _ = _post(rf, views.find_node_api, {"graph_id": graph_id, "key": 1})
    assert status == 404


def test_oldest_workspaces_are_evicted(rf):
    with override_settings(GRAPH_EXPLORER_MAX_WORKSPACES=2):
        ids = [_post(rf, views.seed_graph_api, {})[1]["graph_id"] for _ in range(3)]
    assert list(views.WORKSPACES) == ids[1:]


def test_invalid_body(rf, graph_id):
    request = rf.post("/", data="{broken", content_type="application/json")
    response = views.path_api(request)
    assert response.status_code == 400


def test_query_requires_post(rf, graph_id):
    response = views.find_node_api(rf.get("/"))
    assert response.status_code == 405


def test_export(rf, graph_id):
    response = views.export_graph_api(rf.get("/", {"graph_id": graph_id}))
    payload = json.loads(response.content)
    assert len(payload["nodes"]) == 12
    assert len(payload["relations"]) == 15


def test_graph_data(rf, graph_id):
    response = views.graph_data_api(rf.get("/", {"graph_id": graph_id}))
    payload = json.loads(response.content)
    assert len(payload["graph"]["links"]) == 15


def test_upload(rf):
    content = json.dumps({"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
                          "relations": [[1, 2]]}).encode("utf-8")
    upload = SimpleUploadedFile("users.json", content, content_type="application/json")
    response = views.load_graph_api(rf.post("/", {"file": upload}))
    payload = json.loads(response.content)
    assert response.status_code == 200
    assert payload["meta"]["filename"] == "users.json"
    assert payload["meta"]["edge_count"] == 1


def test_upload_rejects_other_extensions(rf):
    upload = SimpleUploadedFile("users.csv", b"id,name\n", content_type="text/csv")
    response = views.load_graph_api(rf.post("/", {"file": upload}))
    assert response.status_code == 400


def test_upload_rejects_malformed_json(rf):
    upload = SimpleUploadedFile("users.json", b"[]", content_type="application/json")
    response = views.load_graph_api(rf.post("/", {"file": upload}))
    assert response.status_code == 400


def test_render(rf, graph_id):
    _post(rf, views.path_api, {"graph_id": graph_id, "source": 1, "target": 3})
    response = views.render_visualizer_api(rf.get("/", {"graph_id": graph_id, "visualizer_id": "simple"}))
    assert response.status_code == 200
    html = response.content.decode("utf-8")
    assert "<svg" in html
    assert 'fill="red"' in html


def test_render_errors(rf, graph_id):
    assert views.render_visualizer_api(rf.get("/", {"graph_id": graph_id, "visualizer_id": "block"})).status_code == 400
    assert views.render_visualizer_api(rf.get("/")).status_code == 400
    assert views.render_visualizer_api(rf.get("/", {"graph_id": "nope"})).status_code == 404


def test_index(rf):
    response = views.index(rf.get("/"))
    assert response.status_code == 200
    assert b"Graph Explorer" in response.content
