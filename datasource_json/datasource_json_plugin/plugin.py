import json
import os
from typing import Any

from api.graph_api.datasource_common.base import BaseDatasourcePlugin

DEFAULT_SEED_PATH = os.path.join(os.path.dirname(__file__), "data", "user_data.json")


class JsonDatasourcePlugin(BaseDatasourcePlugin):
    # Adapter to read a JSON seed file and map it to a Graph object
    # It extends BaseDatasourcePlugin in which we define TemplateMethod
    # The file holds a list of users ({id, name}) and a list of relations ([from, to])
    # 'nodes' is accepted in place of 'users' so exported snapshots can be loaded back

    @property
    def plugin_id(self) -> str:
        # Platform finds this plugin with this id
        return "json"

    @property
    def display_name(self) -> str:
        # UI dropdown name showcase
        return "JSON seed file"

    def parameters_schema(self) -> dict:
        return {
            "file_path": {
                "type": "str",
                "label": "Path to JSON file (bundled seed data when empty)",
                "required": False
            }
        }

    def _parse_source(self, source, **kwargs) -> dict:
        path = self._resolve_path(source, kwargs)
        if not os.path.exists(path):
            raise FileNotFoundError(f"JSON file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                raw_json = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

        return self.parse_document(raw_json)

    @staticmethod
    def _resolve_path(source: Any, options: dict[str, Any]) -> str:
        if isinstance(source, str) and source.strip():
            return source
        fp = options.get("file_path")
        if isinstance(fp, str) and fp.strip():
            return fp
        return DEFAULT_SEED_PATH

    @staticmethod
    def parse_document(raw_json: Any) -> dict:
        # Normalize an already decoded document into {'users': [...], 'relations': [...]}
        if not isinstance(raw_json, dict):
            raise ValueError("Seed document must be a JSON object.")

        users = raw_json.get("users")
        if users is None:
            users = raw_json.get("nodes")
        relations = raw_json.get("relations")
        if relations is None:
            relations = raw_json.get("edges", [])

        if not isinstance(users, list):
            raise ValueError("Seed document needs a 'users' (or 'nodes') list.")
        if not isinstance(relations, list):
            raise ValueError("'relations' must be a list.")

        return {"users": users, "relations": relations}
