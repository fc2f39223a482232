from __future__ import annotations

import copy
from importlib import resources

import yaml
from injector import inject, singleton


TOOL_CATALOG_PACKAGE = "searchtoolkit.config"
TOOL_CATALOG_FILENAME = "web_search_tools.yaml"


def _read_tool_catalog_text() -> str:
    catalog_resource = resources.files(TOOL_CATALOG_PACKAGE).joinpath(TOOL_CATALOG_FILENAME)
    return catalog_resource.read_text(encoding="utf-8")


def _validate_tool_entry(entry: dict, index: int) -> dict:
    if not isinstance(entry, dict):
        raise ValueError(f"tools[{index}] must be an object")

    name = str(entry.get("name") or "").strip()
    if not name:
        raise ValueError(f"tools[{index}].name is required")

    description = " ".join(str(entry.get("description") or "").split())
    if not description:
        raise ValueError(f"tools[{index}].description is required")

    input_schema = entry.get("input_schema")
    if not isinstance(input_schema, dict) or input_schema.get("type") != "object":
        raise ValueError(f"tools[{index}].input_schema must be an object schema")

    properties = input_schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        raise ValueError(f"tools[{index}].input_schema.properties must be a non-empty object")

    required = input_schema.get("required") or []
    if not isinstance(required, list):
        raise ValueError(f"tools[{index}].input_schema.required must be a list")

    unknown_required = [field for field in required if field not in properties]
    if unknown_required:
        raise ValueError(
            f"tools[{index}].input_schema.required names undeclared properties: {sorted(unknown_required)}"
        )

    return {
        "name": name,
        "description": description,
        "inputSchema": copy.deepcopy(input_schema),
    }


def parse_tool_catalog(catalog_text: str) -> list[dict]:
    payload = yaml.safe_load(catalog_text)
    if not isinstance(payload, dict):
        raise ValueError("tool catalog must be a YAML object")

    tools = payload.get("tools")
    if not isinstance(tools, list) or not tools:
        raise ValueError("tool catalog must include a non-empty 'tools' list")

    normalized: list[dict] = []
    seen_names: set[str] = set()
    for index, entry in enumerate(tools):
        item = _validate_tool_entry(entry, index)
        if item["name"] in seen_names:
            raise ValueError(f"duplicated tool name '{item['name']}'")
        seen_names.add(item["name"])
        normalized.append(item)

    return normalized


@singleton
class ToolCatalog:
    """Static capability discovery: name, description and input schema per tool."""

    @inject
    def __init__(self):
        self._tools = parse_tool_catalog(_read_tool_catalog_text())

    def list_tools(self) -> list[dict]:
        return copy.deepcopy(self._tools)
