import pytest
from unittest.mock import patch

from searchtoolkit.services.web_search.providers import (
    bing_provider,
    brave_provider,
    duckduckgo_provider,
    google_provider,
    perplexity_provider,
)
from searchtoolkit.services.web_search.tool_catalog import ToolCatalog, parse_tool_catalog


VALID_CATALOG = """
tools:
  - name: echo_search
    description: >-
      Echoes
      the query.
    input_schema:
      type: object
      properties:
        query:
          type: string
      required: [query]
"""


class TestToolCatalog:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.catalog = ToolCatalog()
        self.tools = {tool["name"]: tool for tool in self.catalog.list_tools()}

    def _properties(self, name):
        return self.tools[name]["inputSchema"]["properties"]

    def test_lists_the_five_tools_in_order(self):
        assert [tool["name"] for tool in self.catalog.list_tools()] == [
            "bing_search", "brave_search", "duckduckgo_search", "google_search", "perplexity_search"
        ]

    def test_entries_use_wire_keys(self):
        tool = self.tools["google_search"]

        assert set(tool.keys()) == {"name", "description", "inputSchema"}
        assert tool["inputSchema"]["type"] == "object"
        assert tool["inputSchema"]["required"] == ["query", "api_key", "search_engine_id"]
        assert "\n" not in tool["description"]

    def test_required_fields(self):
        assert self.tools["bing_search"]["inputSchema"]["required"] == ["query", "api_key"]
        assert self.tools["brave_search"]["inputSchema"]["required"] == ["query", "api_key"]
        assert self.tools["duckduckgo_search"]["inputSchema"]["required"] == ["query"]
        assert self.tools["perplexity_search"]["inputSchema"]["required"] == ["query", "api_key"]

    def test_bounds_match_validators(self):
        assert self._properties("bing_search")["count"]["maximum"] == bing_provider.BingWebSearchProvider.MAX_RESULTS
        assert self._properties("brave_search")["count"]["maximum"] == brave_provider.BraveWebSearchProvider.MAX_RESULTS
        assert self._properties("google_search")["num"]["maximum"] == google_provider.GoogleWebSearchProvider.MAX_RESULTS
        assert self._properties("google_search")["start"]["maximum"] == google_provider.GoogleWebSearchProvider.MAX_START
        perplexity = self._properties("perplexity_search")
        assert perplexity["max_tokens"]["maximum"] == perplexity_provider.PerplexitySearchProvider.MAX_TOKENS
        assert perplexity["temperature"]["maximum"] == perplexity_provider.PerplexitySearchProvider.MAX_TEMPERATURE

    def test_enums_match_validators(self):
        assert tuple(self._properties("bing_search")["safe_search"]["enum"]) == bing_provider.SAFE_SEARCH_VALUES
        assert tuple(self._properties("brave_search")["safesearch"]["enum"]) == brave_provider.SAFESEARCH_VALUES
        assert tuple(self._properties("brave_search")["freshness"]["enum"]) == brave_provider.FRESHNESS_VALUES
        assert tuple(self._properties("duckduckgo_search")["format"]["enum"]) == duckduckgo_provider.FORMAT_VALUES
        assert tuple(self._properties("google_search")["safe"]["enum"]) == google_provider.SAFE_VALUES
        assert tuple(self._properties("google_search")["search_type"]["enum"]) == google_provider.SEARCH_TYPE_VALUES
        assert tuple(self._properties("perplexity_search")["model"]["enum"]) == perplexity_provider.MODEL_VALUES
        assert tuple(self._properties("perplexity_search")["search_recency_filter"]["enum"]) == \
            perplexity_provider.RECENCY_VALUES

    def test_defaults_match_request_body(self):
        perplexity = self._properties("perplexity_search")

        for name in ("model", "max_tokens", "temperature", "search_recency_filter") + perplexity_provider.RETURN_FLAGS:
            assert perplexity[name]["default"] == perplexity_provider.DEFAULT_BODY[name]

    def test_list_tools_returns_copies(self):
        self.catalog.list_tools()[0]["inputSchema"]["properties"].clear()

        assert self.catalog.list_tools()[0]["inputSchema"]["properties"]

    @patch("searchtoolkit.services.web_search.tool_catalog._read_tool_catalog_text")
    def test_catalog_is_read_from_package_resource(self, mock_read):
        mock_read.return_value = VALID_CATALOG

        catalog = ToolCatalog()

        assert catalog.list_tools() == [{
            "name": "echo_search",
            "description": "Echoes the query.",
            "inputSchema": {
                "type": "object",
                "properties": {"query": {"type": "string"}},
                "required": ["query"],
            },
        }]


class TestParseToolCatalog:
    @pytest.mark.parametrize("text, message", [
        ("- a\n- b\n", "must be a YAML object"),
        ("tools: []\n", "non-empty 'tools' list"),
        ("tools:\n  - name: x\n", "tools[0].description is required"),
        ("tools:\n  - description: d\n", "tools[0].name is required"),
        ("tools:\n  - name: x\n    description: d\n    input_schema: {type: array}\n", "object schema"),
        ("tools:\n  - name: x\n    description: d\n    input_schema: {type: object, properties: {}}\n",
         "non-empty object"),
    ])
    def test_invalid_catalogs(self, text, message):
        with pytest.raises(ValueError) as exc:
            parse_tool_catalog(text)

        assert message in str(exc.value)

    def test_required_must_be_declared(self):
        text = VALID_CATALOG.replace("required: [query]", "required: [query, api_key]")

        with pytest.raises(ValueError) as exc:
            parse_tool_catalog(text)

        assert "['api_key']" in str(exc.value)

    def test_duplicated_names_are_rejected(self):
        entry = VALID_CATALOG.split("tools:\n", 1)[1]

        with pytest.raises(ValueError) as exc:
            parse_tool_catalog("tools:\n" + entry + entry)

        assert "duplicated tool name 'echo_search'" in str(exc.value)
