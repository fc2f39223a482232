import pytest
from unittest.mock import MagicMock

from searchtoolkit.common.exceptions import SearchToolkitException
from searchtoolkit.services.web_search.provider_factory import WebSearchProviderFactory
from searchtoolkit.services.web_search.providers.bing_provider import BingWebSearchProvider
from searchtoolkit.services.web_search.providers.brave_provider import BraveWebSearchProvider
from searchtoolkit.services.web_search.providers.duckduckgo_provider import DuckDuckGoWebSearchProvider
from searchtoolkit.services.web_search.providers.google_provider import GoogleWebSearchProvider
from searchtoolkit.services.web_search.providers.perplexity_provider import PerplexitySearchProvider


@pytest.fixture
def providers():
    return {
        "bing_search": MagicMock(spec=BingWebSearchProvider),
        "brave_search": MagicMock(spec=BraveWebSearchProvider),
        "duckduckgo_search": MagicMock(spec=DuckDuckGoWebSearchProvider),
        "google_search": MagicMock(spec=GoogleWebSearchProvider),
        "perplexity_search": MagicMock(spec=PerplexitySearchProvider),
    }


@pytest.fixture
def factory(providers):
    return WebSearchProviderFactory(
        bing_provider=providers["bing_search"],
        brave_provider=providers["brave_search"],
        duckduckgo_provider=providers["duckduckgo_search"],
        google_provider=providers["google_search"],
        perplexity_provider=providers["perplexity_search"],
    )


@pytest.mark.parametrize("tool_name", [
    "bing_search", "brave_search", "duckduckgo_search", "google_search", "perplexity_search"
])
def test_get_provider_by_tool_name(factory, providers, tool_name):
    assert factory.get_provider(tool_name) is providers[tool_name]


@pytest.mark.parametrize("tool_name", ["brave", "Brave_Search", "unknown", ""])
def test_get_provider_unknown_raises(factory, tool_name):
    with pytest.raises(SearchToolkitException) as exc:
        factory.get_provider(tool_name)

    assert exc.value.error_type == SearchToolkitException.ErrorType.UNKNOWN_TOOL
    assert str(exc.value) == f"Unknown tool: {tool_name}"
