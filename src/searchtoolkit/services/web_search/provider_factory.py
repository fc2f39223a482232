from injector import inject

from searchtoolkit.common.exceptions import SearchToolkitException
from searchtoolkit.common.interfaces.web_search_provider import WebSearchProvider
from searchtoolkit.services.web_search.providers.bing_provider import BingWebSearchProvider
from searchtoolkit.services.web_search.providers.brave_provider import BraveWebSearchProvider
from searchtoolkit.services.web_search.providers.duckduckgo_provider import DuckDuckGoWebSearchProvider
from searchtoolkit.services.web_search.providers.google_provider import GoogleWebSearchProvider
from searchtoolkit.services.web_search.providers.perplexity_provider import PerplexitySearchProvider


class WebSearchProviderFactory:
    @inject
    def __init__(self,
                 bing_provider: BingWebSearchProvider,
                 brave_provider: BraveWebSearchProvider,
                 duckduckgo_provider: DuckDuckGoWebSearchProvider,
                 google_provider: GoogleWebSearchProvider,
                 perplexity_provider: PerplexitySearchProvider):
        self._providers = {
            "bing_search": bing_provider,
            "brave_search": brave_provider,
            "duckduckgo_search": duckduckgo_provider,
            "google_search": google_provider,
            "perplexity_search": perplexity_provider,
        }

    def get_provider(self, tool_name: str) -> WebSearchProvider:
        provider = self._providers.get(tool_name)
        if provider is None:
            raise SearchToolkitException(
                SearchToolkitException.ErrorType.UNKNOWN_TOOL,
                f"Unknown tool: {tool_name}"
            )
        return provider
