from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from injector import inject

from searchtoolkit.common.exceptions import SearchToolkitException
from searchtoolkit.services.web_search.contracts import ToolInvocation, ToolResult
from searchtoolkit.services.web_search.provider_factory import WebSearchProviderFactory
from searchtoolkit.services.web_search.tool_catalog import ToolCatalog


class WebSearchService:
    """
    Invocation boundary for the search tools.

    Every outcome, including unknown tools, bad arguments and provider
    failures, comes back as a ToolResult; nothing is raised to the caller.
    """

    @inject
    def __init__(self,
                 provider_factory: WebSearchProviderFactory,
                 tool_catalog: ToolCatalog):
        self.provider_factory = provider_factory
        self.tool_catalog = tool_catalog

    def call_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        return self.handle(ToolInvocation(name=name, arguments=arguments))

    def handle(self, invocation: ToolInvocation) -> ToolResult:
        try:
            provider = self.provider_factory.get_provider(invocation.name)
            return provider.search(invocation.arguments)
        except SearchToolkitException as e:
            logging.warning(f"Tool call '{invocation.name}' failed ({e.error_type.name}): {e}")
            return ToolResult.error(str(e))
        except Exception as e:
            logging.exception(e)
            return ToolResult.error(f"Error in tool call '{invocation.name}': {str(e)}")

    def list_tools(self) -> list[dict]:
        return self.tool_catalog.list_tools()
