import abc
from collections.abc import Mapping
from typing import Any

from searchtoolkit.services.web_search.contracts import ToolResult


class WebSearchProvider(abc.ABC):
    TOOL_NAME: str = ""

    @abc.abstractmethod
    def search(self, arguments: Mapping[str, Any]) -> ToolResult:
        """
        Execute one search for a tool invocation and return the normalized
        text result. Failures are raised as SearchToolkitException.
        """
        pass
