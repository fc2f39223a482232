# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

"""
SearchToolkit - one calling convention for several web search providers.
"""

__version__ = "0.1.0"

from .common.exceptions import SearchToolkitException
from .services.web_search.contracts import ToolInvocation, ToolResult, Content
from .services.web_search_service import WebSearchService
from .toolkit import create_injector

__all__ = [
    "SearchToolkitException",
    "ToolInvocation",
    "ToolResult",
    "Content",
    "WebSearchService",
    "create_injector",
]
