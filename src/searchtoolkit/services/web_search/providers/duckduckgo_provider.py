# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from searchtoolkit.services.web_search.contracts import OutboundRequest
from searchtoolkit.services.web_search.params import (
    encode,
    optional_choice,
    optional_flag,
    require_string,
)
from searchtoolkit.services.web_search.pipeline import BaseSearchProvider
from searchtoolkit.services.web_search.rendering import (
    Field,
    Layout,
    Line,
    ListSection,
    as_duckduckgo_url,
    as_nonempty_string,
    as_string,
)


FORMAT_VALUES = ("json", "xml")
# appended as name=1, in this order, only when set to true
FLAG_PARAMETERS = ("pretty", "no_html", "no_redirect", "skip_disambig")
FORMAT_SLOT = 1


@dataclass(frozen=True)
class DuckDuckGoSearchParams:
    query: str
    format: Optional[str] = None
    pretty: bool = False
    no_html: bool = False
    no_redirect: bool = False
    skip_disambig: bool = False


class DuckDuckGoWebSearchProvider(BaseSearchProvider):
    """
    DuckDuckGo Instant Answer API. No key required; the response carries
    instant answers, definitions and related topics rather than a ranked list.
    """

    TOOL_NAME = "duckduckgo_search"
    BASE_URL = "https://api.duckduckgo.com/"

    LAYOUT = Layout(
        parts=(
            Field(("Heading",), "Query: {query}\nHeading: {value}\n", kind=as_string),
            Field(("AbstractText",), "Instant Answer:\n{value}\n", kind=as_nonempty_string, details=(
                Field(("AbstractSource",), "Source: {value}"),
                Field(("AbstractURL",), "URL: {value}"),
                Line(),
            )),
            Field(("Answer",), "Answer:\n{value}\n", kind=as_nonempty_string),
            Field(("Definition",), "Definition:\n{value}", kind=as_nonempty_string, details=(
                Field(("DefinitionSource",), "Definition Source: {value}"),
                Field(("DefinitionURL",), "Definition URL: {value}"),
                Line(),
            )),
            ListSection(
                ("RelatedTopics",),
                heading=("Related Topics:", ""),
                fields=(
                    Field(("Text",), "{index}. {value}", details=(
                        Field(("FirstURL",), "   URL: {value}", kind=as_duckduckgo_url),
                        Line(),
                    )),
                    # topic groups carry a Name and nested Topics instead of Text
                    Field(("Name",), "Category: {value}"),
                    ListSection(
                        ("Topics",),
                        fields=(
                            Field(("Text",), "   {index}. {value}", details=(
                                Field(("FirstURL",), "      URL: {value}", kind=as_duckduckgo_url),
                            )),
                        ),
                        item_footer=(),
                    ),
                ),
            ),
            ListSection(
                ("Results",),
                heading=("Search Results:", ""),
                item_header="{index}.",
                fields=(
                    Field(("Text",), "   Text: {value}"),
                    Field(("FirstURL",), "   URL: {value}", kind=as_duckduckgo_url),
                ),
            ),
        ),
        placeholder="No results found for the query.",
    )

    def parse_arguments(self, arguments: Mapping[str, Any]) -> DuckDuckGoSearchParams:
        query = require_string(arguments, "query")
        flags = {name: optional_flag(arguments, name) is True for name in FLAG_PARAMETERS}
        return DuckDuckGoSearchParams(
            query=query,
            format=optional_choice(arguments, "format", FORMAT_VALUES),
            **flags,
        )

    def build_request(self, params: DuckDuckGoSearchParams) -> OutboundRequest:
        query = [("q", encode(params.query)), ("format", "json")]

        if params.format is not None:
            query[FORMAT_SLOT] = ("format", params.format)

        for name in FLAG_PARAMETERS:
            if getattr(params, name):
                query.append((name, "1"))

        return OutboundRequest(method="GET", base_url=self.BASE_URL, query=query)

    def render_context(self, params: DuckDuckGoSearchParams) -> dict[str, Any]:
        return {"query": params.query}
