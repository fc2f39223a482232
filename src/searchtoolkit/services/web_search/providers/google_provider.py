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
    optional_int,
    optional_string,
    require_string,
)
from searchtoolkit.services.web_search.pipeline import BaseSearchProvider
from searchtoolkit.services.web_search.rendering import Field, Layout, ListSection


SAFE_VALUES = ("active", "off")
SEARCH_TYPE_VALUES = ("image",)

# (parameter, wire name) for the free-form string filters, in request order
STRING_FILTERS = (
    ("lr", "lr"),
    ("gl", "gl"),
    ("cr", "cr"),
    ("date_restrict", "dateRestrict"),
    ("site_search", "siteSearch"),
)


@dataclass(frozen=True)
class GoogleSearchParams:
    query: str
    api_key: str
    search_engine_id: str
    num: Optional[int] = None
    start: Optional[int] = None
    safe: Optional[str] = None
    lr: Optional[str] = None
    gl: Optional[str] = None
    cr: Optional[str] = None
    date_restrict: Optional[str] = None
    site_search: Optional[str] = None
    search_type: Optional[str] = None


class GoogleWebSearchProvider(BaseSearchProvider):
    """Google Custom Search JSON API. The key travels in the query string."""

    TOOL_NAME = "google_search"
    BASE_URL = "https://www.googleapis.com/customsearch/v1"
    MAX_RESULTS = 10
    # the API never serves past result 100
    MAX_START = 91

    LAYOUT = Layout(parts=(
        Field(("searchInformation", "formattedTotalResults"), "Total Results: {value}"),
        Field(("searchInformation", "formattedSearchTime"), "Search Time: {value} seconds"),
        ListSection(
            ("items",),
            heading=("", "Search Results:", ""),
            item_header="{index}. " + "=" * 50,
            fields=(
                Field(("title",), "Title: {value}"),
                Field(("link",), "URL: {value}"),
                Field(("displayLink",), "Display Link: {value}"),
                Field(("snippet",), "Snippet: {value}"),
            ),
            placeholder="No search results found.",
        ),
        Field(("spelling", "correctedQuery"), "\nDid you mean: {value}"),
    ))

    def parse_arguments(self, arguments: Mapping[str, Any]) -> GoogleSearchParams:
        return GoogleSearchParams(
            query=require_string(arguments, "query"),
            api_key=require_string(arguments, "api_key"),
            search_engine_id=require_string(arguments, "search_engine_id"),
            num=optional_int(arguments, "num", 1, self.MAX_RESULTS),
            start=optional_int(arguments, "start", 1, self.MAX_START),
            safe=optional_choice(arguments, "safe", SAFE_VALUES),
            search_type=optional_choice(arguments, "search_type", SEARCH_TYPE_VALUES),
            **{name: optional_string(arguments, name) for name, _ in STRING_FILTERS},
        )

    def build_request(self, params: GoogleSearchParams) -> OutboundRequest:
        query = [
            ("key", encode(params.api_key)),
            ("cx", encode(params.search_engine_id)),
            ("q", encode(params.query)),
        ]

        if params.num is not None:
            query.append(("num", str(params.num)))
        if params.start is not None:
            query.append(("start", str(params.start)))
        if params.safe is not None:
            query.append(("safe", params.safe))

        for name, wire_name in STRING_FILTERS:
            value = getattr(params, name)
            if value is not None:
                query.append((wire_name, encode(value)))

        if params.search_type is not None:
            query.append(("searchType", params.search_type))

        return OutboundRequest(method="GET", base_url=self.BASE_URL, query=query)
