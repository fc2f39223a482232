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
from searchtoolkit.services.web_search.rendering import (
    Field,
    Layout,
    ListSection,
    as_string_or_integer,
)


SAFE_SEARCH_VALUES = ("Off", "Moderate", "Strict")
FRESHNESS_VALUES = ("Day", "Week", "Month")


@dataclass(frozen=True)
class BingSearchParams:
    query: str
    api_key: str
    count: Optional[int] = None
    offset: Optional[int] = None
    mkt: Optional[str] = None
    safe_search: Optional[str] = None
    freshness: Optional[str] = None
    response_filter: Optional[str] = None
    set_lang: Optional[str] = None


def parse_freshness(arguments: Mapping[str, Any]) -> Optional[str]:
    """Accepts Day/Week/Month or an explicit range such as 2024-01-01..2024-02-01."""
    value = optional_string(arguments, "freshness")
    if value is None:
        return None
    if value in FRESHNESS_VALUES or ".." in value:
        return value
    return optional_choice(arguments, "freshness", FRESHNESS_VALUES)


class BingWebSearchProvider(BaseSearchProvider):
    TOOL_NAME = "bing_search"
    BASE_URL = "https://api.bing.microsoft.com/v7.0/search"
    MAX_RESULTS = 50

    LAYOUT = Layout(parts=(
        Field(("webPages", "totalEstimatedMatches"), "Total Results: {value}", kind=as_string_or_integer),
        Field(("webPages", "webSearchUrl"), "Search URL: {value}"),
        ListSection(
            ("webPages", "value"),
            heading=("", "Web Search Results:", ""),
            item_header="{index}. " + "=" * 50,
            fields=(
                Field(("name",), "Title: {value}"),
                Field(("url",), "URL: {value}"),
                Field(("displayUrl",), "Display URL: {value}"),
                Field(("snippet",), "Snippet: {value}"),
                Field(("dateLastCrawled",), "Last Crawled: {value}"),
            ),
            placeholder="No search results found.",
        ),
        Field(("spellSuggestions", "value", 0, "text"), "\nDid you mean: {value}"),
        ListSection(
            ("relatedSearches", "value"),
            heading=("", "Related Searches:"),
            fields=(Field(("text",), "{index}. {value}"),),
            item_footer=(),
        ),
    ))

    def parse_arguments(self, arguments: Mapping[str, Any]) -> BingSearchParams:
        return BingSearchParams(
            query=require_string(arguments, "query"),
            api_key=require_string(arguments, "api_key"),
            count=optional_int(arguments, "count", 1, self.MAX_RESULTS),
            offset=optional_int(arguments, "offset", 0),
            mkt=optional_string(arguments, "mkt"),
            safe_search=optional_choice(arguments, "safe_search", SAFE_SEARCH_VALUES),
            freshness=parse_freshness(arguments),
            response_filter=optional_string(arguments, "response_filter"),
            set_lang=optional_string(arguments, "set_lang"),
        )

    def build_request(self, params: BingSearchParams) -> OutboundRequest:
        query = [("q", encode(params.query))]

        if params.count is not None:
            query.append(("count", str(params.count)))
        if params.offset is not None:
            query.append(("offset", str(params.offset)))
        if params.mkt is not None:
            query.append(("mkt", encode(params.mkt)))
        if params.safe_search is not None:
            query.append(("safeSearch", params.safe_search))
        if params.freshness is not None:
            # date ranges are free-form, the named periods are not
            freshness = params.freshness
            if freshness not in FRESHNESS_VALUES:
                freshness = encode(freshness)
            query.append(("freshness", freshness))
        if params.response_filter is not None:
            query.append(("responseFilter", encode(params.response_filter)))
        if params.set_lang is not None:
            query.append(("setLang", encode(params.set_lang)))

        return OutboundRequest(
            method="GET",
            base_url=self.BASE_URL,
            query=query,
            headers={"Ocp-Apim-Subscription-Key": params.api_key},
        )
