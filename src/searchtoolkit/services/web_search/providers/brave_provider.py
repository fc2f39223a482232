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


SAFESEARCH_VALUES = ("strict", "moderate", "off")
FRESHNESS_VALUES = ("pd", "pw", "pm", "py")


@dataclass(frozen=True)
class BraveSearchParams:
    query: str
    api_key: str
    count: Optional[int] = None
    offset: Optional[int] = None
    country: Optional[str] = None
    search_lang: Optional[str] = None
    ui_lang: Optional[str] = None
    safesearch: Optional[str] = None
    freshness: Optional[str] = None
    result_filter: Optional[str] = None


class BraveWebSearchProvider(BaseSearchProvider):
    TOOL_NAME = "brave_search"
    BASE_URL = "https://api.search.brave.com/res/v1/web/search"
    MAX_RESULTS = 20

    LAYOUT = Layout(parts=(
        Field(("query", "original"), "Query: {value}"),
        ListSection(
            ("web", "results"),
            heading=("", "Search Results:", ""),
            item_header="{index}. " + "=" * 50,
            fields=(
                Field(("title",), "Title: {value}"),
                Field(("url",), "URL: {value}"),
                Field(("description",), "Description: {value}"),
                Field(("page_age",), "Page Age: {value}"),
            ),
            placeholder="No search results found.",
        ),
        ListSection(
            ("discussions", "results"),
            heading=("", "Discussion Results:", ""),
            item_header="Discussion {index}. " + "-" * 30,
            fields=(
                Field(("title",), "Title: {value}"),
                Field(("url",), "URL: {value}"),
            ),
            limit=3,
        ),
    ))

    def parse_arguments(self, arguments: Mapping[str, Any]) -> BraveSearchParams:
        return BraveSearchParams(
            query=require_string(arguments, "query"),
            api_key=require_string(arguments, "api_key"),
            count=optional_int(arguments, "count", 1, self.MAX_RESULTS),
            offset=optional_int(arguments, "offset", 0),
            country=optional_string(arguments, "country", allow_empty=False),
            search_lang=optional_string(arguments, "search_lang", allow_empty=False),
            ui_lang=optional_string(arguments, "ui_lang", allow_empty=False),
            safesearch=optional_choice(arguments, "safesearch", SAFESEARCH_VALUES),
            freshness=optional_choice(arguments, "freshness", FRESHNESS_VALUES),
            result_filter=optional_string(arguments, "result_filter", allow_empty=False),
        )

    def build_request(self, params: BraveSearchParams) -> OutboundRequest:
        query = [("q", encode(params.query))]

        if params.count is not None:
            query.append(("count", str(params.count)))
        if params.offset is not None:
            query.append(("offset", str(params.offset)))
        if params.country is not None:
            query.append(("country", encode(params.country)))
        if params.search_lang is not None:
            query.append(("search_lang", encode(params.search_lang)))
        if params.ui_lang is not None:
            query.append(("ui_lang", encode(params.ui_lang)))
        if params.safesearch is not None:
            query.append(("safesearch", params.safesearch))
        if params.freshness is not None:
            query.append(("freshness", params.freshness))
        if params.result_filter is not None:
            query.append(("result_filter", encode(params.result_filter)))

        return OutboundRequest(
            method="GET",
            base_url=self.BASE_URL,
            query=query,
            headers={"X-Subscription-Token": params.api_key},
        )
