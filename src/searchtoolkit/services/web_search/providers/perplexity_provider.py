# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from searchtoolkit.services.web_search.contracts import OutboundRequest
from searchtoolkit.services.web_search.params import (
    optional_choice,
    optional_flag,
    optional_int,
    optional_number,
    optional_string,
    require_string,
)
from searchtoolkit.services.web_search.pipeline import BaseSearchProvider
from searchtoolkit.services.web_search.rendering import (
    Field,
    Layout,
    Line,
    ListSection,
    as_cost,
    as_integer,
    as_present,
)


MODEL_VALUES = ("sonar-pro", "sonar-reasoning", "sonar-deep-research")
RECENCY_VALUES = ("month", "week", "day", "hour")
RETURN_FLAGS = ("return_citations", "return_images", "return_related_questions")

DEFAULT_BODY = {
    "model": "sonar-pro",
    "messages": [],
    "max_tokens": 1000,
    "temperature": 0.2,
    "top_p": 0.9,
    "return_citations": True,
    "return_images": False,
    "return_related_questions": False,
    "search_recency_filter": "month",
}


@dataclass(frozen=True)
class PerplexitySearchParams:
    query: str
    api_key: str
    system_message: Optional[str] = None
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    search_recency_filter: Optional[str] = None
    return_citations: Optional[bool] = None
    return_images: Optional[bool] = None
    return_related_questions: Optional[bool] = None


class PerplexitySearchProvider(BaseSearchProvider):
    """
    Perplexity Sonar chat completions: one POST whose answer is rendered
    together with its citations, search results and token usage.
    """

    TOOL_NAME = "perplexity_search"
    BASE_URL = "https://api.perplexity.ai/chat/completions"
    MAX_TOKENS = 4096
    MAX_TEMPERATURE = 2.0
    SEARCH_RESULTS_SHOWN = 5

    LAYOUT = Layout(
        parts=(
            Field(("choices", 0, "message", "content"), "Response:\n{value}\n"),
            ListSection(
                ("citations",),
                heading=("Sources:",),
                fields=(Field((), "{index}. {value}"),),
                item_footer=(),
                footer=("",),
            ),
            ListSection(
                ("search_results",),
                heading=("Search Results:", ""),
                item_header="{index}.",
                fields=(
                    Field(("title",), "   Title: {value}"),
                    Field(("url",), "   URL: {value}"),
                    Field(("snippet",), "   Snippet: {value}"),
                    Field(("date",), "   Date: {value}"),
                ),
                limit=SEARCH_RESULTS_SHOWN,
            ),
            # a null or non-object usage prints no usage block at all
            Field(("usage",), "Usage Information:", kind=as_present, details=(
                Field(("usage", "prompt_tokens"), "   Prompt tokens: {value}", kind=as_integer),
                Field(("usage", "completion_tokens"), "   Completion tokens: {value}", kind=as_integer),
                Field(("usage", "total_tokens"), "   Total tokens: {value}", kind=as_integer),
                Field(("usage", "cost", "total_cost"), "   Total cost: ${value}", kind=as_cost),
                Line(),
            )),
        ),
        placeholder="No response generated for the query.",
    )

    def parse_arguments(self, arguments: Mapping[str, Any]) -> PerplexitySearchParams:
        query = require_string(arguments, "query")
        api_key = require_string(arguments, "api_key")

        # the return_* booleans are forwarded as given, with no further checks
        flags = {name: optional_flag(arguments, name) for name in RETURN_FLAGS}

        return PerplexitySearchParams(
            query=query,
            api_key=api_key,
            system_message=optional_string(arguments, "system_message", allow_empty=False),
            model=optional_choice(arguments, "model", MODEL_VALUES),
            max_tokens=optional_int(arguments, "max_tokens", 1, self.MAX_TOKENS),
            temperature=optional_number(arguments, "temperature", 0.0, self.MAX_TEMPERATURE),
            search_recency_filter=optional_choice(arguments, "search_recency_filter", RECENCY_VALUES),
            **flags,
        )

    def build_request(self, params: PerplexitySearchParams) -> OutboundRequest:
        body = copy.deepcopy(DEFAULT_BODY)

        messages = [{"role": "user", "content": params.query}]
        if params.system_message is not None:
            messages.insert(0, {"role": "system", "content": params.system_message})
        body["messages"] = messages

        for name in ("model", "max_tokens", "temperature", "search_recency_filter") + RETURN_FLAGS:
            value = getattr(params, name)
            if value is not None:
                body[name] = value

        return OutboundRequest(
            method="POST",
            base_url=self.BASE_URL,
            headers={
                "Authorization": f"Bearer {params.api_key}",
                "Content-Type": "application/json",
            },
            json_body=body,
        )
