# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

from __future__ import annotations

import abc
import json
import logging
from collections.abc import Mapping
from typing import Any

from injector import inject

from searchtoolkit.common.exceptions import SearchToolkitException
from searchtoolkit.common.interfaces.web_search_provider import WebSearchProvider
from searchtoolkit.infra.call_service import CallServiceClient
from searchtoolkit.services.web_search.contracts import InboundResponse, OutboundRequest, ToolResult
from searchtoolkit.services.web_search.params import ensure_arguments
from searchtoolkit.services.web_search.rendering import Layout


class BaseSearchProvider(WebSearchProvider):
    """
    One round trip shared by every provider:
    validate -> build request -> call -> check status -> parse -> render.

    Subclasses supply the parameter parsing, the request builder and a
    declarative Layout. Instances hold no per-call state.
    """

    TOOL_NAME: str = ""
    BASE_URL: str = ""
    LAYOUT: Layout = Layout(parts=())

    @inject
    def __init__(self, call_service: CallServiceClient):
        self.call_service = call_service

    @abc.abstractmethod
    def parse_arguments(self, arguments: Mapping[str, Any]):
        """Validate raw arguments into the provider's typed parameters."""

    @abc.abstractmethod
    def build_request(self, params) -> OutboundRequest:
        pass

    def render_context(self, params) -> dict[str, Any]:
        return {}

    def search(self, arguments: Mapping[str, Any]) -> ToolResult:
        params = self.parse_arguments(ensure_arguments(arguments))
        request = self.build_request(params)
        response = self._send(request)
        return ToolResult.success(self.normalize(response, params))

    def normalize(self, response: InboundResponse, params) -> str:
        if not response.ok:
            logging.warning(f"{self.TOOL_NAME}: provider answered with status {response.status_code}")
            raise SearchToolkitException(
                SearchToolkitException.ErrorType.REMOTE_ERROR,
                f"API request failed with status {response.status_code}: {response.body}",
                status_code=response.status_code,
            )

        try:
            data = json.loads(response.body)
        except json.JSONDecodeError as e:
            raise SearchToolkitException(
                SearchToolkitException.ErrorType.PARSE_ERROR,
                f"Failed to parse API response JSON: {e}. Body: {response.body}"
            ) from e

        return self.LAYOUT.render(data, self.render_context(params))

    def _send(self, request: OutboundRequest) -> InboundResponse:
        # the query string is not logged: Google carries its key there
        logging.info(f"{self.TOOL_NAME}: {request.method} {request.base_url}")

        if request.method == "GET":
            body, status_code = self.call_service.get(request.url, headers=request.headers)
        elif request.method == "POST":
            body, status_code = self.call_service.post(request.url,
                                                       json_dict=request.json_body,
                                                       headers=request.headers)
        else:
            raise SearchToolkitException(
                SearchToolkitException.ErrorType.INVALID_PARAMETER,
                f"HTTP method '{request.method}' is not supported"
            )

        return InboundResponse(status_code=status_code, body=body)
