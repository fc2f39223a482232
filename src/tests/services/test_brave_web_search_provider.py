import json

import pytest
from unittest.mock import MagicMock

from searchtoolkit.common.exceptions import SearchToolkitException
from searchtoolkit.infra.call_service import CallServiceClient
from searchtoolkit.services.web_search.providers.brave_provider import BraveWebSearchProvider


class TestBraveWebSearchProvider:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.call_service = MagicMock(spec=CallServiceClient)
        self.provider = BraveWebSearchProvider(call_service=self.call_service)

    def test_search_builds_request_and_normalizes_results(self):
        self.call_service.get.return_value = (
            json.dumps({
                "query": {"original": "openai"},
                "web": {
                    "results": [
                        {
                            "title": "OpenAI",
                            "url": "https://openai.com",
                            "description": "OpenAI site",
                            "meta_url": {"hostname": "openai.com"},
                            "page_age": "2024-03-01T00:00:00",
                        }
                    ]
                }
            }),
            200
        )

        result = self.provider.search({
            "query": "openai gpt",
            "api_key": "token-123",
            "count": 3,
            "freshness": "pw",
            "country": "US",
            "safesearch": "strict",
            "result_filter": "web,discussions",
        })

        self.call_service.get.assert_called_once()
        args, kwargs = self.call_service.get.call_args
        assert args[0] == (
            "https://api.search.brave.com/res/v1/web/search"
            "?q=openai%20gpt&count=3&country=US&safesearch=strict&freshness=pw"
            "&result_filter=web%2Cdiscussions"
        )
        assert kwargs["headers"]["X-Subscription-Token"] == "token-123"
        assert result.is_error is None
        assert result.text == "\n".join([
            "Query: openai",
            "",
            "Search Results:",
            "",
            "1. " + "=" * 50,
            "Title: OpenAI",
            "URL: https://openai.com",
            "Description: OpenAI site",
            "Page Age: 2024-03-01T00:00:00",
            "",
        ])

    def test_search_drops_invalid_optional_values(self):
        self.call_service.get.return_value = ('{"web": {"results": []}}', 200)

        self.provider.search({
            "query": "openai",
            "api_key": "token-123",
            "count": 21,
            "offset": -1,
            "country": "",
            "search_lang": "",
            "ui_lang": 3,
            "safesearch": "STRICT",
            "freshness": "pd7",
            "result_filter": "",
        })

        args, _ = self.call_service.get.call_args
        assert args[0].endswith("/web/search?q=openai")

    def test_search_keeps_boundary_values(self):
        self.call_service.get.return_value = ('{}', 200)

        self.provider.search({"query": "openai", "api_key": "t", "count": 20, "offset": 0,
                              "search_lang": "en", "ui_lang": "en-US"})

        args, _ = self.call_service.get.call_args
        assert args[0].endswith("?q=openai&count=20&offset=0&search_lang=en&ui_lang=en-US")

    def test_discussions_are_limited_to_three(self):
        discussions = [{"title": f"Thread {i}", "url": f"https://forum.example/{i}"} for i in range(1, 6)]
        self.call_service.get.return_value = (
            json.dumps({"web": {"results": []}, "discussions": {"results": discussions}}),
            200
        )

        result = self.provider.search({"query": "openai", "api_key": "t"})

        assert result.text.startswith("No search results found.\n\nDiscussion Results:\n\n")
        assert "Discussion 3. " + "-" * 30 in result.text
        assert "Thread 4" not in result.text

    def test_search_missing_api_key_raises(self):
        with pytest.raises(SearchToolkitException) as exc:
            self.provider.search({"query": "openai", "api_key": ""})

        assert exc.value.error_type == SearchToolkitException.ErrorType.INVALID_PARAMETER
        assert "api_key" in str(exc.value)
        self.call_service.get.assert_not_called()

    def test_search_non_200_raises(self):
        self.call_service.get.return_value = ('{"error": "rate_limit"}', 429)

        with pytest.raises(SearchToolkitException) as exc:
            self.provider.search({"query": "openai", "api_key": "token-123"})

        assert exc.value.error_type == SearchToolkitException.ErrorType.REMOTE_ERROR
        assert "429" in str(exc.value)
        assert "rate_limit" in str(exc.value)

    def test_search_malformed_json_raises_parse_error(self):
        self.call_service.get.return_value = ("<html>maintenance</html>", 200)

        with pytest.raises(SearchToolkitException) as exc:
            self.provider.search({"query": "openai", "api_key": "token-123"})

        assert exc.value.error_type == SearchToolkitException.ErrorType.PARSE_ERROR
        assert str(exc.value).startswith("Failed to parse API response JSON: ")
        assert str(exc.value).endswith(". Body: <html>maintenance</html>")
