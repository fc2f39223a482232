# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

import logging

import requests
from injector import inject

from searchtoolkit import __version__
from searchtoolkit.common.config import TransportSettings
from searchtoolkit.common.exceptions import SearchToolkitException


class CallServiceClient:
    """
    Thin blocking wrapper over `requests`.

    Every call makes exactly one attempt and returns (body_text, status_code);
    the body is left unparsed so callers can report it verbatim. Query
    strings arrive pre-encoded inside the URL and are sent as built.
    """

    @inject
    def __init__(self, settings: TransportSettings):
        self.settings = settings
        self.headers = {
            'Accept': 'application/json',
            'User-Agent': f'searchtoolkit/{__version__}',
        }

    def get(self, endpoint: str, headers: dict = None, timeout=None):
        try:
            response = requests.get(endpoint,
                                    headers=self._merge_headers(headers),
                                    timeout=timeout or self.settings.timeout)
        except requests.RequestException as e:
            raise self._transport_error(e) from e

        return response.text, response.status_code

    def post(self, endpoint: str, json_dict: dict, headers: dict = None, timeout=None):
        try:
            response = requests.post(endpoint,
                                     json=json_dict,
                                     headers=self._merge_headers(headers),
                                     timeout=timeout or self.settings.timeout)
        except requests.RequestException as e:
            raise self._transport_error(e) from e

        return response.text, response.status_code

    def _merge_headers(self, headers: dict | None) -> dict:
        merged = dict(self.headers)
        merged.update(headers or {})
        return merged

    @staticmethod
    def _transport_error(e: Exception) -> SearchToolkitException:
        logging.warning(f"HTTP transport error: {e}")
        return SearchToolkitException(
            SearchToolkitException.ErrorType.REQUEST_ERROR,
            f"HTTP request failed: {e}"
        )
