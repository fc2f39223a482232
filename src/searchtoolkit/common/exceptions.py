# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

from enum import Enum


class SearchToolkitException(Exception):
    """
    Single exception type raised along the search pipeline.

    The service layer turns it into an error result, so callers of
    WebSearchService never see it.
    """

    class ErrorType(Enum):
        UNKNOWN_TOOL = 1
        MISSING_PARAMETER = 2
        INVALID_PARAMETER = 3
        REQUEST_ERROR = 4       # transport failure, no status received
        REMOTE_ERROR = 5        # provider answered outside 2xx
        PARSE_ERROR = 6
        CONFIG_ERROR = 7

    def __init__(self, error_type: ErrorType, message: str, status_code: int | None = None):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.status_code = status_code

    def __str__(self):
        return self.message
