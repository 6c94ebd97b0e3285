"""
Exception classes for the top stories client.
Fetch failures are returned as values by the sources, never raised past them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TopStoriesError(Exception):
    """Base exception class for the top stories client"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(TopStoriesError):
    """Raised when settings are missing or invalid"""
    pass


class FetchError(TopStoriesError):
    """Base class for failures while fetching stories"""
    pass


class NetworkError(FetchError):
    """The API could not be reached (connection failure or timeout)"""
    pass


class HttpStatusError(FetchError):
    """The API answered with a non-success status code"""

    def __init__(self, message: str, status_code: int, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        super().__init__(message, details)


class ParseError(FetchError):
    """The response body was not the expected JSON envelope"""
    pass
