from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

import requests

from ..config import REQUEST_HEADERS, Settings, redact_api_key
from ..datamodels import FetchFailure, FetchResult, FetchSuccess, Story
from ..exceptions import HttpStatusError, NetworkError, ParseError
from .base import Source

logger = logging.getLogger("top_stories")


def filter_titled(records: Iterable[Any]) -> List[Story]:
    """Keep records with a non-empty string title, in their original order."""
    stories: List[Story] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        title = record.get("title")
        if isinstance(title, str) and title:
            stories.append(Story.from_record(record))
    return stories


class NYTSource(Source):
    """New York Times Top Stories API, one section per instance."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        return s

    def _redact(self, error: Exception) -> str:
        # requests puts the full request URL, query included, in its messages
        return redact_api_key(str(error), self.settings.api_key)

    def build_url(self) -> str:
        return f"{self.settings.base_url}/topstories/v2/{self.settings.section}.json"

    def get_top_stories(self) -> FetchResult:
        url = self.build_url()
        logger.debug("Fetching %s", url)
        try:
            resp = self.session.get(
                url,
                params={"api-key": self.settings.api_key},
                timeout=self.settings.timeout,
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else 0
            logger.warning("Top stories request to %s returned HTTP %s", url, status)
            return FetchFailure(
                HttpStatusError(f"Request failed with status code {status}", status_code=status)
            )
        except requests.Timeout as e:
            logger.warning(
                "Top stories request to %s timed out: %s", url, self._redact(e)
            )
            return FetchFailure(
                NetworkError(f"Request timed out after {self.settings.timeout:g} seconds")
            )
        except requests.RequestException as e:
            reason = self._redact(e)
            logger.warning("Top stories request to %s failed: %s", url, reason)
            return FetchFailure(NetworkError(f"Network error: {reason}"))

        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning("Response from %s is not valid JSON: %s", url, e)
            return FetchFailure(ParseError("Response body is not valid JSON"))

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            logger.warning("Response from %s has no 'results' list", url)
            return FetchFailure(ParseError("Response is missing a 'results' list"))

        stories = filter_titled(results)
        logger.debug(
            "Fetched %d stories from %s (%d without a title dropped)",
            len(stories),
            url,
            len(results) - len(stories),
        )
        return FetchSuccess(stories)
