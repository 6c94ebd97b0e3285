from __future__ import annotations

from abc import ABC, abstractmethod

from ..datamodels import FetchResult


class Source(ABC):
    """Abstract base class for a top stories source."""

    @abstractmethod
    def get_top_stories(self) -> FetchResult:
        """Fetch the current top stories.

        Implementations report failures through the returned result and do
        not raise.
        """
        pass
