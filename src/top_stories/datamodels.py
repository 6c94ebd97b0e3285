from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from .exceptions import FetchError


# --- Data models ---
@dataclass(frozen=True)
class Story:
    uri: str
    url: str
    title: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Story":
        return cls(
            uri=str(record.get("uri") or ""),
            url=str(record.get("url") or ""),
            title=record["title"],
        )


# --- Fetch results ---
@dataclass(frozen=True)
class FetchSuccess:
    stories: List[Story] = field(default_factory=list)

    @property
    def error(self) -> None:
        return None

    def __iter__(self) -> Iterator[Any]:
        return iter((self.stories, None))


@dataclass(frozen=True)
class FetchFailure:
    error: FetchError

    @property
    def stories(self) -> List[Story]:
        return []

    def __iter__(self) -> Iterator[Any]:
        return iter(([], self.error))


FetchResult = Union[FetchSuccess, FetchFailure]


# --- View state ---
class ViewState(Enum):
    LOADING = "loading"
    ERROR = "error"
    LOADED = "loaded"


def derive_view_state(stories: Sequence[Story], error: Optional[BaseException]) -> ViewState:
    """Compute the display mode from the current stories and error.

    An empty story list with no error reads as LOADING, including after a
    successful fetch that returned nothing.
    """
    if error is not None:
        return ViewState.ERROR
    if not stories:
        return ViewState.LOADING
    return ViewState.LOADED
