from __future__ import annotations

import logging
import webbrowser
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.worker import Worker, WorkerState
from textual.widgets import Header, ListView, Static

from .config import LOADING_TEXT, Settings, load_settings
from .datamodels import FetchFailure, Story, ViewState, derive_view_state
from .sources.base import Source
from .sources.nyt import NYTSource
from .widgets import ErrorMessage, StoryItem

logger = logging.getLogger("top_stories")


class TopStoriesApp(App):
    TITLE = "Top Stories"

    CSS = """
    #content {
        padding: 0 1;
    }
    .pane-title {
        text-style: bold;
        padding-bottom: 1;
    }
    #stories-list {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        source: Optional[Source] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if source is None:
            source = NYTSource(settings or load_settings())
        self.source = source
        self.stories: List[Story] = []
        self.error: Optional[BaseException] = None

    @property
    def view_state(self) -> ViewState:
        return derive_view_state(self.stories, self.error)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="content"):
            yield Static(LOADING_TEXT, id="loading")

    def on_mount(self) -> None:
        # One fetch per mount; nothing schedules another.
        self.run_worker(
            self.source.get_top_stories,
            name="stories_loader",
            thread=True,
            exit_on_error=False,
        )

    async def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if getattr(event.worker, "name", None) != "stories_loader":
            return
        if not self.is_running:
            return

        if event.state is WorkerState.SUCCESS:
            result = event.worker.result
            if isinstance(result, FetchFailure):
                logger.error("Failed to fetch top stories: %s", result.error)
                self.error = result.error
            else:
                self.stories = list(result.stories)
                if not self.stories:
                    logger.warning("Fetch succeeded with no titled stories")
        elif event.state is WorkerState.ERROR:
            logger.error("Stories worker failed: %s", event.worker.error)
            self.error = event.worker.error
        else:
            return

        await self._show_view_state()

    async def _show_view_state(self) -> None:
        content = self.query_one("#content", Vertical)
        state = self.view_state
        await content.remove_children()

        if state is ViewState.ERROR:
            await content.mount(ErrorMessage(str(self.error)))
        elif state is ViewState.LOADING:
            await content.mount(Static(LOADING_TEXT, id="loading"))
        else:
            await content.mount(
                Static("Top Stories", classes="pane-title"),
                ListView(*[StoryItem(s) for s in self.stories], id="stories-list"),
            )
            self.query_one("#stories-list", ListView).focus()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, StoryItem):
            webbrowser.open(event.item.story.url)
