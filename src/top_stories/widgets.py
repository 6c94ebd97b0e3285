from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import ListItem, Static
from rich.style import Style
from rich.text import Text

from .datamodels import Story


def story_link(story: Story) -> Text:
    """Render a story as a hyperlink labelled with its title."""
    return Text(story.title, style=Style(link=story.url))


# --- UI Widgets ---
class StoryItem(ListItem):
    def __init__(self, story: Story):
        # uri keys the row so its identity survives re-renders
        super().__init__(name=story.uri)
        self.story = story
        self.link_text = story_link(story)

    def compose(self) -> ComposeResult:
        yield Static(self.link_text, classes="story-title")


class ErrorMessage(Static):
    def __init__(self, message: str):
        super().__init__(Text(message, style="bold red"))
        self.error_text = message
