from urllib.parse import urlparse

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Static


class TitleBar(Static):
    """Title bar showing the site being browsed and the listing size."""

    total_count: int = reactive(0)

    def __init__(self, base_url: str, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url

    def compose(self) -> ComposeResult:
        with Horizontal(id="title-bar-container"):
            yield Static("TIC Summit · Hall of Fame", id="title")
            with Horizontal(id="status-container"):
                yield Static("", id="project-count")
                yield Static(f"site: {urlparse(self.base_url).netloc}", id="site-info")

    def watch_total_count(self, total_count: int) -> None:
        try:
            label = "project" if total_count == 1 else "projects"
            self.query_one("#project-count", Static).update(f"{total_count} {label}")
        except NoMatches:
            # Not composed yet
            pass
