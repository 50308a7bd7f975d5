"""Search and category filter for the Hall of Fame listing."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.timer import Timer
from textual.widgets import Input, Select, Static

from ticsummit.constants import FILTER_DEBOUNCE_MS
from ticsummit.models import ALL_CATEGORIES, PROJECT_CATEGORIES

CATEGORY_OPTIONS = [("All Categories", ALL_CATEGORIES)] + [(category, category) for category in PROJECT_CATEGORIES]


class FilterBar(Static):
    """Widget holding the search input and the category select."""

    _debounce_timer: Timer | None = None
    _last_filter: tuple[str, str] = ("", ALL_CATEGORIES)

    class FilterChanged(Message):
        """Message sent when the effective filter changes."""

        def __init__(self, search_term: str, category: str) -> None:
            super().__init__()
            self.search_term = search_term
            self.category = category

    def compose(self) -> ComposeResult:
        with Horizontal(id="filter-bar-container"):
            yield Input(placeholder="Search projects...", id="search-input")
            yield Select(CATEGORY_OPTIONS, value=ALL_CATEGORIES, allow_blank=False, id="category-select")

    @property
    def current_filter(self) -> tuple[str, str]:
        search_term = self.query_one("#search-input", Input).value.strip()
        category = self.query_one("#category-select", Select).value
        if category is Select.BLANK:
            category = ALL_CATEGORIES
        return search_term, category

    def focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Debounce typing before the listing restarts."""
        event.stop()
        if self._debounce_timer is not None:
            self._debounce_timer.stop()
        self._debounce_timer = self.set_timer(FILTER_DEBOUNCE_MS / 1000, self._emit_filter)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if self._debounce_timer is not None:
            self._debounce_timer.stop()
        self._emit_filter()

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        self._emit_filter()

    def _emit_filter(self) -> None:
        self._debounce_timer = None
        current = self.current_filter
        # Whitespace-only edits leave the filter unchanged
        if current == self._last_filter:
            return
        self._last_filter = current
        self.post_message(self.FilterChanged(*current))
