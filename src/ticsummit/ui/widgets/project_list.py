from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, LoadingIndicator, Static

from ticsummit.models import ALL_CATEGORIES, Project
from ticsummit.services.listing_loader import IncrementalListingLoader, ListState
from ticsummit.services.project_list import ProjectListService
from ticsummit.ui.utils import format_project_stats, format_tags, truncate

DESCRIPTION_WIDTH = 96


class ProjectItem(ListItem):
    """Individual project row"""

    def __init__(self, project: Project):
        super().__init__()
        self.project = project

    def compose(self) -> ComposeResult:
        with Vertical(classes="project-item"):
            with Horizontal(classes="project-heading"):
                yield Label(self.project.title, classes="project-title")
                yield Label(self.project.category, classes="project-category")
                yield Label(format_project_stats(self.project), classes="project-stats")
            yield Label(truncate(self.project.description, DESCRIPTION_WIDTH), classes="project-description")
            yield Label(format_tags(self.project.tech_stack), classes="project-tags")


class ProjectList(Static):
    """Hall of Fame listing, loaded a page at a time as the user scrolls."""

    BINDINGS = [
        Binding("m", "load_more", "Load more"),
    ]

    loader: IncrementalListingLoader | None = None
    # (epoch, number of items) currently shown in the ListView
    _rendered: tuple[int, int] = (0, 0)

    class ProjectSelected(Message):
        """Message sent when a project is selected."""

        def __init__(self, project: Project) -> None:
            super().__init__()
            self.project = project

    class ListingChanged(Message):
        """Message sent after every listing state transition."""

        def __init__(self, state: ListState) -> None:
            super().__init__()
            self.state = state

    def __init__(self, service: ProjectListService, **kwargs):
        super().__init__(**kwargs)
        self.service = service

    def compose(self) -> ComposeResult:
        with Vertical(id="project-list-container"):
            yield Static("Projects", id="project-panel-title")
            yield LoadingIndicator(id="project-loading")
            yield ListView(id="project-list-view")
            yield Static("", id="project-list-status")

    def on_mount(self) -> None:
        """Create the loader and load the unfiltered first page."""
        self.loader = IncrementalListingLoader(self.service.fetch_page, on_change=self._on_state_changed)
        list_view = self.query_one("#project-list-view", ListView)
        self.watch(list_view, "scroll_y", self._on_scroll_changed, init=False)
        self.start_query("", ALL_CATEGORIES)

    def on_unmount(self) -> None:
        self.loader = None

    # Loading

    @work(group="project-listing")
    async def start_query(self, search_term: str, category: str) -> None:
        if self.loader:
            await self.loader.start_new_query(search_term, category)

    @work(group="project-listing")
    async def load_more(self) -> None:
        if self.loader:
            await self.loader.load_next_page()

    @work(group="project-listing")
    async def _load_more_on_scroll(self, scroll_top: float, viewport_height: float, document_height: float) -> None:
        if self.loader:
            await self.loader.on_scroll(scroll_top, viewport_height, document_height)

    def refresh_projects(self) -> None:
        """Restart the current filter from its first page."""
        if self.loader:
            self.start_query(*self.loader.state.query.signature)

    def _on_scroll_changed(self, scroll_y: float) -> None:
        list_view = self.query_one("#project-list-view", ListView)
        self._load_more_on_scroll(scroll_y, list_view.size.height, list_view.virtual_size.height)

    # Rendering

    def _on_state_changed(self, state: ListState) -> None:
        if not self.is_mounted:
            return
        self._update_loading_state(state)
        self._update_list_display(state)
        self._update_status(state)
        self.post_message(self.ListingChanged(state))

    def _update_loading_state(self, state: ListState) -> None:
        loading_indicator = self.query_one("#project-loading", LoadingIndicator)
        list_view = self.query_one("#project-list-view", ListView)
        loading_indicator.display = state.is_initial_loading
        list_view.display = not state.is_initial_loading

    def _update_list_display(self, state: ListState) -> None:
        """Append newly loaded projects, or rebuild the list when the epoch changed."""
        list_view = self.query_one("#project-list-view", ListView)
        rendered_epoch, rendered_count = self._rendered

        if rendered_epoch != state.epoch or rendered_count > len(state.items):
            list_view.clear()
            rendered_count = 0

        new_items = state.items[rendered_count:]
        if new_items:
            list_view.extend(ProjectItem(project) for project in new_items)
            if list_view.index is None:
                list_view.index = 0

        self._rendered = (state.epoch, len(state.items))

    def _update_status(self, state: ListState) -> None:
        title = self.query_one("#project-panel-title", Static)
        status = self.query_one("#project-list-status", Static)

        if state.is_initial_loading:
            title.update("Projects")
            status.update("")
            return

        title.update(f"Projects ({len(state.items)} of {state.total_count})")
        if state.is_loading_more:
            status.update("Loading more…")
        elif not state.items:
            status.update("No projects found\nTry adjusting your search or filter criteria")
        elif not state.has_more:
            status.update(f"All {len(state.items)} projects loaded")
        else:
            status.update("Scroll down or press m for more")

    # Event handlers

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, ProjectItem):
            self.post_message(self.ProjectSelected(event.item.project))

    def action_load_more(self) -> None:
        self.load_more()

    # Utility methods

    def get_focused_project(self) -> Project | None:
        """Get the project under the list cursor."""
        list_view = self.query_one("#project-list-view", ListView)
        item = list_view.highlighted_child
        if isinstance(item, ProjectItem):
            return item.project
        return None

    def focus_list(self) -> None:
        list_view = self.query_one("#project-list-view", ListView)
        list_view.focus()
