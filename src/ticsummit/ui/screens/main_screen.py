from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Footer

from ticsummit.ui.modals.delete_modal import DeleteModal
from ticsummit.ui.modals.project_detail_modal import ProjectDetailModal
from ticsummit.ui.modals.project_form_modal import ProjectFormModal
from ticsummit.ui.widgets.filter_bar import FilterBar
from ticsummit.ui.widgets.project_list import ProjectList
from ticsummit.ui.widgets.title_bar import TitleBar


class MainScreen(Screen):
    """Main screen displaying the Hall of Fame listing."""

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("slash", "focus_search", "Search"),
        Binding("n", "new_project", "New"),
        Binding("delete", "delete_project", "Delete"),
        Binding("r", "refresh", "Refresh"),
        Binding("h", "help", "Help", show=False),
    ]

    def compose(self) -> ComposeResult:
        """Create the layout for the main screen."""
        with Container(id="main-container"):
            yield TitleBar(self.app.api.base_url, id="title-bar")
            yield FilterBar(id="filter-bar")
            with Container(id="content-container"):
                yield ProjectList(self.app.project_service, id="project-list")

            yield Footer(id="main-footer", show_command_palette=False)

    def on_mount(self) -> None:
        self.query_one("#project-list", ProjectList).focus_list()

    def on_filter_bar_filter_changed(self, message: FilterBar.FilterChanged) -> None:
        """Restart the listing for the new search term and category."""
        project_list = self.query_one("#project-list", ProjectList)
        project_list.start_query(message.search_term, message.category)

    def on_project_list_listing_changed(self, message: ProjectList.ListingChanged) -> None:
        self.query_one("#title-bar", TitleBar).total_count = message.state.total_count

    def on_project_list_project_selected(self, message: ProjectList.ProjectSelected) -> None:
        """Open the detail view of the selected project."""

        def on_detail_closed(likes_changed: bool) -> None:
            if likes_changed:
                self.query_one("#project-list", ProjectList).refresh_projects()

        self.app.push_screen(
            ProjectDetailModal(message.project, self.app.project_service, self.app.api.base_url),
            on_detail_closed,
        )

    def action_focus_search(self) -> None:
        self.query_one("#filter-bar", FilterBar).focus_search()

    def action_new_project(self) -> None:
        """Open the project form"""

        def on_create_result(result: bool) -> None:
            if result:
                self.query_one("#project-list", ProjectList).refresh_projects()

        self.app.push_screen(ProjectFormModal(self.app.content_service), on_create_result)

    def action_delete_project(self) -> None:
        """Delete the highlighted project"""
        project_list = self.query_one("#project-list", ProjectList)
        project = project_list.get_focused_project()

        if project is None:
            self.notify("No project selected for deletion", severity="error")
            return

        def on_delete_result(result: bool) -> None:
            if result:
                project_list.refresh_projects()
                project_list.focus_list()

        self.app.push_screen(DeleteModal(project, self.app.content_service), on_delete_result)

    def action_refresh(self) -> None:
        """Reload the current filter from its first page"""
        project_list = self.query_one("#project-list", ProjectList)
        project_list.refresh_projects()
        project_list.focus_list()

    def action_help(self) -> None:
        self.notify(
            "Help: '/' to search, 'm' to load more, 'n' for a new project, 'delete' to delete, 'r' to refresh, "
            "'q' to quit.",
            severity="information",
        )
