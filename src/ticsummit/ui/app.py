"""Main Hall of Fame application."""

from textual.app import App
from textual.binding import Binding

from ticsummit.gateways.site_api import SiteAPI
from ticsummit.services.content import ContentService
from ticsummit.services.project_list import ProjectListService
from ticsummit.ui.screens.main_screen import MainScreen
from ticsummit.ui.themes import THEMES


class HallOfFameApp(App):
    """TIC Summit Hall of Fame terminal application."""

    TITLE = "TIC Summit Hall of Fame"
    CSS_PATH = "app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, api: SiteAPI, initial_theme: str = "TIC Dark", **kwargs):
        """Initialize the app.

        Args:
            api: Client for the site's REST API, shared by every service.
            initial_theme: Name of the theme to start with.
        """
        super().__init__(**kwargs)
        self.api = api
        self.initial_theme = initial_theme
        self.project_service = ProjectListService(api)
        self.content_service = ContentService(api)

    def register_custom_themes(self) -> None:
        for theme in THEMES:
            self.register_theme(theme)

    def on_mount(self) -> None:
        """Called when app starts."""
        self.register_custom_themes()
        self.theme = self.initial_theme
        self.push_screen(MainScreen())
