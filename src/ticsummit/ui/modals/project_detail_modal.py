"""Project detail modal with like/unlike."""

from loguru import logger
from textual import work
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from ticsummit.exceptions import TicSummitError
from ticsummit.models import Project
from ticsummit.services.project_list import ProjectListService
from ticsummit.ui.utils import build_project_url, format_count

NOT_SET = "-"


class ProjectDetailModal(ModalScreen[bool]):
    """Modal screen showing one project. Dismisses with True when the like count changed."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("l", "toggle_like", "Like / Unlike"),
    ]

    likes: int = reactive(0)
    views: int = reactive(0)
    liked: bool = reactive(False)

    def __init__(self, project: Project, project_service: ProjectListService, base_url: str) -> None:
        super().__init__()
        self.project = project
        self.project_service = project_service
        self.base_url = base_url
        self._likes_changed = False
        self.set_reactive(ProjectDetailModal.likes, project.likes)
        self.set_reactive(ProjectDetailModal.views, project.views)

    def compose(self) -> ComposeResult:
        project = self.project
        with Container(id="project-dialog"):
            with Container(id="project-dialog-header"):
                yield Label(project.title, classes="dialog-title")
                yield Label(f"{project.category} · {project.status}", classes="dialog-subtitle")

            with VerticalScroll(id="project-dialog-content"):
                yield Static(project.description or "No description provided.", id="project-description")
                with Vertical(classes="field-group"):
                    yield Label("Tech stack", classes="field-label")
                    yield Static(", ".join(project.tech_stack) or NOT_SET, classes="field-value")
                with Vertical(classes="field-group"):
                    yield Label("Team", classes="field-label")
                    yield Static(", ".join(project.members) or project.author.name or NOT_SET, classes="field-value")
                with Vertical(classes="field-group"):
                    yield Label("Year / Phase", classes="field-label")
                    yield Static(f"{project.year or NOT_SET} / {project.phase or NOT_SET}", classes="field-value")
                with Vertical(classes="field-group"):
                    yield Label("Links", classes="field-label")
                    yield Static(build_project_url(self.base_url, project.slug), classes="field-value")
                    if project.demo_url:
                        yield Static(project.demo_url, classes="field-value")

            with Container(id="project-dialog-footer"):
                with Horizontal(classes="footer-content"):
                    yield Static("", id="project-counters")
                    with Horizontal(classes="dialog-actions"):
                        yield Button("♡ Like", id="like-btn")
                        yield Button("Close", id="close-btn", classes="primary")

    def on_mount(self) -> None:
        self._update_counters()
        self._load_engagement()

    @work(exclusive=True, group="engagement")
    async def _load_engagement(self) -> None:
        """Count this visit and fetch whether the project is already liked."""
        try:
            self.views = await self.project_service.record_view(self.project.id)
            self.liked = await self.project_service.is_liked(self.project.id)
        except TicSummitError as e:
            # Counters are cosmetic; keep the values the listing provided
            logger.warning(f"Could not refresh counters for {self.project.id}: {e}")

    def watch_likes(self, likes: int) -> None:
        self._update_counters()

    def watch_views(self, views: int) -> None:
        self._update_counters()

    def watch_liked(self, liked: bool) -> None:
        try:
            self.query_one("#like-btn", Button).label = "♥ Unlike" if liked else "♡ Like"
        except NoMatches:
            pass

    def _update_counters(self) -> None:
        try:
            counters = self.query_one("#project-counters", Static)
            counters.update(f"♥ {format_count(self.likes)}   👁 {format_count(self.views)}")
        except NoMatches:
            pass

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-btn":
            self.action_close()
        elif event.button.id == "like-btn":
            self.action_toggle_like()

    def action_close(self) -> None:
        self.dismiss(self._likes_changed)

    def action_toggle_like(self) -> None:
        self._toggle_like()

    @work(exclusive=True, group="like")
    async def _toggle_like(self) -> None:
        try:
            likes, liked = await self.project_service.toggle_like(self.project.id)
        except TicSummitError as e:
            self.notify(f"Could not update like: {e}", severity="error")
            return

        self.likes = likes
        self.liked = liked
        self._likes_changed = True
