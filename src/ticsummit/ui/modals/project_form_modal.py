"""Form modal for adding a project to the Hall of Fame."""

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from ticsummit.drafts import ProjectDraft
from ticsummit.exceptions import DraftValidationError, TicSummitError
from ticsummit.models import PROJECT_CATEGORIES, PROJECT_STATUSES
from ticsummit.services.content import ContentService
from ticsummit.ui.utils import parse_list_input


# UI Element IDs
class ProjectFormModalIDs:
    """Constants for UI element IDs."""

    FORM_MODAL = "project-form-modal"
    MODAL_TITLE = "modal-title"
    FORM_CONTAINER = "form-container"
    TITLE_INPUT = "title-input"
    DESCRIPTION_INPUT = "description-input"
    CATEGORY_SELECT = "category-select"
    STATUS_SELECT = "status-select"
    TECH_STACK_INPUT = "tech-stack-input"
    MEMBERS_INPUT = "members-input"
    YEAR_INPUT = "year-input"
    DEMO_URL_INPUT = "demo-url-input"
    BUTTON_CONTAINER = "button-container"
    CREATE_BUTTON = "create-btn"
    CANCEL_BUTTON = "cancel-btn"


# Input ids by draft field, used to point the user at an invalid field
FIELD_INPUTS = {
    "title": ProjectFormModalIDs.TITLE_INPUT,
    "description": ProjectFormModalIDs.DESCRIPTION_INPUT,
    "category": ProjectFormModalIDs.CATEGORY_SELECT,
    "status": ProjectFormModalIDs.STATUS_SELECT,
    "year": ProjectFormModalIDs.YEAR_INPUT,
}


class ProjectFormModal(ModalScreen[bool]):
    """Modal screen for creating a project."""

    BINDINGS = [
        Binding("escape", "dismiss", "Cancel"),
    ]

    def __init__(self, content_service: ContentService) -> None:
        super().__init__()
        self.content_service = content_service

    def compose(self) -> ComposeResult:
        """Create the layout for the project form."""
        with Vertical(id=ProjectFormModalIDs.FORM_MODAL):
            yield Static("New Project", id=ProjectFormModalIDs.MODAL_TITLE)

            with VerticalScroll(id=ProjectFormModalIDs.FORM_CONTAINER):
                yield Label("Title")
                yield Input(placeholder="Smart Agriculture System", id=ProjectFormModalIDs.TITLE_INPUT)
                yield Label("Description")
                yield Input(placeholder="What does the project do?", id=ProjectFormModalIDs.DESCRIPTION_INPUT)
                yield Label("Category")
                yield Select(
                    [(category, category) for category in PROJECT_CATEGORIES],
                    prompt="Select category",
                    id=ProjectFormModalIDs.CATEGORY_SELECT,
                )
                yield Label("Status")
                yield Select(
                    [(status.replace("_", " ").title(), status) for status in PROJECT_STATUSES],
                    value="SUBMITTED",
                    allow_blank=False,
                    id=ProjectFormModalIDs.STATUS_SELECT,
                )
                yield Label("Tech stack (comma separated)")
                yield Input(placeholder="Python, Arduino, Sensors", id=ProjectFormModalIDs.TECH_STACK_INPUT)
                yield Label("Team members (comma separated)")
                yield Input(placeholder="Marie Nguema, Paul Nguema", id=ProjectFormModalIDs.MEMBERS_INPUT)
                yield Label("Year")
                yield Input(placeholder="2025", type="integer", id=ProjectFormModalIDs.YEAR_INPUT)
                yield Label("Demo URL")
                yield Input(placeholder="https://", id=ProjectFormModalIDs.DEMO_URL_INPUT)

            with Horizontal(id=ProjectFormModalIDs.BUTTON_CONTAINER):
                yield Button("Create", variant="primary", id=ProjectFormModalIDs.CREATE_BUTTON)
                yield Button("Cancel", variant="default", id=ProjectFormModalIDs.CANCEL_BUTTON)

    def on_mount(self) -> None:
        self.query_one(f"#{ProjectFormModalIDs.TITLE_INPUT}", Input).focus()

    def action_dismiss(self) -> None:
        """Dismiss the modal."""
        self.dismiss(False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == ProjectFormModalIDs.CANCEL_BUTTON:
            self.action_dismiss()
        elif event.button.id == ProjectFormModalIDs.CREATE_BUTTON:
            self._validate_and_create()

    def build_draft(self) -> ProjectDraft:
        """Read the form into a draft.

        Raises:
            DraftValidationError: when the year is not a number.
        """

        def value_of(input_id: str) -> str:
            return self.query_one(f"#{input_id}", Input).value.strip()

        category = self.query_one(f"#{ProjectFormModalIDs.CATEGORY_SELECT}", Select).value
        status = self.query_one(f"#{ProjectFormModalIDs.STATUS_SELECT}", Select).value
        year = value_of(ProjectFormModalIDs.YEAR_INPUT)
        try:
            year = int(year) if year else None
        except ValueError:
            raise DraftValidationError("year", "must be a whole number")

        return ProjectDraft(
            title=value_of(ProjectFormModalIDs.TITLE_INPUT),
            description=value_of(ProjectFormModalIDs.DESCRIPTION_INPUT),
            category="" if category is Select.BLANK else category,
            status=status,
            tech_stack=parse_list_input(value_of(ProjectFormModalIDs.TECH_STACK_INPUT)),
            members=parse_list_input(value_of(ProjectFormModalIDs.MEMBERS_INPUT)),
            year=year,
            demo_url=value_of(ProjectFormModalIDs.DEMO_URL_INPUT) or None,
        )

    def _validate_and_create(self) -> None:
        """Validate the form and start creation if valid."""
        try:
            draft = self.build_draft()
            draft.validate()
        except DraftValidationError as e:
            self._show_error(f"{e.field.replace('_', ' ').capitalize()} {e.message}")
            if e.field in FIELD_INPUTS:
                self.query_one(f"#{FIELD_INPUTS[e.field]}").focus()
            return

        self._create_project(draft)

    @work(exclusive=True)
    async def _create_project(self, draft: ProjectDraft) -> None:
        try:
            await self.content_service.create(draft)
        except TicSummitError as e:
            self._show_error(f"Create failed: {e}")
            return

        self._show_success_and_close(f"Successfully created '{draft.title}'")

    def _show_success_and_close(self, message: str) -> None:
        """Show success notification and close modal."""
        self.notify(message, severity="information")
        self.dismiss(True)

    def _show_error(self, message: str) -> None:
        """Show error notification."""
        self.notify(message, severity="error")
