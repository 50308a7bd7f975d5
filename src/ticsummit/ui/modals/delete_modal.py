"""Delete modal for removing Hall of Fame projects."""

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from ticsummit.exceptions import TicSummitError
from ticsummit.models import Project
from ticsummit.services.content import ContentService


# UI Element IDs
class DeleteModalIDs:
    """Constants for UI element IDs."""

    DELETE_MODAL = "delete-modal"
    MODAL_TITLE = "modal-title"
    FORM_CONTAINER = "form-container"
    PROJECT_TITLE = "project-title"
    BUTTON_CONTAINER = "button-container"
    DELETE_BUTTON = "delete-btn"
    CANCEL_BUTTON = "cancel-btn"


class DeleteModal(ModalScreen[bool]):
    """Modal screen confirming the deletion of a project."""

    BINDINGS = [
        Binding("escape", "dismiss", "Cancel"),
    ]

    def __init__(self, project: Project, content_service: ContentService) -> None:
        """Initialize the delete modal.

        Args:
            project: The project to delete.
            content_service: Service performing the deletion.
        """
        super().__init__()
        self.project = project
        self.content_service = content_service

    def compose(self) -> ComposeResult:
        """Create the layout for the delete modal."""
        with Vertical(id=DeleteModalIDs.DELETE_MODAL):
            yield Static("Confirm Deletion", id=DeleteModalIDs.MODAL_TITLE)

            with Vertical(id=DeleteModalIDs.FORM_CONTAINER):
                yield Label("Are you sure you want to permanently delete this project?")
                yield Static(self.project.title, id=DeleteModalIDs.PROJECT_TITLE)

            with Horizontal(id=DeleteModalIDs.BUTTON_CONTAINER):
                yield Button("Delete", variant="error", id=DeleteModalIDs.DELETE_BUTTON)
                yield Button("Cancel", variant="default", id=DeleteModalIDs.CANCEL_BUTTON)

    def action_dismiss(self) -> None:
        """Dismiss the modal."""
        self.dismiss(False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == DeleteModalIDs.CANCEL_BUTTON:
            self.action_dismiss()
        elif event.button.id == DeleteModalIDs.DELETE_BUTTON:
            self._delete_project()

    @work(exclusive=True)
    async def _delete_project(self) -> None:
        try:
            await self.content_service.delete("projects", self.project.id)
        except TicSummitError as e:
            self._show_error(f"Delete failed: {e}")
            return

        self._show_success_and_close(f"Successfully deleted '{self.project.title}'")

    def _show_success_and_close(self, message: str) -> None:
        """Show success notification and close modal."""
        self.notify(message, severity="information")
        self.dismiss(True)

    def _show_error(self, message: str) -> None:
        """Show error notification."""
        self.notify(message, severity="error")
