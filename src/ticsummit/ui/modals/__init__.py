"""Modal dialogs for the Hall of Fame browser."""

from .delete_modal import DeleteModal
from .project_detail_modal import ProjectDetailModal
from .project_form_modal import ProjectFormModal

__all__ = ["DeleteModal", "ProjectDetailModal", "ProjectFormModal"]
