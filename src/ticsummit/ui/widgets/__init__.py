from .filter_bar import FilterBar
from .project_list import ProjectList
from .title_bar import TitleBar

__all__ = ["FilterBar", "ProjectList", "TitleBar"]
