"""Records returned by the site API."""

from dataclasses import dataclass, field
from typing import Optional

ALL_CATEGORIES = "all"
PROJECT_CATEGORIES = ["Web", "Mobile", "IoT", "AI", "Hardware", "Blockchain", "Other"]
PROJECT_STATUSES = ["SUBMITTED", "UNDER_REVIEW", "APPROVED", "REJECTED", "FINALIST", "WINNER"]
USER_ROLES = ["STUDENT", "MENTOR", "VOLUNTEER", "ADMIN"]


@dataclass(frozen=True)
class ProjectAuthor:
    id: str = ""
    name: str = ""
    image: Optional[str] = None

    @classmethod
    def from_api(cls, data: Optional[dict]) -> "ProjectAuthor":
        data = data or {}
        return cls(id=str(data.get("id", "")), name=data.get("name") or "", image=data.get("image"))


@dataclass(frozen=True)
class Project:
    """A Hall of Fame project."""

    id: str
    title: str
    slug: str = ""
    description: str = ""
    category: str = ""
    images: tuple[str, ...] = ()
    tech_stack: tuple[str, ...] = ()
    members: tuple[str, ...] = ()
    status: str = "SUBMITTED"
    phase: Optional[str] = None
    year: Optional[int] = None
    likes: int = 0
    views: int = 0
    demo_url: Optional[str] = None
    author: ProjectAuthor = field(default_factory=ProjectAuthor)
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Project":
        """Build a project from the camelCase JSON the API returns."""
        images = data.get("images") or []
        # Older records carry a single ``image`` instead of ``images``
        if not images and data.get("image"):
            images = [data["image"]]

        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            slug=data.get("slug") or "",
            description=data.get("description") or "",
            category=data.get("category") or "",
            images=tuple(images),
            tech_stack=tuple(data.get("techStack") or data.get("tags") or []),
            members=tuple(data.get("members") or []),
            status=data.get("status") or "SUBMITTED",
            phase=data.get("phase"),
            year=data.get("year"),
            likes=int(data.get("likes") or 0),
            views=int(data.get("views") or 0),
            demo_url=data.get("demoUrl"),
            author=ProjectAuthor.from_api(data.get("author")),
            created_at=data.get("createdAt"),
        )


@dataclass(frozen=True)
class ProjectPage:
    """One page of projects plus the server's pagination metadata."""

    items: tuple[Project, ...]
    has_more: bool
    total_count: int
