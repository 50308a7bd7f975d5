"""Typed drafts for the admin CRUD resources.

Every draft is tagged with the resource it is submitted to. Required fields
have no default; ``validate`` rejects blank required fields and enumerated
values outside their range, and ``to_payload`` builds the camelCase body the
site API expects.
"""

import re
from dataclasses import dataclass, fields
from typing import ClassVar, Optional

from ticsummit.exceptions import DraftValidationError
from ticsummit.models import PROJECT_CATEGORIES, PROJECT_STATUSES


def slugify(text: str) -> str:
    """Lower-case ``text`` and collapse anything outside ``[a-z0-9]`` into dashes."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class Draft:
    RESOURCE: ClassVar[str] = ""
    REQUIRED: ClassVar[tuple[str, ...]] = ()
    # Field the slug is derived from when none is given
    SLUG_SOURCE: ClassVar[Optional[str]] = None

    def validate(self) -> None:
        for name in self.REQUIRED:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise DraftValidationError(name, "is required")

    def to_payload(self) -> dict:
        payload = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, tuple):
                value = list(value)
            payload[_camel_case(f.name)] = value

        if self.SLUG_SOURCE and "slug" in {f.name for f in fields(self)} and not payload.get("slug"):
            payload["slug"] = slugify(getattr(self, self.SLUG_SOURCE))
        return payload


@dataclass(frozen=True)
class BlogDraft(Draft):
    RESOURCE: ClassVar[str] = "blogs"
    REQUIRED: ClassVar[tuple[str, ...]] = ("title", "content", "category")
    SLUG_SOURCE: ClassVar[Optional[str]] = "title"

    title: str
    content: str
    category: str
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    image: Optional[str] = None
    tags: tuple[str, ...] = ()
    featured: bool = False
    published: bool = False
    published_at: Optional[str] = None
    read_time: Optional[int] = None


@dataclass(frozen=True)
class ProjectDraft(Draft):
    RESOURCE: ClassVar[str] = "projects"
    REQUIRED: ClassVar[tuple[str, ...]] = ("title", "description", "category")

    title: str
    description: str
    category: str
    images: tuple[str, ...] = ()
    tech_stack: tuple[str, ...] = ()
    members: tuple[str, ...] = ()
    status: str = "SUBMITTED"
    phase: Optional[str] = None
    year: Optional[int] = None
    demo_url: Optional[str] = None

    def validate(self) -> None:
        super().validate()
        if self.category not in PROJECT_CATEGORIES:
            raise DraftValidationError("category", f"must be one of {', '.join(PROJECT_CATEGORIES)}")
        if self.status not in PROJECT_STATUSES:
            raise DraftValidationError("status", f"must be one of {', '.join(PROJECT_STATUSES)}")


@dataclass(frozen=True)
class AlumniDraft(Draft):
    RESOURCE: ClassVar[str] = "alumni"
    REQUIRED: ClassVar[tuple[str, ...]] = ("name", "email")
    SLUG_SOURCE: ClassVar[Optional[str]] = "name"

    name: str
    email: str
    slug: Optional[str] = None
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    graduation_year: Optional[int] = None
    current_role: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    achievements: tuple[str, ...] = ()
    # (network, url) pairs, e.g. (("linkedin", "https://..."),)
    social_links: tuple[tuple[str, str], ...] = ()
    is_active: bool = True

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["socialLinks"] = dict(self.social_links)
        return payload


@dataclass(frozen=True)
class MentorDraft(Draft):
    RESOURCE: ClassVar[str] = "mentors"
    REQUIRED: ClassVar[tuple[str, ...]] = ("name", "email")
    SLUG_SOURCE: ClassVar[Optional[str]] = "name"

    name: str
    email: str
    slug: Optional[str] = None
    bio: Optional[str] = None
    specialties: tuple[str, ...] = ()
    experience: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    education: Optional[str] = None
    languages: tuple[str, ...] = ()
    achievements: tuple[str, ...] = ()
    year_joined: Optional[int] = None
    social_links: tuple[tuple[str, str], ...] = ()

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["socialLinks"] = dict(self.social_links)
        return payload


@dataclass(frozen=True)
class SpotlightContribution:
    title: str
    description: str = ""
    date: str = ""


@dataclass(frozen=True)
class AmbassadorDraft(Draft):
    RESOURCE: ClassVar[str] = "ambassadors"
    REQUIRED: ClassVar[tuple[str, ...]] = ("name", "email")
    SLUG_SOURCE: ClassVar[Optional[str]] = "name"

    name: str
    email: str
    slug: Optional[str] = None
    bio: Optional[str] = None
    school: Optional[str] = None
    contact_info: Optional[str] = None
    social_links: tuple[tuple[str, str], ...] = ()
    tic_points: int = 0
    spotlight_contributions: tuple[SpotlightContribution, ...] = ()
    is_active: bool = True

    def validate(self) -> None:
        super().validate()
        if self.tic_points < 0:
            raise DraftValidationError("tic_points", "cannot be negative")

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["socialLinks"] = dict(self.social_links)
        payload["spotlightContributions"] = [
            {"title": c.title, "description": c.description, "date": c.date} for c in self.spotlight_contributions
        ]
        return payload


@dataclass(frozen=True)
class TeamMemberDraft(Draft):
    RESOURCE: ClassVar[str] = "team-members"
    REQUIRED: ClassVar[tuple[str, ...]] = ("name", "role")
    SLUG_SOURCE: ClassVar[Optional[str]] = "name"

    name: str
    role: str
    slug: Optional[str] = None
    bio: Optional[str] = None
    image_url: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None
    activities: tuple[str, ...] = ()
    achievements: tuple[str, ...] = ()
    order: int = 0
    active: bool = True


@dataclass(frozen=True)
class TimelinePhaseDraft(Draft):
    RESOURCE: ClassVar[str] = "timeline-phases"
    REQUIRED: ClassVar[tuple[str, ...]] = ("title", "duration", "description")

    title: str
    duration: str
    description: str
    details: tuple[str, ...] = ()
    icon_name: Optional[str] = None
    color: Optional[str] = None
    participants: Optional[str] = None
    order: int = 0
    is_active: bool = False
