from loguru import logger

from ticsummit.exceptions import FetchFailure
from ticsummit.gateways.site_api import SiteAPI
from ticsummit.models import Project, ProjectPage
from ticsummit.services.listing_loader import ListQuery


class ProjectListService:
    def __init__(self, api: SiteAPI):
        self.api = api

    async def fetch_page(self, query: ListQuery) -> ProjectPage:
        """Fetch the page of projects ``query`` points at."""
        payload = await self.api.list_projects(
            page=query.page,
            limit=query.page_size,
            search=query.search_term,
            category=query.category,
        )

        data = payload.get("data")
        if not isinstance(data, list):
            raise FetchFailure("Project listing has no 'data' array")
        if not all(isinstance(raw, dict) for raw in data):
            raise FetchFailure("Project listing holds records that are not objects")

        try:
            items = tuple(Project.from_api(raw) for raw in data)
        except (TypeError, ValueError, AttributeError) as e:
            raise FetchFailure(f"Malformed project record: {e}") from e

        pagination = payload.get("pagination")
        if not isinstance(pagination, dict):
            # Servers without pagination metadata: a full page means there may be more
            logger.debug("Project listing has no pagination metadata, inferring it from the page size")
            has_more = len(items) == query.page_size
            total_count = (query.page - 1) * query.page_size + len(items)
            return ProjectPage(items=items, has_more=has_more, total_count=total_count)

        try:
            # A null totalCount falls back to the records seen so far
            total_count = int(pagination.get("totalCount") or (query.page - 1) * query.page_size + len(items))
        except (TypeError, ValueError) as e:
            raise FetchFailure(f"Malformed pagination metadata: {e}") from e

        return ProjectPage(items=items, has_more=bool(pagination.get("hasMore", False)), total_count=total_count)

    async def get_project(self, slug: str) -> Project | None:
        """Return the project with ``slug``, or None when the listing is empty."""
        payload = await self.api.get_project_by_slug(slug=slug)
        data = payload.get("data") or []
        if not data:
            return None
        return Project.from_api(data[0])

    async def toggle_like(self, project_id: str) -> tuple[int, bool]:
        """Like or unlike a project. Returns the new like count and whether it is now liked."""
        payload = await self.api.toggle_project_like(project_id=project_id)
        data = payload.get("data") or {}
        return int(data.get("likes", 0)), bool(data.get("liked", False))

    async def is_liked(self, project_id: str) -> bool:
        payload = await self.api.get_project_like_status(project_id=project_id)
        return bool((payload.get("data") or {}).get("liked", False))

    async def record_view(self, project_id: str) -> int:
        payload = await self.api.record_project_view(project_id=project_id)
        return int((payload.get("data") or {}).get("views", 0))
