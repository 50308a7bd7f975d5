"""Shared fixtures: an in-memory project catalogue served over httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from ticsummit.exceptions import FetchFailure
from ticsummit.gateways.site_api import SiteAPI
from ticsummit.models import Project, ProjectPage

BASE_URL = "https://ticsummit.test"
CATEGORY_CYCLE = ["Web", "IoT", "AI"]


def make_raw_project(index: int, category: str | None = None) -> dict:
    return {
        "id": f"p{index}",
        "title": f"Project {index}",
        "slug": f"project-{index}",
        "description": f"Description of project {index}",
        "category": category or CATEGORY_CYCLE[index % len(CATEGORY_CYCLE)],
        "techStack": ["Python", "Arduino"],
        "members": [f"Member {index}"],
        "status": "APPROVED",
        "year": 2025,
        "likes": index,
        "views": index * 10,
        "author": {"id": f"u{index}", "name": f"Author {index}"},
    }


class FakeSite:
    """Minimal stand-in for the site API, recording every request it serves."""

    def __init__(self, projects: list[dict]):
        self.projects = projects
        self.requests: list[httpx.Request] = []
        self.likes: dict[str, bool] = {}
        self.fail_next: int | None = None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_next is not None:
            status, self.fail_next = self.fail_next, None
            return httpx.Response(status, json={"success": False, "error": "Internal server error"})

        path = request.url.path
        if path == "/api/projects" and request.method == "GET":
            return self._list_projects(request)
        if path == "/api/projects/likes":
            return self._likes(request)
        if path == "/api/projects/views":
            return httpx.Response(200, json={"success": True, "data": {"views": 42}})
        return httpx.Response(404, json={"success": False, "error": f"No route for {path}"})

    def _list_projects(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        if "slug" in params:
            data = [p for p in self.projects if p["slug"] == params["slug"]]
            return httpx.Response(200, json={"success": True, "data": data})

        matches = self.projects
        search = params.get("search", "").lower()
        if search:
            matches = [p for p in matches if search in p["title"].lower() or search in p["description"].lower()]
        if "category" in params:
            matches = [p for p in matches if p["category"] == params["category"]]

        page = int(params.get("page", 1))
        limit = int(params.get("limit", 6))
        start = (page - 1) * limit
        data = matches[start : start + limit]
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": data,
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "totalCount": len(matches),
                    "hasMore": start + len(data) < len(matches),
                },
            },
        )

    def _likes(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            project_id = request.url.params["projectId"]
            return httpx.Response(200, json={"success": True, "data": {"liked": self.likes.get(project_id, False)}})

        project_id = json.loads(request.content)["projectId"]
        liked = not self.likes.get(project_id, False)
        self.likes[project_id] = liked
        return httpx.Response(200, json={"success": True, "data": {"liked": liked, "likes": 5 if liked else 4}})


@pytest.fixture
def fake_site():
    return FakeSite([make_raw_project(i) for i in range(1, 14)])


@pytest.fixture
def site_api(fake_site):
    return SiteAPI(BASE_URL, api_token="secret", transport=httpx.MockTransport(fake_site.handle))


class GatedFetcher:
    """Page fetcher whose responses are released by the test, one call at a time.

    Serves pages out of ``projects`` filtered by category; a call stays pending
    until ``release`` (or ``fail``) is called for it.
    """

    def __init__(self, projects: list[Project]):
        self.projects = projects
        self.calls = []
        self._pending: list[asyncio.Future] = []

    async def __call__(self, query) -> ProjectPage:
        self.calls.append(query)
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        outcome = await future
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def page_for(self, query) -> ProjectPage:
        matches = [
            p
            for p in self.projects
            if (query.category == "all" or p.category == query.category)
            and query.search_term.lower() in p.title.lower()
        ]
        start = (query.page - 1) * query.page_size
        items = tuple(matches[start : start + query.page_size])
        return ProjectPage(items=items, has_more=start + len(items) < len(matches), total_count=len(matches))

    def release(self, index: int = 0) -> None:
        self._pending[index].set_result(self.page_for(self.calls[index]))

    def fail(self, index: int = 0) -> None:
        self._pending[index].set_result(FetchFailure("HTTP 500", url=f"{BASE_URL}/api/projects", status_code=500))


@pytest.fixture
def projects():
    return [Project.from_api(make_raw_project(i)) for i in range(1, 14)]


@pytest.fixture
def gated_fetcher(projects):
    return GatedFetcher(projects)


@pytest.fixture
def instant_fetcher(projects):
    """Page fetcher that answers immediately and counts its calls."""
    fetcher = GatedFetcher(projects)

    async def fetch(query) -> ProjectPage:
        fetcher.calls.append(query)
        return fetcher.page_for(query)

    fetch.calls = fetcher.calls
    return fetch
