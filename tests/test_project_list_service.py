"""Tests for ProjectListService and its use by the listing loader."""

import httpx
import pytest

from ticsummit.exceptions import FetchFailure
from ticsummit.gateways.site_api import SiteAPI
from ticsummit.models import ALL_CATEGORIES
from ticsummit.services.listing_loader import IncrementalListingLoader, ListQuery
from ticsummit.services.project_list import ProjectListService


def service_answering(body: dict) -> ProjectListService:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    return ProjectListService(SiteAPI("https://ticsummit.test", transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_fetch_page_uses_pagination_metadata(site_api):
    service = ProjectListService(site_api)

    page = await service.fetch_page(ListQuery(page=3, page_size=6))

    assert [p.id for p in page.items] == ["p13"]
    assert page.has_more is False
    assert page.total_count == 13


@pytest.mark.asyncio
async def test_fetch_page_converts_records(site_api):
    service = ProjectListService(site_api)

    page = await service.fetch_page(ListQuery(page=1, page_size=1))
    project = page.items[0]

    assert project.title == "Project 1"
    assert project.tech_stack == ("Python", "Arduino")
    assert project.author.name == "Author 1"
    assert project.views == 10


@pytest.mark.asyncio
async def test_fetch_page_infers_metadata_when_missing():
    service = service_answering({"success": True, "data": [{"id": str(i), "title": f"P{i}"} for i in range(6)]})

    page = await service.fetch_page(ListQuery(page=2, page_size=6))

    assert page.has_more is True
    assert page.total_count == 12


@pytest.mark.asyncio
async def test_fetch_page_without_data_array_fails():
    service = service_answering({"success": True, "data": {"unexpected": "shape"}})

    with pytest.raises(FetchFailure, match="no 'data' array"):
        await service.fetch_page(ListQuery())


@pytest.mark.asyncio
async def test_loader_over_http(site_api, fake_site):
    loader = IncrementalListingLoader(ProjectListService(site_api).fetch_page, page_size=6)

    await loader.start_new_query("", ALL_CATEGORIES)
    await loader.load_next_page()
    await loader.load_next_page()

    assert len(loader.state.items) == 13
    assert loader.state.has_more is False
    assert [r.url.params["page"] for r in fake_site.requests] == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_loader_keeps_items_when_server_fails(site_api, fake_site):
    loader = IncrementalListingLoader(ProjectListService(site_api).fetch_page, page_size=6)
    await loader.start_new_query()

    fake_site.fail_next = 500
    await loader.load_next_page()

    assert len(loader.state.items) == 6
    assert loader.state.is_loading is False

    await loader.load_next_page()
    assert len(loader.state.items) == 12


@pytest.mark.asyncio
async def test_get_project_by_slug(site_api):
    service = ProjectListService(site_api)

    project = await service.get_project("project-4")
    missing = await service.get_project("nope")

    assert project.id == "p4"
    assert missing is None


@pytest.mark.asyncio
async def test_like_round_trip(site_api):
    service = ProjectListService(site_api)

    assert await service.is_liked("p1") is False
    assert await service.toggle_like("p1") == (5, True)
    assert await service.is_liked("p1") is True
    assert await service.toggle_like("p1") == (4, False)


@pytest.mark.asyncio
async def test_record_view_returns_new_count(site_api, fake_site):
    service = ProjectListService(site_api)

    assert await service.record_view("p2") == 42
    assert fake_site.requests[-1].url.params["projectId"] == "p2"


def service_answering_in_turn(*bodies: dict) -> ProjectListService:
    """Service whose server answers with ``bodies`` one request at a time."""
    remaining = list(bodies)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=remaining.pop(0))

    return ProjectListService(SiteAPI("https://ticsummit.test", transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_null_total_count_falls_back_to_records_seen():
    service = service_answering(
        {"success": True, "data": [{"id": "1", "title": "P1"}], "pagination": {"hasMore": False, "totalCount": None}}
    )

    page = await service.fetch_page(ListQuery(page=2, page_size=6))

    assert page.total_count == 7
    assert page.has_more is False


@pytest.mark.parametrize(
    "body",
    [
        {"success": True, "data": ["not a project"]},
        {"success": True, "data": [{"id": "1", "likes": "many"}]},
        {"success": True, "data": [], "pagination": {"hasMore": True, "totalCount": "lots"}},
    ],
)
@pytest.mark.asyncio
async def test_malformed_listing_raises_fetch_failure(body):
    service = service_answering(body)

    with pytest.raises(FetchFailure):
        await service.fetch_page(ListQuery())


@pytest.mark.asyncio
async def test_loader_recovers_from_malformed_listing():
    good = {
        "success": True,
        "data": [{"id": str(i), "title": f"P{i}"} for i in range(6)],
        "pagination": {"hasMore": True, "totalCount": 13},
    }
    service = service_answering_in_turn({"success": True, "data": [42]}, good)
    loader = IncrementalListingLoader(service.fetch_page, page_size=6)

    await loader.start_new_query()

    assert loader.state.items == ()
    assert loader.state.is_initial_loading is False
    assert loader.state.is_loading_more is False

    await loader.start_new_query()

    assert len(loader.state.items) == 6
    assert loader.state.total_count == 13


@pytest.mark.asyncio
async def test_loader_retries_next_page_after_malformed_response():
    first = {
        "success": True,
        "data": [{"id": str(i), "title": f"P{i}"} for i in range(6)],
        "pagination": {"hasMore": True, "totalCount": 12},
    }
    second = {
        "success": True,
        "data": [{"id": str(i), "title": f"P{i}"} for i in range(6, 12)],
        "pagination": {"hasMore": False, "totalCount": 12},
    }
    service = service_answering_in_turn(first, {"success": True, "data": ["broken"]}, second)
    loader = IncrementalListingLoader(service.fetch_page, page_size=6)
    await loader.start_new_query()

    assert await loader.load_next_page() is True
    assert len(loader.state.items) == 6
    assert loader.state.is_loading is False

    assert await loader.load_next_page() is True
    assert len(loader.state.items) == 12
    assert loader.state.has_more is False
