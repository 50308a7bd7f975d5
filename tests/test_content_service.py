"""Tests for the admin content service."""

import json

import httpx
import pytest

from ticsummit.drafts import BlogDraft, ProjectDraft, TeamMemberDraft
from ticsummit.exceptions import DraftValidationError
from ticsummit.gateways.site_api import SiteAPI
from ticsummit.services.content import ContentService


class RecordingSite:
    def __init__(self, data=None):
        self.data = data if data is not None else {}
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json={"success": True, "data": self.data})


@pytest.fixture
def site():
    return RecordingSite()


@pytest.fixture
def service(site):
    return ContentService(SiteAPI("https://ticsummit.test", transport=httpx.MockTransport(site.handle)))


@pytest.mark.asyncio
async def test_create_posts_camel_case_payload(service, site):
    site.data = {"id": "b1"}
    draft = BlogDraft(title="Summit Recap 2025!", content="It was great", category="News", read_time=4)

    created = await service.create(draft)

    request = site.requests[0]
    body = json.loads(request.content)
    assert created == {"id": "b1"}
    assert request.url.path == "/api/blogs"
    assert body["slug"] == "summit-recap-2025"
    assert body["readTime"] == 4
    assert body["tags"] == []
    assert "publishedAt" not in body


@pytest.mark.asyncio
async def test_create_rejects_invalid_draft_without_request(service, site):
    draft = ProjectDraft(title="Robot", description="  ", category="Web")

    with pytest.raises(DraftValidationError) as exc_info:
        await service.create(draft)

    assert exc_info.value.field == "description"
    assert site.requests == []


@pytest.mark.asyncio
async def test_create_team_member(service, site):
    await service.create(TeamMemberDraft(name="Ada Obi", role="Lead Organizer"))

    assert site.requests[0].url.path == "/api/content/team-members/create"


@pytest.mark.asyncio
async def test_update_puts_to_record(service, site):
    draft = ProjectDraft(title="Robot", description="Sorts trash", category="Hardware", status="FINALIST")

    await service.update("p9", draft)

    request = site.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/api/projects/p9"
    assert json.loads(request.content)["status"] == "FINALIST"


@pytest.mark.asyncio
async def test_list_passes_params(service, site):
    site.data = [{"id": "m1"}]

    mentors = await service.list("mentors", search="ada")

    assert mentors == [{"id": "m1"}]
    assert site.requests[0].url.params["search"] == "ada"


@pytest.mark.asyncio
async def test_set_user_role_normalizes_role(service, site):
    await service.set_user_role("u1", "mentor")

    assert json.loads(site.requests[0].content) == {"userId": "u1", "role": "MENTOR"}


@pytest.mark.asyncio
async def test_set_user_role_rejects_unknown_role(service, site):
    with pytest.raises(DraftValidationError, match="role"):
        await service.set_user_role("u1", "overlord")

    assert site.requests == []


@pytest.mark.asyncio
async def test_save_site_settings_posts(service, site):
    await service.save_site_settings({"registrationOpen": True})

    request = site.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/content/site-settings"


@pytest.mark.asyncio
async def test_missing_data_defaults_to_empty(service, site):
    site.data = None

    assert await service.stats() == {}
    assert await service.list("alumni") == []
