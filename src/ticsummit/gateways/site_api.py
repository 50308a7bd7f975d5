from functools import wraps

import httpx
from loguru import logger

from ticsummit.exceptions import FetchFailure
from ticsummit.models import ALL_CATEGORIES

RESOURCE_PATHS = {
    "blogs": "/api/blogs",
    "projects": "/api/projects",
    "mentors": "/api/mentors",
    "alumni": "/api/alumni",
    "ambassadors": "/api/ambassadors",
    "team-members": "/api/content/team-members",
    "timeline-phases": "/api/content/timeline-phases",
}
# Resources whose create endpoint differs from the collection path
CREATE_PATHS = {
    "team-members": "/api/content/team-members/create",
}


def resource_path(resource: str) -> str:
    try:
        return RESOURCE_PATHS[resource]
    except KeyError:
        raise ValueError(f"Unknown resource '{resource}'. Known resources: {', '.join(RESOURCE_PATHS)}")


class SiteAPI:
    """Async client for the TIC Summit website REST API."""

    def __init__(
        self,
        base_url: str,
        api_token: str = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        """Initialize the client.

        Args:
            base_url: Root URL of the site, e.g. ``https://ticsummit.org``.
            api_token: Optional bearer token sent with every request.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests to stub the server.
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self.transport = transport

    def create_client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    @staticmethod
    def get_client(func):
        @wraps(func)
        async def wrapper(self, *args, client: httpx.AsyncClient = None, **kwargs):
            if client is not None:
                return await func(self, client, *args, **kwargs)
            # Open a short-lived client when none is provided
            async with self.create_client() as client:
                return await func(self, client, *args, **kwargs)

        return wrapper

    async def _request(self, client: httpx.AsyncClient, method: str, path: str, **kwargs) -> dict:
        """Send a request and return the decoded JSON envelope.

        Raises:
            FetchFailure: on transport errors, error statuses, non-JSON bodies
                and ``success: false`` envelopes.
        """
        url = f"{self.base_url}{path}"
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise FetchFailure(f"{method} request failed: {e}", url=url) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            if response.is_error:
                raise FetchFailure(f"HTTP {response.status_code}", url=url, status_code=response.status_code)
            raise FetchFailure("Response body is not a JSON object", url=url, status_code=response.status_code)

        if response.is_error or payload.get("success") is False:
            message = payload.get("error") or f"HTTP {response.status_code}"
            raise FetchFailure(message, url=url, status_code=response.status_code)

        return payload

    # -------------------------Projects------------------------- #

    @get_client
    async def list_projects(
        self,
        client: httpx.AsyncClient,
        *,
        page: int,
        limit: int,
        search: str = None,
        category: str = None,
    ) -> dict:
        """Fetch one page of projects. Empty filters are left out of the query string."""
        params = {"page": page, "limit": limit}
        if search and search.strip():
            params["search"] = search.strip()
        if category and category != ALL_CATEGORIES:
            params["category"] = category

        logger.info(f"Listing projects page {page} (search='{search or ''}', category='{category or ALL_CATEGORIES}')")
        return await self._request(client, "GET", RESOURCE_PATHS["projects"], params=params)

    @get_client
    async def get_project_by_slug(self, client: httpx.AsyncClient, *, slug: str) -> dict:
        logger.info(f"Fetching project '{slug}'")
        return await self._request(client, "GET", RESOURCE_PATHS["projects"], params={"slug": slug})

    @get_client
    async def toggle_project_like(self, client: httpx.AsyncClient, *, project_id: str) -> dict:
        logger.info(f"Toggling like on project {project_id}")
        return await self._request(client, "POST", "/api/projects/likes", json={"projectId": project_id})

    @get_client
    async def get_project_like_status(self, client: httpx.AsyncClient, *, project_id: str) -> dict:
        return await self._request(client, "GET", "/api/projects/likes", params={"projectId": project_id})

    @get_client
    async def record_project_view(self, client: httpx.AsyncClient, *, project_id: str) -> dict:
        logger.info(f"Recording view of project {project_id}")
        return await self._request(client, "POST", "/api/projects/views", params={"projectId": project_id})

    # -------------------------Resources------------------------- #

    @get_client
    async def list_resources(self, client: httpx.AsyncClient, *, resource: str, params: dict = None) -> dict:
        logger.info(f"Listing {resource}")
        return await self._request(client, "GET", resource_path(resource), params=params or {})

    @get_client
    async def get_resource(self, client: httpx.AsyncClient, *, resource: str, record_id: str) -> dict:
        logger.info(f"Fetching {resource}/{record_id}")
        return await self._request(client, "GET", f"{resource_path(resource)}/{record_id}")

    @get_client
    async def create_resource(self, client: httpx.AsyncClient, *, resource: str, payload: dict) -> dict:
        path = CREATE_PATHS.get(resource) or resource_path(resource)
        logger.info(f"Creating {resource} via {path}")
        return await self._request(client, "POST", path, json=payload)

    @get_client
    async def update_resource(self, client: httpx.AsyncClient, *, resource: str, record_id: str, payload: dict) -> dict:
        logger.info(f"Updating {resource}/{record_id}")
        return await self._request(client, "PUT", f"{resource_path(resource)}/{record_id}", json=payload)

    @get_client
    async def delete_resource(self, client: httpx.AsyncClient, *, resource: str, record_id: str) -> dict:
        logger.info(f"Deleting {resource}/{record_id}")
        return await self._request(client, "DELETE", f"{resource_path(resource)}/{record_id}")

    # -------------------------Admin------------------------- #

    @get_client
    async def get_site_settings(self, client: httpx.AsyncClient) -> dict:
        return await self._request(client, "GET", "/api/content/site-settings")

    @get_client
    async def update_site_settings(self, client: httpx.AsyncClient, *, settings: dict) -> dict:
        logger.info("Updating site settings")
        return await self._request(client, "POST", "/api/content/site-settings", json=settings)

    @get_client
    async def list_users(self, client: httpx.AsyncClient, *, search: str = None) -> dict:
        params = {"search": search} if search else {}
        return await self._request(client, "GET", "/api/admin/users", params=params)

    @get_client
    async def update_user_role(self, client: httpx.AsyncClient, *, user_id: str, role: str) -> dict:
        logger.info(f"Setting role of user {user_id} to {role}")
        return await self._request(client, "PATCH", "/api/admin/users", json={"userId": user_id, "role": role})

    @get_client
    async def get_admin_stats(self, client: httpx.AsyncClient) -> dict:
        return await self._request(client, "GET", "/api/admin/stats")
