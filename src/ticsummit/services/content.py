from loguru import logger

from ticsummit.drafts import Draft
from ticsummit.exceptions import DraftValidationError
from ticsummit.gateways.site_api import SiteAPI
from ticsummit.models import USER_ROLES


class ContentService:
    """Admin CRUD over the site's content resources."""

    def __init__(self, api: SiteAPI):
        self.api = api

    async def list(self, resource: str, **params) -> list[dict]:
        payload = await self.api.list_resources(resource=resource, params=params)
        return payload.get("data") or []

    async def get(self, resource: str, record_id: str) -> dict:
        payload = await self.api.get_resource(resource=resource, record_id=record_id)
        return payload.get("data") or {}

    async def create(self, draft: Draft) -> dict:
        """Validate ``draft`` and create it in its own resource."""
        draft.validate()
        payload = await self.api.create_resource(resource=draft.RESOURCE, payload=draft.to_payload())
        logger.info(f"Created {draft.RESOURCE} record")
        return payload.get("data") or {}

    async def update(self, record_id: str, draft: Draft) -> dict:
        draft.validate()
        payload = await self.api.update_resource(
            resource=draft.RESOURCE, record_id=record_id, payload=draft.to_payload()
        )
        return payload.get("data") or {}

    async def delete(self, resource: str, record_id: str) -> None:
        await self.api.delete_resource(resource=resource, record_id=record_id)

    async def set_user_role(self, user_id: str, role: str) -> dict:
        role = role.upper()
        if role not in USER_ROLES:
            raise DraftValidationError("role", f"must be one of {', '.join(USER_ROLES)}")
        payload = await self.api.update_user_role(user_id=user_id, role=role)
        return payload.get("data") or {}

    async def stats(self) -> dict:
        payload = await self.api.get_admin_stats()
        return payload.get("data") or {}

    async def site_settings(self) -> dict:
        payload = await self.api.get_site_settings()
        return payload.get("data") or {}

    async def save_site_settings(self, settings: dict) -> dict:
        payload = await self.api.update_site_settings(settings=settings)
        return payload.get("data") or {}
