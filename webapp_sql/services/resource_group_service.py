from __future__ import annotations

import logging
from typing import Any

from azure.mgmt.resource.resources.models import ResourceGroup

from webapp_sql.models.resource_group import ResourceGroupItem
from webapp_sql.services.lro import wait_until_completed


logger = logging.getLogger(__name__)


class ResourceGroupServiceError(RuntimeError):
    pass


class ResourceGroupService:
    """Resource group lifecycle on top of an async `ResourceManagementClient`."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @staticmethod
    def _validate_name(name: str) -> None:
        if not name or not name.strip():
            raise ValueError("resource group name must be provided")

    async def create_or_update(self, *, name: str, region: str) -> ResourceGroupItem:
        """Create the group, or return the existing one with the same name."""

        try:
            self._validate_name(name)
            group = await self._client.resource_groups.create_or_update(name, ResourceGroup(location=region))
            return ResourceGroupItem.from_azure(group)
        except Exception as exc:
            logger.exception("Resource group create_or_update failed (name=%s)", name)
            raise ResourceGroupServiceError(f"Failed to create resource group (name={name})") from exc

    async def exists(self, *, name: str) -> bool:
        try:
            self._validate_name(name)
            return bool(await self._client.resource_groups.check_existence(name))
        except Exception as exc:
            logger.exception("Resource group exists check failed (name=%s)", name)
            raise ResourceGroupServiceError(f"Failed checking resource group exists (name={name})") from exc

    async def delete(self, *, name: str) -> None:
        """Delete the group and everything in it; returns once the deletion completed."""

        try:
            self._validate_name(name)
            await wait_until_completed(
                self._client.resource_groups.begin_delete(name),
                description=f"deletion of resource group {name}",
            )
        except Exception as exc:
            logger.exception("Resource group delete failed (name=%s)", name)
            raise ResourceGroupServiceError(f"Failed to delete resource group (name={name})") from exc
