from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Optional

import aiohttp
from azure.core.pipeline.transport import AioHttpTransport
from azure.identity.aio import ClientSecretCredential
from azure.mgmt.resource.resources.aio import ResourceManagementClient
from azure.mgmt.sql.aio import SqlManagementClient
from azure.mgmt.web.aio import WebSiteManagementClient

from webapp_sql.services.config import AzureConfig, WorkflowConfig
from webapp_sql.services.resource_group_service import ResourceGroupService
from webapp_sql.services.setup.web_app_sql_setup_service import WebAppSqlSetupService
from webapp_sql.services.sql_service import SqlService
from webapp_sql.services.web_app_service import WebAppService


@dataclass(frozen=True)
class AzureClients:
    resource: ResourceManagementClient
    sql: SqlManagementClient
    web: WebSiteManagementClient


def _transport(session: aiohttp.ClientSession) -> AioHttpTransport:
    # The session belongs to the caller; clients must not close it.
    return AioHttpTransport(session=session, session_owner=False)


@asynccontextmanager
async def get_http_session() -> AsyncIterator[aiohttp.ClientSession]:
    """Shared HTTP session for every Azure client of one run."""

    async with aiohttp.ClientSession() as session:
        yield session


@asynccontextmanager
async def get_azure_clients(config: AzureConfig, *, session: aiohttp.ClientSession) -> AsyncIterator[AzureClients]:
    """Open the credential and management clients; all are closed on exit."""

    async with AsyncExitStack() as stack:
        credential = await stack.enter_async_context(
            ClientSecretCredential(
                tenant_id=config.tenant_id,
                client_id=config.client_id,
                client_secret=config.client_secret,
                transport=_transport(session),
            )
        )
        resource = await stack.enter_async_context(
            ResourceManagementClient(credential, config.subscription_id, transport=_transport(session))
        )
        sql = await stack.enter_async_context(
            SqlManagementClient(credential, config.subscription_id, transport=_transport(session))
        )
        web = await stack.enter_async_context(
            WebSiteManagementClient(credential, config.subscription_id, transport=_transport(session))
        )
        yield AzureClients(resource=resource, sql=sql, web=web)


def get_web_app_sql_setup_service(
    clients: AzureClients,
    *,
    config: WorkflowConfig,
    prompt: Optional[Callable[[str], object]] = input,
) -> WebAppSqlSetupService:
    """Dependency provider for the provisioning workflow."""

    return WebAppSqlSetupService(
        config=config,
        resource_groups=ResourceGroupService(clients.resource),
        sql=SqlService(clients.sql),
        web_apps=WebAppService(clients.web),
        prompt=prompt,
    )
