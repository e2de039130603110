from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from webapp_sql.models.provisioning import ProvisioningResult
from webapp_sql.models.resource_group import ResourceGroupItem
from webapp_sql.models.sql import FirewallRuleItem, SqlDatabaseItem, SqlServerItem
from webapp_sql.models.web_app import AppSetting, WebAppItem
from webapp_sql.services.config import WorkflowConfig
from webapp_sql.services.resource_group_service import ResourceGroupService
from webapp_sql.services.sql_service import SqlService
from webapp_sql.services.web_app_service import WebAppService


logger = logging.getLogger(__name__)


class ProvisioningError(RuntimeError):
    pass


class WebAppSqlSetupService:
    """Provision a web app wired to an Azure SQL database, then tear it all down.

    Steps, each waiting for its long-running operation before the next starts:

    1) Create the resource group.
    2) Create a SQL server with the configured admin login and password.
    3) Create a SQL database on that server.
    4) Create an App Service plan and a web app whose app settings carry the
       database host, name, user and password.
    5) Patch the SQL server and add a firewall rule spanning the web app's
       first..last outbound IP address.

    The resource group is deleted on every exit path. Nothing is retried, and
    child resources are never deleted one by one.
    """

    DB_HOST_SETTING = "ProjectNami.DBHost"
    DB_NAME_SETTING = "ProjectNami.DBName"
    DB_USER_SETTING = "ProjectNami.DBUser"
    DB_PASS_SETTING = "ProjectNami.DBPass"

    def __init__(
        self,
        *,
        config: WorkflowConfig,
        resource_groups: ResourceGroupService,
        sql: SqlService,
        web_apps: WebAppService,
        prompt: Optional[Callable[[str], object]] = input,
    ) -> None:
        self._config = config
        self._resource_groups = resource_groups
        self._sql = sql
        self._web_apps = web_apps
        self._prompt = prompt

    async def run(self) -> bool:
        """Public entry point: provision, wait for confirmation, clean up.

        Returns True if provisioning succeeded. Teardown failures are logged and do
        not change the result. Never raises.
        """

        try:
            await self.setup_web_app_sql_environment()
            return True
        except Exception:
            logger.exception("Provisioning failed; remaining steps were skipped")
            return False

    async def setup_web_app_sql_environment(self) -> ProvisioningResult:
        cfg = self._config

        async with self.resource_group_scope() as group:
            server = await self._create_sql_server(group=group)
            database = await self._create_sql_database(group=group, server=server)

            app_settings = self.connection_app_settings(server=server, database=database)
            logger.info("Creating web app %s...", cfg.app_name)
            plan = await self._web_apps.create_app_service_plan(
                resource_group_name=group.name,
                plan_name=cfg.app_service_plan_name,
                region=cfg.region,
                sku_name=cfg.app_service_plan_sku,
            )
            web_app = await self._web_apps.create_web_app(
                resource_group_name=group.name,
                app_name=cfg.app_name,
                region=cfg.region,
                app_settings=app_settings,
                server_farm_id=plan.id,
                net_framework_version=cfg.net_framework_version,
                php_version=cfg.php_version,
            )
            logger.info("Created web app %s", web_app.name)
            logger.info("%s", self.describe_web_app(web_app))

            firewall_rule = await self._allow_web_app_access(group=group, server=server, web_app=web_app)

            rules = await self._sql.list_firewall_rules(resource_group_name=group.name, server_name=server.name)
            logger.info("%s", self.describe_sql_server(server, firewall_rules=rules))

            logger.info("Your WordPress app is ready.")
            await self._wait_for_confirmation(
                f"Please navigate to http://{cfg.app_url} to finish the GUI setup. Press enter to exit."
            )

            return ProvisioningResult(
                resource_group=group,
                sql_server=server,
                sql_database=database,
                app_service_plan=plan,
                web_app=web_app,
                app_settings=app_settings,
                firewall_rule=firewall_rule,
            )

    @asynccontextmanager
    async def resource_group_scope(self) -> AsyncIterator[ResourceGroupItem]:
        """Create the resource group and guarantee its release when the block exits."""

        group: Optional[ResourceGroupItem] = None
        try:
            group = await self._resource_groups.create_or_update(
                name=self._config.resource_group_name,
                region=self._config.region,
            )
            logger.info("Created resource group %s in %s", group.name, group.location)
            yield group
        finally:
            await self.release_resource_group(group)

    async def release_resource_group(self, group: Optional[ResourceGroupItem]) -> None:
        """Delete `group` and wait for the deletion. Errors are logged, never raised."""

        if group is None:
            logger.info("Did not create any resources in Azure. No clean up is necessary")
            return

        try:
            logger.info("Deleting Resource Group: %s", group.name)
            await self._resource_groups.delete(name=group.name)
            logger.info("Deleted Resource Group: %s", group.name)
            if await self._resource_groups.exists(name=group.name):
                logger.warning("Resource group %s still exists after deletion", group.name)
        except Exception:
            logger.exception("Failed to delete resource group %s; it may need manual clean up", group.name)

    def connection_app_settings(self, *, server: SqlServerItem, database: SqlDatabaseItem) -> list[AppSetting]:
        if not server.fully_qualified_domain_name:
            raise ProvisioningError(f"SQL server {server.name} has no fully qualified domain name")

        return [
            AppSetting(name=self.DB_HOST_SETTING, value=server.fully_qualified_domain_name),
            AppSetting(name=self.DB_NAME_SETTING, value=database.name),
            AppSetting(name=self.DB_USER_SETTING, value=self._config.admin_login),
            AppSetting(name=self.DB_PASS_SETTING, value=self._config.admin_password),
        ]

    @staticmethod
    def firewall_range(web_app: WebAppItem) -> tuple[str, str]:
        """First and last outbound IP, taken verbatim (no sorting, no validation)."""

        ips = web_app.outbound_ip_addresses
        if not ips:
            raise ProvisioningError(f"Web app {web_app.name} reported no outbound IP addresses")
        return (ips[0], ips[-1])

    @staticmethod
    def describe_web_app(web_app: WebAppItem) -> str:
        lines = [
            f"Web app: {web_app.id or web_app.name}",
            f"\tName: {web_app.name}",
            f"\tRegion: {web_app.location}",
            f"\tState: {web_app.state}",
            f"\tDefault hostname: {web_app.default_host_name}",
            f"\tOutbound IP addresses: {', '.join(web_app.outbound_ip_addresses)}",
        ]
        return "\n".join(lines)

    @staticmethod
    def describe_sql_server(server: SqlServerItem, *, firewall_rules: list[FirewallRuleItem]) -> str:
        lines = [
            f"SQL server: {server.id or server.name}",
            f"\tName: {server.name}",
            f"\tRegion: {server.location}",
            f"\tFully qualified domain name: {server.fully_qualified_domain_name}",
            f"\tAdministrator login: {server.administrator_login}",
            f"\tFirewall rules: {len(firewall_rules)}",
        ]
        for rule in firewall_rules:
            lines.append(f"\t\t{rule.name}: {rule.start_ip_address} - {rule.end_ip_address}")
        return "\n".join(lines)

    # -----------------
    # Private helpers
    # -----------------

    async def _create_sql_server(self, *, group: ResourceGroupItem) -> SqlServerItem:
        cfg = self._config
        logger.info("Creating SQL server %s...", cfg.sql_server_name)
        server = await self._sql.create_server(
            resource_group_name=group.name,
            server_name=cfg.sql_server_name,
            region=cfg.region,
            admin_login=cfg.admin_login,
            admin_password=cfg.admin_password,
        )
        logger.info("Created SQL server %s", server.name)
        return server

    async def _create_sql_database(self, *, group: ResourceGroupItem, server: SqlServerItem) -> SqlDatabaseItem:
        cfg = self._config
        logger.info("Creating SQL database %s...", cfg.sql_db_name)
        database = await self._sql.create_database(
            resource_group_name=group.name,
            server_name=server.name,
            database_name=cfg.sql_db_name,
            region=cfg.region,
        )
        logger.info("Created SQL database %s", database.name)
        return database

    async def _allow_web_app_access(
        self,
        *,
        group: ResourceGroupItem,
        server: SqlServerItem,
        web_app: WebAppItem,
    ) -> FirewallRuleItem:
        cfg = self._config
        logger.info("Allowing web app %s to access SQL server...", web_app.name)

        await self._sql.update_server(resource_group_name=group.name, server_name=server.name)
        start_ip, end_ip = self.firewall_range(web_app)
        rule = await self._sql.create_firewall_rule(
            resource_group_name=group.name,
            server_name=server.name,
            rule_name=cfg.firewall_rule_name,
            start_ip_address=start_ip,
            end_ip_address=end_ip,
        )

        logger.info("Firewall rules added for web app %s", web_app.name)
        return rule

    async def _wait_for_confirmation(self, message: str) -> None:
        logger.info("%s", message)
        if self._prompt is None:
            return

        try:
            await self._read_confirmation(self._prompt)
        except EOFError:
            logger.info("No interactive input available; continuing with clean up")

    @staticmethod
    async def _read_confirmation(prompt: Callable[[str], object]) -> None:
        # Daemon thread: a cancelled run must not wait for a blocked input() on shutdown.
        loop = asyncio.get_running_loop()
        done: "asyncio.Future[None]" = loop.create_future()

        def _settle(error: Optional[Exception]) -> None:
            if done.done():
                return
            if error is None:
                done.set_result(None)
            else:
                done.set_exception(error)

        def _read() -> None:
            error: Optional[Exception] = None
            try:
                prompt("")
            except Exception as exc:
                error = exc
            if not loop.is_closed():
                loop.call_soon_threadsafe(_settle, error)

        threading.Thread(target=_read, name="confirmation-prompt", daemon=True).start()
        await done
