from __future__ import annotations

import logging
from typing import Any

from azure.mgmt.sql.models import Database, FirewallRule, Server, ServerUpdate

from webapp_sql.models.sql import FirewallRuleItem, SqlDatabaseItem, SqlServerItem
from webapp_sql.services.lro import wait_until_completed


logger = logging.getLogger(__name__)


class SqlServiceError(RuntimeError):
    pass


class SqlService:
    """Azure SQL logical servers, databases and firewall rules.

    Wraps an async `SqlManagementClient`. Every create/update call waits for the
    long-running operation to finish before returning.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    async def create_server(
        self,
        *,
        resource_group_name: str,
        server_name: str,
        region: str,
        admin_login: str,
        admin_password: str,
    ) -> SqlServerItem:
        try:
            if not admin_login or not admin_password:
                raise ValueError("SQL administrator login and password must be provided")

            parameters = Server(
                location=region,
                administrator_login=admin_login,
                administrator_login_password=admin_password,
            )
            server = await wait_until_completed(
                self._client.servers.begin_create_or_update(resource_group_name, server_name, parameters),
                description=f"SQL server {server_name}",
            )
            return SqlServerItem.from_azure(server)
        except Exception as exc:
            logger.exception("SQL create_server failed (server=%s)", server_name)
            raise SqlServiceError(f"Failed to create SQL server (server={server_name})") from exc

    async def update_server(self, *, resource_group_name: str, server_name: str) -> SqlServerItem:
        """Apply an empty patch to the server and wait for it to settle."""

        try:
            server = await wait_until_completed(
                self._client.servers.begin_update(resource_group_name, server_name, ServerUpdate()),
                description=f"update of SQL server {server_name}",
            )
            return SqlServerItem.from_azure(server)
        except Exception as exc:
            logger.exception("SQL update_server failed (server=%s)", server_name)
            raise SqlServiceError(f"Failed to update SQL server (server={server_name})") from exc

    async def create_database(
        self,
        *,
        resource_group_name: str,
        server_name: str,
        database_name: str,
        region: str,
    ) -> SqlDatabaseItem:
        try:
            database = await wait_until_completed(
                self._client.databases.begin_create_or_update(
                    resource_group_name,
                    server_name,
                    database_name,
                    Database(location=region),
                ),
                description=f"SQL database {database_name}",
            )
            return SqlDatabaseItem.from_azure(database, server_name=server_name)
        except Exception as exc:
            logger.exception("SQL create_database failed (server=%s, database=%s)", server_name, database_name)
            raise SqlServiceError(
                f"Failed to create SQL database (server={server_name}, database={database_name})"
            ) from exc

    async def create_firewall_rule(
        self,
        *,
        resource_group_name: str,
        server_name: str,
        rule_name: str,
        start_ip_address: str,
        end_ip_address: str,
    ) -> FirewallRuleItem:
        """Create or replace a firewall rule. The IPs are passed through unchanged."""

        try:
            rule = await self._client.firewall_rules.create_or_update(
                resource_group_name,
                server_name,
                rule_name,
                FirewallRule(start_ip_address=start_ip_address, end_ip_address=end_ip_address),
            )
            return FirewallRuleItem.from_azure(rule)
        except Exception as exc:
            logger.exception("SQL create_firewall_rule failed (server=%s, rule=%s)", server_name, rule_name)
            raise SqlServiceError(
                f"Failed to create SQL firewall rule (server={server_name}, rule={rule_name})"
            ) from exc

    async def list_firewall_rules(self, *, resource_group_name: str, server_name: str) -> list[FirewallRuleItem]:
        try:
            return [
                FirewallRuleItem.from_azure(rule)
                async for rule in self._client.firewall_rules.list_by_server(resource_group_name, server_name)
            ]
        except Exception as exc:
            logger.exception("SQL list_firewall_rules failed (server=%s)", server_name)
            raise SqlServiceError(f"Failed to list SQL firewall rules (server={server_name})") from exc
