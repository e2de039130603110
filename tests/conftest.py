from __future__ import annotations

from types import SimpleNamespace
from typing import Any, AsyncIterator, Optional

import pytest
from azure.core.exceptions import ResourceNotFoundError

from webapp_sql.services.config import WorkflowConfig
from webapp_sql.services.resource_group_service import ResourceGroupService
from webapp_sql.services.setup.web_app_sql_setup_service import WebAppSqlSetupService
from webapp_sql.services.sql_service import SqlService
from webapp_sql.services.web_app_service import WebAppService


class FakePoller:
    def __init__(self, on_result: Any) -> None:
        self._on_result = on_result
        self._done = False

    def status(self) -> str:
        return "Succeeded" if self._done else "InProgress"

    async def result(self) -> Any:
        value = self._on_result()
        self._done = True
        return value


class FakeAzure:
    """In-memory subset of Azure Resource Manager used by the sample.

    Resource groups own every child resource; deleting a group drops them all.
    `fail_on` makes the named operation raise instead of doing anything.
    """

    def __init__(self, outbound_ip_addresses: str = "20.1.1.3,20.1.1.1,20.1.1.2") -> None:
        self.groups: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.outbound_ip_addresses = outbound_ip_addresses
        self.last_site_parameters: Optional[Any] = None

        self.resource = SimpleNamespace(resource_groups=_ResourceGroups(self))
        self.sql = SimpleNamespace(
            servers=_Servers(self),
            databases=_Databases(self),
            firewall_rules=_FirewallRules(self),
        )
        self.web = SimpleNamespace(app_service_plans=_AppServicePlans(self), web_apps=_WebApps(self))

    def add_group(self, name: str, location: str = "eastus") -> None:
        self.groups[name] = {
            "group": SimpleNamespace(
                id=f"/subscriptions/sub-1/resourceGroups/{name}",
                name=name,
                location=location,
                properties=SimpleNamespace(provisioning_state="Succeeded"),
            ),
            "servers": {},
            "plans": {},
            "sites": {},
        }

    def fail_on(self, operation: str, exc: Optional[Exception] = None) -> None:
        self.failures[operation] = exc or RuntimeError(f"injected failure: {operation}")

    def record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failures:
            raise self.failures[operation]

    def group(self, name: str) -> dict[str, Any]:
        if name not in self.groups:
            raise ResourceNotFoundError(f"Resource group '{name}' could not be found.")
        return self.groups[name]

    def server(self, group_name: str, server_name: str) -> dict[str, Any]:
        servers = self.group(group_name)["servers"]
        if server_name not in servers:
            raise ResourceNotFoundError(f"Server '{server_name}' not found.")
        return servers[server_name]

    def resource_id(self, group_name: str, kind: str, name: str) -> str:
        return f"/subscriptions/sub-1/resourceGroups/{group_name}/providers/{kind}/{name}"


class _ResourceGroups:
    def __init__(self, fake: FakeAzure) -> None:
        self._fake = fake

    async def create_or_update(self, name: str, parameters: Any) -> Any:
        self._fake.record("resource_groups.create_or_update")
        if name not in self._fake.groups:
            self._fake.add_group(name, parameters.location)
        return self._fake.groups[name]["group"]

    async def check_existence(self, name: str) -> bool:
        self._fake.record("resource_groups.check_existence")
        return name in self._fake.groups

    async def begin_delete(self, name: str) -> FakePoller:
        self._fake.record("resource_groups.begin_delete")
        self._fake.group(name)

        def _delete() -> None:
            self._fake.groups.pop(name, None)

        return FakePoller(_delete)


class _Servers:
    def __init__(self, fake: FakeAzure) -> None:
        self._fake = fake

    async def begin_create_or_update(self, group_name: str, server_name: str, parameters: Any) -> FakePoller:
        self._fake.record("servers.begin_create_or_update")
        group = self._fake.group(group_name)

        def _create() -> Any:
            server = SimpleNamespace(
                id=self._fake.resource_id(group_name, "Microsoft.Sql/servers", server_name),
                name=server_name,
                location=parameters.location,
                administrator_login=parameters.administrator_login,
                fully_qualified_domain_name=f"{server_name}.database.windows.net",
                state="Ready",
            )
            group["servers"][server_name] = {
                "server": server,
                "password": parameters.administrator_login_password,
                "databases": {},
                "firewall_rules": {},
            }
            return server

        return FakePoller(_create)

    async def begin_update(self, group_name: str, server_name: str, parameters: Any) -> FakePoller:
        self._fake.record("servers.begin_update")
        entry = self._fake.server(group_name, server_name)
        return FakePoller(lambda: entry["server"])


class _Databases:
    def __init__(self, fake: FakeAzure) -> None:
        self._fake = fake

    async def begin_create_or_update(
        self, group_name: str, server_name: str, database_name: str, parameters: Any
    ) -> FakePoller:
        self._fake.record("databases.begin_create_or_update")
        entry = self._fake.server(group_name, server_name)

        def _create() -> Any:
            database = SimpleNamespace(
                id=self._fake.resource_id(group_name, "Microsoft.Sql/servers/databases", database_name),
                name=database_name,
                location=parameters.location,
                status="Online",
            )
            entry["databases"][database_name] = database
            return database

        return FakePoller(_create)


class _FirewallRules:
    def __init__(self, fake: FakeAzure) -> None:
        self._fake = fake

    async def create_or_update(self, group_name: str, server_name: str, rule_name: str, parameters: Any) -> Any:
        self._fake.record("firewall_rules.create_or_update")
        entry = self._fake.server(group_name, server_name)
        rule = SimpleNamespace(
            id=self._fake.resource_id(group_name, "Microsoft.Sql/servers/firewallRules", rule_name),
            name=rule_name,
            start_ip_address=parameters.start_ip_address,
            end_ip_address=parameters.end_ip_address,
        )
        entry["firewall_rules"][rule_name] = rule
        return rule

    async def list_by_server(self, group_name: str, server_name: str) -> AsyncIterator[Any]:
        self._fake.record("firewall_rules.list_by_server")
        for rule in list(self._fake.server(group_name, server_name)["firewall_rules"].values()):
            yield rule


class _AppServicePlans:
    def __init__(self, fake: FakeAzure) -> None:
        self._fake = fake

    async def begin_create_or_update(self, group_name: str, plan_name: str, parameters: Any) -> FakePoller:
        self._fake.record("app_service_plans.begin_create_or_update")
        group = self._fake.group(group_name)

        def _create() -> Any:
            plan = SimpleNamespace(
                id=self._fake.resource_id(group_name, "Microsoft.Web/serverfarms", plan_name),
                name=plan_name,
                location=parameters.location,
                sku=SimpleNamespace(name=parameters.sku.name),
            )
            group["plans"][plan_name] = plan
            return plan

        return FakePoller(_create)


class _WebApps:
    def __init__(self, fake: FakeAzure) -> None:
        self._fake = fake

    async def begin_create_or_update(self, group_name: str, app_name: str, parameters: Any) -> FakePoller:
        self._fake.record("web_apps.begin_create_or_update")
        group = self._fake.group(group_name)
        self._fake.last_site_parameters = parameters

        def _create() -> Any:
            site = SimpleNamespace(
                id=self._fake.resource_id(group_name, "Microsoft.Web/sites", app_name),
                name=app_name,
                location=parameters.location,
                state="Running",
                default_host_name=f"{app_name}.azurewebsites.net",
                outbound_ip_addresses=self._fake.outbound_ip_addresses,
            )
            group["sites"][app_name] = site
            return site

        return FakePoller(_create)


@pytest.fixture
def fake_azure() -> FakeAzure:
    return FakeAzure()


@pytest.fixture
def workflow_config() -> WorkflowConfig:
    return WorkflowConfig(
        region="eastus",
        resource_group_name="rg1NEMV_test",
        sql_server_name="jsdkservertest",
        sql_db_name="jsdkdbtest",
        app_name="webapp1test",
        firewall_rule_name="firewall_test",
        admin_password="Str0ng!Passw0rd",
    )


@pytest.fixture
def setup_service(fake_azure: FakeAzure, workflow_config: WorkflowConfig) -> WebAppSqlSetupService:
    return WebAppSqlSetupService(
        config=workflow_config,
        resource_groups=ResourceGroupService(fake_azure.resource),
        sql=SqlService(fake_azure.sql),
        web_apps=WebAppService(fake_azure.web),
        prompt=None,
    )
