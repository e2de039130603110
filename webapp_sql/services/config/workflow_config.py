from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from webapp_sql.services.naming import create_password, create_random_name


@dataclass(frozen=True)
class WorkflowConfig:
    """Names and values threaded through one provisioning run.

    Everything that used to be a process-wide constant (admin login, generated
    password) lives here so callers and tests can inject deterministic values.
    """

    region: str
    resource_group_name: str
    sql_server_name: str
    sql_db_name: str
    app_name: str
    firewall_rule_name: str
    admin_password: str
    admin_login: str = "jsdkadmin"
    app_service_plan_sku: str = "S1"
    net_framework_version: str = "v4.6"
    php_version: str = "5.6"

    APP_HOST_SUFFIX: ClassVar[str] = ".azurewebsites.net"
    DEFAULT_REGION: ClassVar[str] = "eastus"

    @staticmethod
    def generate(*, region: str = DEFAULT_REGION, admin_login: str = "jsdkadmin") -> "WorkflowConfig":
        return WorkflowConfig(
            region=region,
            resource_group_name=create_random_name("rg1NEMV_"),
            sql_server_name=create_random_name("jsdkserver"),
            sql_db_name=create_random_name("jsdkdb"),
            app_name=create_random_name("webapp1"),
            firewall_rule_name=create_random_name("firewall_"),
            admin_password=create_password(),
            admin_login=admin_login,
        )

    @property
    def app_service_plan_name(self) -> str:
        return f"{self.app_name}-plan"

    @property
    def app_url(self) -> str:
        return f"{self.app_name}{self.APP_HOST_SUFFIX}"

    def __repr__(self) -> str:
        return (
            f"WorkflowConfig(region={self.region!r}, resource_group_name={self.resource_group_name!r}, "
            f"sql_server_name={self.sql_server_name!r}, sql_db_name={self.sql_db_name!r}, "
            f"app_name={self.app_name!r}, firewall_rule_name={self.firewall_rule_name!r}, "
            f"admin_login={self.admin_login!r}, admin_password='***')"
        )
