from __future__ import annotations

from pydantic import BaseModel

from webapp_sql.models.resource_group import ResourceGroupItem
from webapp_sql.models.sql import FirewallRuleItem, SqlDatabaseItem, SqlServerItem
from webapp_sql.models.web_app import AppServicePlanItem, AppSetting, WebAppItem


class ProvisioningResult(BaseModel):
    """Everything one provisioning run created, in creation order."""

    resource_group: ResourceGroupItem
    sql_server: SqlServerItem
    sql_database: SqlDatabaseItem
    app_service_plan: AppServicePlanItem
    web_app: WebAppItem
    app_settings: list[AppSetting]
    firewall_rule: FirewallRuleItem
